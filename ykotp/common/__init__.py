# Common utilities
from ykotp.common.config import Config as Config
from ykotp.common.crypto import CryptoUtils as CryptoUtils
from ykotp.common.logging_utils import setup_logger as setup_logger

__all__ = ["Config", "CryptoUtils", "setup_logger"]
