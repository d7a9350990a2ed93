"""Utility functions and helpers"""

from .error_handler import ErrorCategory, FioError, classify_response, parse_xml_error
from .config_manager import ConfigManager
from .csv_writer import TransactionCSVWriter

__all__ = [
    'ErrorCategory',
    'FioError',
    'classify_response',
    'parse_xml_error',
    'ConfigManager',
    'TransactionCSVWriter',
]
