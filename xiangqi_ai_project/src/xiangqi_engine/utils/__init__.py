"""
工具模块

包含日志和异常定义。
"""

from .logger import (
    setup_logger, setup_logger_from_config, get_logger,
    LoggerMixin, PerformanceLogger, performance_logger
)
from .exceptions import XiangqiError, ConfigurationError, GameStateError

__all__ = [
    'setup_logger', 'setup_logger_from_config', 'get_logger',
    'LoggerMixin', 'PerformanceLogger', 'performance_logger',
    'XiangqiError', 'ConfigurationError', 'GameStateError'
]
