"""
工具层 - 日志、AOP装饰器和正则模式
"""

from .logger import logger, setup_logging
from .decorators import log_render, run_with_timeout, with_timeout
from . import regex_patterns

__all__ = ["logger", "setup_logging", "log_render", "run_with_timeout", "with_timeout", "regex_patterns"]
