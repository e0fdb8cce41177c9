"""
工具层 - 共享日志对象
所有模块通过 `from ..utils.logger import logger` 获取同一个 logger
"""

import logging

LOGGER_NAME = "content_previewer"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(level: int = logging.INFO) -> None:
    """为命令行入口配置日志输出"""
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False
