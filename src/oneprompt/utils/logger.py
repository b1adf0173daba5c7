"""
日志模块

控制台与可选的轮转文件日志。
"""

import os
import sys
import logging
import logging.handlers
from typing import Optional

from ..config.config_manager import get_config


def setup_logger(
    name: str = "oneprompt",
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """
    设置日志记录器

    Args:
        name: 日志记录器名称
        level: 日志级别，如为None则从配置读取
        log_file: 日志文件路径，如为None则从配置读取，空字符串表示不写文件
        max_file_size: 日志文件最大大小（字节）
        backup_count: 备份文件数量

    Returns:
        配置好的日志记录器
    """
    config = get_config("logging", {})
    if level is None:
        level = config.get("level", "WARNING")
    if log_file is None:
        log_file = config.get("file_path", "")
    if "max_file_size" in config:
        max_file_size = config["max_file_size"]
    if "backup_count" in config:
        backup_count = config["backup_count"]

    log_level = getattr(logging, str(level).upper(), logging.WARNING)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # 移除现有处理器，避免重复
    logger.handlers.clear()

    formatter = logging.Formatter(config.get(
        "format",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))

    # 渲染结果写到 stdout，日志走 stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    logger.addHandler(console_handler)

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_file_size,
                backupCount=backup_count,
                encoding='utf-8',
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(log_level)
            logger.addHandler(file_handler)

            logger.debug(f"日志文件处理器已设置: {log_file} (最大大小: {max_file_size} bytes, 备份数: {backup_count})")
        except OSError as e:
            logger.error(f"设置日志文件处理器失败: {e}")

    logger.propagate = False

    return logger
