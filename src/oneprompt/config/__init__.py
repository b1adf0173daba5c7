"""
配置模块
"""

from .config_manager import ConfigManager, get_config_manager, get_config

__all__ = ["ConfigManager", "get_config_manager", "get_config"]
