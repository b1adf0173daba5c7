"""
配置管理系统

支持YAML/JSON格式配置文件，提供默认配置和用户配置合并，支持环境变量覆盖。
"""

import copy
import os
import yaml
import json
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)


class ConfigManager:
    """配置管理器"""

    def __init__(
        self,
        config_path: Optional[str] = None,
        default_config: Optional[Dict[str, Any]] = None,
        env_prefix: str = "ONEPROMPT_",
    ):
        """
        初始化配置管理器

        Args:
            config_path: 用户配置文件路径，如为None则自动查找
            default_config: 默认配置字典，如为None则使用内置默认配置
            env_prefix: 环境变量前缀
        """
        self.config_path = config_path
        self.env_prefix = env_prefix
        self.config: Dict[str, Any] = {}
        self.default_config = default_config or self._get_default_config()

        self.load()

    def _get_default_config(self) -> Dict[str, Any]:
        """获取内置默认配置"""
        return {
            "logging": {
                "level": "WARNING",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "file_path": "",
                "max_file_size": 10485760,
                "backup_count": 5,
            },
            "xml": {
                "indent": 2,
            },
            "cli": {
                "output_format": "json",
            },
        }

    def load(self) -> bool:
        """
        加载配置

        Returns:
            加载是否成功
        """
        try:
            self.config = copy.deepcopy(self.default_config)

            user_config = self._load_user_config()
            if user_config:
                self._merge_configs(self.config, user_config)

            self._load_from_env()

            logger.debug(f"配置加载完成，用户配置文件: {self.config_path or '无'}")
            return True

        except Exception as e:
            logger.error(f"加载配置失败: {e}")
            self.config = copy.deepcopy(self.default_config)
            return False

    def _load_user_config(self) -> Optional[Dict[str, Any]]:
        """加载用户配置文件"""
        config_paths = []

        if self.config_path:
            config_paths.append(self.config_path)

        config_paths.extend([
            "./oneprompt.yaml",
            "./oneprompt.yml",
            "./oneprompt.json",
            "~/.config/oneprompt/config.yaml",
        ])

        for path in config_paths:
            expanded_path = os.path.expanduser(path)
            if os.path.exists(expanded_path):
                self.config_path = expanded_path
                return self._read_config_file(expanded_path)

        return None

    def _read_config_file(self, filepath: str) -> Optional[Dict[str, Any]]:
        """读取配置文件"""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                if filepath.endswith('.json'):
                    return json.load(f)
                else:  # yaml/yml
                    return yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"读取配置文件失败 {filepath}: {e}")
            return None

    def _merge_configs(self, base: Dict[str, Any], overlay: Dict[str, Any]) -> None:
        """递归合并配置字典"""
        for key, value in overlay.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_configs(base[key], value)
            else:
                base[key] = value

    def _load_from_env(self) -> None:
        """从环境变量加载配置"""
        env_vars = {
            "LOG_LEVEL": "logging.level",
            "LOG_FORMAT": "logging.format",
            "LOG_FILE_PATH": "logging.file_path",
            "XML_INDENT": "xml.indent",
            "OUTPUT_FORMAT": "cli.output_format",
        }

        for env_key, config_path in env_vars.items():
            value = os.getenv(f"{self.env_prefix}{env_key}")
            if value is not None:
                self._set_nested_config(self.config, config_path, value)

    def _set_nested_config(self, config: Dict[str, Any], path: str, value: Any) -> None:
        """设置嵌套配置值"""
        keys = path.split('.')
        current = config
        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        # 按已有值的类型转换
        last_key = keys[-1]
        if isinstance(current.get(last_key), bool):
            value = str(value).lower() in ('true', '1', 'yes', 'y')
        elif isinstance(current.get(last_key), int):
            try:
                value = int(value)
            except ValueError:
                logger.warning(f"配置 {path} 需要整数，忽略取值: {value}")
                return

        current[last_key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        获取配置值

        Args:
            key: 配置键，支持点号分隔（如 "logging.level"）
            default: 默认值

        Returns:
            配置值
        """
        try:
            current = self.config
            for k in key.split('.'):
                current = current[k]
            return current
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """
        设置配置值

        Args:
            key: 配置键，支持点号分隔
            value: 配置值
        """
        self._set_nested_config(self.config, key, value)
        logger.debug(f"设置配置 {key} = {value}")

    def save(self, filepath: Optional[str] = None) -> bool:
        """
        保存配置到文件

        Args:
            filepath: 文件路径，如为None则使用当前配置文件路径

        Returns:
            保存是否成功
        """
        path = filepath or self.config_path
        if not path:
            logger.error("未指定配置文件路径")
            return False

        try:
            directory = os.path.dirname(path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            with open(path, 'w', encoding='utf-8') as f:
                if path.endswith('.json'):
                    json.dump(self.config, f, indent=2, ensure_ascii=False)
                else:
                    yaml.dump(self.config, f, default_flow_style=False, allow_unicode=True)

            logger.info(f"配置已保存到: {path}")
            return True

        except OSError as e:
            logger.error(f"保存配置失败: {e}")
            return False

    def get_all(self) -> Dict[str, Any]:
        """获取所有配置"""
        return copy.deepcopy(self.config)


# 全局配置管理器实例
_config_manager: Optional[ConfigManager] = None


def get_config_manager(
    config_path: Optional[str] = None,
    reload: bool = False,
) -> ConfigManager:
    """
    获取全局配置管理器实例

    Args:
        config_path: 配置文件路径
        reload: 是否重新加载

    Returns:
        配置管理器实例
    """
    global _config_manager

    if _config_manager is None or reload:
        _config_manager = ConfigManager(config_path)

    return _config_manager


def get_config(key: str, default: Any = None) -> Any:
    """
    获取配置值（快捷函数）

    Args:
        key: 配置键
        default: 默认值

    Returns:
        配置值
    """
    return get_config_manager().get(key, default)
