"""
配置管理器

负责加载、保存和管理各种配置。
"""

import json
import logging
from dataclasses import asdict, fields, replace
from pathlib import Path
from typing import Dict, Any, Type, TypeVar

import yaml

from .model_config import (
    AIConfig, GameConfig, SystemConfig,
    DEFAULT_AI_CONFIG, DEFAULT_GAME_CONFIG, DEFAULT_SYSTEM_CONFIG
)
from ..utils.exceptions import ConfigurationError

T = TypeVar('T')

logger = logging.getLogger(__name__)

VALID_COLORS = ('RED', 'BLACK')
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigManager:
    """
    配置管理器

    每类配置保存为一个YAML文件，文件缺失或损坏时使用默认配置。
    """

    def __init__(self, config_dir: str = "configs"):
        """
        初始化配置管理器

        Args:
            config_dir: 配置文件目录
        """
        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.config_files = {
            'ai': self.config_dir / 'ai_config.yaml',
            'game': self.config_dir / 'game_config.yaml',
            'system': self.config_dir / 'system_config.yaml'
        }

        self.default_configs = {
            'ai': DEFAULT_AI_CONFIG,
            'game': DEFAULT_GAME_CONFIG,
            'system': DEFAULT_SYSTEM_CONFIG
        }

        self.config_types = {
            'ai': AIConfig,
            'game': GameConfig,
            'system': SystemConfig
        }

        self._initialize_default_configs()

    def _initialize_default_configs(self):
        """初始化默认配置文件"""
        for config_name, config_obj in self.default_configs.items():
            config_file = self.config_files[config_name]
            if not config_file.exists():
                self.save_config(config_name, config_obj)
                logger.info(f"创建默认配置文件: {config_file}")

    def _check_name(self, config_name: str):
        if config_name not in self.config_types:
            raise ConfigurationError(config_name, "未知的配置名称")

    def load_config(self, config_name: str, config_class: Type[T]) -> T:
        """
        加载配置

        Args:
            config_name: 配置名称
            config_class: 配置类

        Returns:
            配置对象
        """
        self._check_name(config_name)
        config_file = self.config_files[config_name]
        if not config_file.exists():
            logger.warning(f"配置文件不存在: {config_file}，使用默认配置")
            return replace(self.default_configs[config_name])

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}

            config = self._dict_to_dataclass(data, config_class)
            logger.debug(f"成功加载配置: {config_file}")
            return config

        except (OSError, yaml.YAMLError, TypeError, AttributeError) as e:
            logger.error(f"加载配置文件失败: {config_file}, 错误: {e}")
            return replace(self.default_configs[config_name])

    def save_config(self, config_name: str, config_obj: Any):
        """
        保存配置

        Args:
            config_name: 配置名称
            config_obj: 配置对象
        """
        self._check_name(config_name)
        config_file = self.config_files[config_name]

        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self._to_plain_dict(config_obj), f, default_flow_style=False,
                           allow_unicode=True, indent=2)

        logger.debug(f"成功保存配置: {config_file}")

    def get_ai_config(self) -> AIConfig:
        """获取AI配置"""
        return self.load_config('ai', AIConfig)

    def get_game_config(self) -> GameConfig:
        """获取对局配置"""
        return self.load_config('game', GameConfig)

    def get_system_config(self) -> SystemConfig:
        """获取系统配置"""
        return self.load_config('system', SystemConfig)

    def update_config(self, config_name: str, **kwargs):
        """
        更新配置

        Args:
            config_name: 配置名称
            **kwargs: 要更新的配置项
        """
        self._check_name(config_name)
        config = self.load_config(config_name, self.config_types[config_name])

        for key, value in kwargs.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.warning(f"配置项不存在: {key}")

        self.save_config(config_name, config)

    def reset_config(self, config_name: str):
        """
        重置配置为默认值

        Args:
            config_name: 配置名称
        """
        self._check_name(config_name)
        self.save_config(config_name, self.default_configs[config_name])
        logger.info(f"配置已重置为默认值: {config_name}")

    def validate_config(self, config_name: str) -> bool:
        """
        验证配置的有效性

        Args:
            config_name: 配置名称

        Returns:
            bool: 配置是否有效

        Raises:
            ConfigurationError: 配置名称未知
        """
        self._check_name(config_name)
        config = self.load_config(config_name, self.config_types[config_name])

        if config_name == 'ai':
            return (config.ai_color in VALID_COLORS and
                    isinstance(config.max_depth, int) and config.max_depth >= 1)
        elif config_name == 'game':
            x, y = config.cursor_start
            return (config.first_player in VALID_COLORS and
                    0 <= x <= 8 and 0 <= y <= 9)
        elif config_name == 'system':
            return (config.log_level.upper() in VALID_LOG_LEVELS and
                    config.log_max_size > 0 and
                    config.log_backup_count >= 0)

        return True

    def get_all_configs(self) -> Dict[str, Any]:
        """
        获取所有配置

        Returns:
            Dict[str, Any]: 所有配置的字典
        """
        return {
            config_name: self.load_config(config_name, config_class)
            for config_name, config_class in self.config_types.items()
        }

    def export_configs(self, export_path: str):
        """
        导出所有配置到文件，按扩展名选择YAML或JSON

        Args:
            export_path: 导出文件路径
        """
        export_data = {
            config_name: self._to_plain_dict(config_obj)
            for config_name, config_obj in self.get_all_configs().items()
        }

        export_file = Path(export_path)
        with open(export_file, 'w', encoding='utf-8') as f:
            if export_file.suffix in ('.yaml', '.yml'):
                yaml.safe_dump(export_data, f, default_flow_style=False,
                               allow_unicode=True, indent=2)
            else:
                json.dump(export_data, f, ensure_ascii=False, indent=2)

        logger.info(f"配置已导出到: {export_path}")

    @staticmethod
    def _to_plain_dict(config_obj: Any) -> Dict[str, Any]:
        """转换为可安全序列化的字典（元组转为列表）"""
        return {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in asdict(config_obj).items()
        }

    def _dict_to_dataclass(self, data: Dict[str, Any], dataclass_type: Type[T]) -> T:
        """
        将字典转换为数据类对象，忽略未知字段

        Args:
            data: 字典数据
            dataclass_type: 数据类类型

        Returns:
            数据类对象
        """
        field_names = {f.name for f in fields(dataclass_type)}
        filtered_data = {k: v for k, v in data.items() if k in field_names}
        return dataclass_type(**filtered_data)
