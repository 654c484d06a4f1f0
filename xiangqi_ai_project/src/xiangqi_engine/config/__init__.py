"""
配置管理模块

包含AI配置、对局配置和系统配置。
"""

from .config_manager import ConfigManager
from .model_config import AIConfig, GameConfig, SystemConfig

__all__ = ['ConfigManager', 'AIConfig', 'GameConfig', 'SystemConfig']
