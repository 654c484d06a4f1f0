"""
配置数据结构

定义AI、对局和系统配置类及默认参数。
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class AIConfig:
    """AI引擎配置"""
    ai_color: str = 'BLACK'             # AI执子颜色 ('RED', 'BLACK')
    max_depth: int = 3                  # 搜索深度(半回合数)
    use_randomization: bool = True      # 是否打乱走法顺序
    seed: Optional[int] = None          # 随机种子，None表示不固定


@dataclass
class GameConfig:
    """对局配置"""
    first_player: str = 'RED'                       # 先手方
    cursor_start: Tuple[int, int] = (4, 4)          # 光标初始位置
    enforce_flying_general: bool = False            # 是否启用将帅照面规则
    use_unicode_symbols: bool = False               # 是否使用Unicode象棋符号

    def __post_init__(self):
        # YAML读回的是列表
        self.cursor_start = tuple(self.cursor_start)


@dataclass
class SystemConfig:
    """系统配置"""
    log_level: str = 'INFO'             # 日志级别
    log_file: Optional[str] = None      # 日志文件，None表示只输出到控制台
    log_dir: str = 'logs'               # 日志目录
    log_max_size: int = 10              # 日志文件最大大小(MB)
    log_backup_count: int = 5           # 日志备份数量
    console_output: bool = True         # 是否输出到控制台


# 默认配置实例
DEFAULT_AI_CONFIG = AIConfig()
DEFAULT_GAME_CONFIG = GameConfig()
DEFAULT_SYSTEM_CONFIG = SystemConfig()
