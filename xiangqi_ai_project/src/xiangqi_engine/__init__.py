"""
中国象棋规则与AI引擎

包括规则引擎、对局状态管理和基于极小极大搜索的AI。
"""

__version__ = "0.1.0"
__author__ = "Xiangqi AI Team"

# 导入核心组件
from .rules_engine import ChessBoard, Move, Piece, PieceColor, PieceType, Position, RuleEngine
from .game_interface import Game, GameStatus
from .search_algorithm import ChessAI, evaluate_board
from .config import ConfigManager, AIConfig, GameConfig, SystemConfig
from .utils import setup_logger, setup_logger_from_config, get_logger, XiangqiError

__all__ = [
    "__version__", "__author__",
    "ChessBoard", "Move", "Piece", "PieceColor", "PieceType", "Position", "RuleEngine",
    "Game", "GameStatus",
    "ChessAI", "evaluate_board",
    "ConfigManager", "AIConfig", "GameConfig", "SystemConfig",
    "setup_logger", "setup_logger_from_config", "get_logger", "XiangqiError"
]
