"""
对局接口模块

包含对局状态机和供界面层调用的操作。
"""

from .game import Game, GameStatus, CURSOR_DIRECTIONS

__all__ = ['Game', 'GameStatus', 'CURSOR_DIRECTIONS']
