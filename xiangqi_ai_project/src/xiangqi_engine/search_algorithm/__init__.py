"""
搜索算法模块

包含极小极大搜索(alpha-beta剪枝)和局面评估。
"""

from .evaluation import PIECE_VALUES, evaluate_board
from .minimax_searcher import ChessAI

__all__ = ['PIECE_VALUES', 'evaluate_board', 'ChessAI']
