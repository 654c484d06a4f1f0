"""
象棋规则引擎模块

包含棋子与棋盘表示、走法合法性判断、走法生成和棋局验证。
"""

from .piece import Piece, PieceColor, PieceType, Position
from .move import Move, MoveRecord
from .chess_board import ChessBoard, BOARD_WIDTH, BOARD_HEIGHT
from .rule_engine import RuleEngine
from .board_validator import BoardValidator

__all__ = [
    'Piece', 'PieceColor', 'PieceType', 'Position',
    'Move', 'MoveRecord',
    'ChessBoard', 'BOARD_WIDTH', 'BOARD_HEIGHT',
    'RuleEngine', 'BoardValidator'
]
