"""
局面评估函数

子力价值加上己方棋子的位置奖励。
"""

from typing import Dict

import numpy as np

from ..rules_engine import ChessBoard, PieceColor, PieceType, BOARD_WIDTH, BOARD_HEIGHT

# 子力价值
PIECE_VALUES: Dict[PieceType, int] = {
    PieceType.GENERAL: 10000,
    PieceType.ADVISOR: 200,
    PieceType.ELEPHANT: 200,
    PieceType.HORSE: 500,
    PieceType.CHARIOT: 900,
    PieceType.CANNON: 450,
    PieceType.SOLDIER: 100,
}

# 各列距中路的接近程度: [0, 1, 2, 3, 4, 3, 2, 1, 0]
CENTER_PROXIMITY = 4 - np.abs(np.arange(BOARD_WIDTH) - 4)

# 兵/卒每前进一行的奖励
SOLDIER_ADVANCE_BONUS = 10
SOLDIER_CENTER_BONUS = 5
# 车、炮靠近中路的奖励
FILE_CONTROL_BONUS = 10


def soldier_advancement(color: PieceColor, y: int) -> int:
    """兵/卒已前进的行数，黑方从上往下走，红方从下往上走"""
    if color is PieceColor.BLACK:
        return y
    return (BOARD_HEIGHT - 1) - y


def evaluate_board(board: ChessBoard, ai_color: PieceColor) -> float:
    """
    评估当前局面

    己方子力记正分，对方子力记负分；位置奖励只计己方棋子。

    Args:
        board: 棋盘
        ai_color: 评估所站的一方

    Returns:
        float: 局面分数，越大对ai_color越有利
    """
    score = 0

    for piece in board.get_all_pieces():
        value = PIECE_VALUES[piece.piece_type]
        if piece.color is not ai_color:
            score -= value
            continue

        score += value
        x, y = piece.position

        if piece.piece_type is PieceType.SOLDIER:
            score += soldier_advancement(ai_color, y) * SOLDIER_ADVANCE_BONUS
            score += int(CENTER_PROXIMITY[x]) * SOLDIER_CENTER_BONUS
        elif piece.piece_type in (PieceType.CHARIOT, PieceType.CANNON):
            score += int(CENTER_PROXIMITY[x]) * FILE_CONTROL_BONUS

    return float(score)
