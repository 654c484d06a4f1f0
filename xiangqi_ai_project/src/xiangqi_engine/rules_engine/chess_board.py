"""
象棋棋盘数据结构

维护棋盘上的棋子集合，提供空间查询和基本的移动、吃子、复位操作。
"""

import itertools
import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from .move import MoveRecord
from .piece import Piece, PieceColor, PieceType, Position

# 棋盘尺寸：9列10行
BOARD_WIDTH = 9
BOARD_HEIGHT = 10

# 底线布局（从x=0到x=8）
BACK_RANK = [
    PieceType.CHARIOT, PieceType.HORSE, PieceType.ELEPHANT, PieceType.ADVISOR,
    PieceType.GENERAL, PieceType.ADVISOR, PieceType.ELEPHANT, PieceType.HORSE,
    PieceType.CHARIOT,
]
CANNON_FILES = (1, 7)
SOLDIER_FILES = (0, 2, 4, 6, 8)

# 各方的行号: (底线, 炮线, 兵线)
START_RANKS = {
    PieceColor.RED: (9, 7, 6),
    PieceColor.BLACK: (0, 2, 3),
}

logger = logging.getLogger(__name__)


class ChessBoard:
    """
    象棋棋盘类

    棋盘独占其上的所有棋子。任一位置最多一个棋子，所有棋子都在棋盘范围内。
    棋子id由棋盘分配，复位后也不会重复使用。
    """

    def __init__(self, use_unicode: bool = False):
        """
        初始化棋盘

        Args:
            use_unicode: 棋子是否使用Unicode象棋符号
        """
        self.use_unicode = use_unicode

        # id -> 棋子，保持加入顺序
        self._pieces: Dict[str, Piece] = {}
        # 位置 -> 棋子，与_pieces同步维护
        self._grid: Dict[Position, Piece] = {}

        self._id_counter = itertools.count()

        self.reset_board()

    # ==================== 初始化 ====================

    def reset_board(self):
        """清空棋盘并摆放初始局面"""
        self.clear()

        for color, (back_rank, cannon_rank, soldier_rank) in START_RANKS.items():
            for x, piece_type in enumerate(BACK_RANK):
                self.add_piece(piece_type, color, (x, back_rank))
            for x in CANNON_FILES:
                self.add_piece(PieceType.CANNON, color, (x, cannon_rank))
            for x in SOLDIER_FILES:
                self.add_piece(PieceType.SOLDIER, color, (x, soldier_rank))

        logger.debug(f"棋盘已复位, 棋子数: {len(self._pieces)}")

    def clear(self):
        """移除所有棋子"""
        self._pieces.clear()
        self._grid.clear()

    def add_piece(self, piece_type: PieceType, color: PieceColor,
                  position: Tuple[int, int]) -> Piece:
        """
        在指定位置放置新棋子

        Args:
            piece_type: 棋子类型
            color: 棋子颜色
            position: 位置

        Returns:
            Piece: 新建的棋子

        Raises:
            ValueError: 位置越界或已有棋子
        """
        pos = Position(*position)
        if not self.is_valid_position(pos):
            raise ValueError(f"无效的位置坐标: {tuple(pos)}")
        if pos in self._grid:
            raise ValueError(f"位置已有棋子: {tuple(pos)}")

        piece_id = f"{color.value}-{piece_type.value}-{next(self._id_counter)}"
        piece = Piece(piece_id, piece_type, color, pos, use_unicode=self.use_unicode)
        self._pieces[piece.id] = piece
        self._grid[pos] = piece
        return piece

    # ==================== 查询 ====================

    def get_piece_at(self, position: Tuple[int, int]) -> Optional[Piece]:
        """
        获取指定位置的棋子

        Args:
            position: 位置坐标

        Returns:
            Optional[Piece]: 棋子，空位返回None
        """
        return self._grid.get(Position(*position))

    def get_piece_by_id(self, piece_id: str) -> Optional[Piece]:
        """按id查找棋子"""
        return self._pieces.get(piece_id)

    def get_all_pieces(self) -> List[Piece]:
        """
        获取所有棋子

        Returns:
            List[Piece]: 棋子列表的副本
        """
        return list(self._pieces.values())

    def get_pieces(self, color: PieceColor) -> List[Piece]:
        """获取指定颜色的所有棋子"""
        return [piece for piece in self._pieces.values() if piece.color is color]

    def find_general(self, color: PieceColor) -> Optional[Piece]:
        """
        找到指定颜色的帅/将

        Returns:
            Optional[Piece]: 帅/将，已被吃掉返回None
        """
        for piece in self._pieces.values():
            if piece.piece_type is PieceType.GENERAL and piece.color is color:
                return piece
        return None

    def count_pieces(self, color: Optional[PieceColor] = None) -> int:
        """统计棋子数量，color为None时统计双方"""
        if color is None:
            return len(self._pieces)
        return len(self.get_pieces(color))

    @staticmethod
    def is_valid_position(position: Tuple[int, int]) -> bool:
        """检查位置是否在棋盘范围内"""
        x, y = position
        return 0 <= x < BOARD_WIDTH and 0 <= y < BOARD_HEIGHT

    # ==================== 修改 ====================

    def move_piece(self, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> bool:
        """
        移动棋子，目标位置有敌方棋子时吃掉

        Args:
            from_pos: 起始位置
            to_pos: 目标位置

        Returns:
            bool: 起始位置无子或目标位置有己方棋子时返回False，棋盘不变
        """
        return self.make_move(from_pos, to_pos) is not None

    def make_move(self, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> Optional[MoveRecord]:
        """
        执行走法并返回可撤销记录

        Args:
            from_pos: 起始位置
            to_pos: 目标位置

        Returns:
            Optional[MoveRecord]: 走法记录，失败返回None
        """
        from_pos = Position(*from_pos)
        to_pos = Position(*to_pos)

        piece = self._grid.get(from_pos)
        if piece is None:
            return None

        captured = self._grid.get(to_pos)
        if captured is not None:
            if captured.color is piece.color:
                return None
            self.remove_piece(captured.id)

        del self._grid[from_pos]
        piece.move_to(to_pos)
        self._grid[to_pos] = piece

        return MoveRecord(piece=piece, from_pos=from_pos, to_pos=to_pos, captured=captured)

    def undo_move(self, record: MoveRecord):
        """
        撤销走法

        棋子退回原位，被吃的棋子以原对象放回。

        Args:
            record: make_move返回的走法记录
        """
        piece = record.piece
        del self._grid[record.to_pos]
        piece.move_to(record.from_pos)
        self._grid[record.from_pos] = piece

        if record.captured is not None:
            captured = record.captured
            captured.move_to(record.to_pos)
            self._pieces[captured.id] = captured
            self._grid[record.to_pos] = captured

    def remove_piece(self, piece_id: str):
        """移除指定id的棋子，不存在时不做任何事"""
        piece = self._pieces.pop(piece_id, None)
        if piece is not None and self._grid.get(piece.position) is piece:
            del self._grid[piece.position]

    # ==================== 棋局验证 ====================

    def validate_board_state(self) -> Tuple[bool, List[str]]:
        """
        验证棋局状态的合法性

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        from .board_validator import BoardValidator
        return BoardValidator().full_validation(self)

    # ==================== 格式转换 ====================

    def to_matrix(self) -> np.ndarray:
        """
        转换为矩阵格式

        Returns:
            np.ndarray: 10x9矩阵，行为y，列为x，红方为正数，黑方为负数
        """
        matrix = np.zeros((BOARD_HEIGHT, BOARD_WIDTH), dtype=int)
        for piece in self._pieces.values():
            matrix[piece.position.y, piece.position.x] = piece.to_code()
        return matrix

    def snapshot(self) -> Tuple[Tuple[str, PieceType, PieceColor, Position], ...]:
        """
        棋盘快照

        按id排序的(id, 类型, 颜色, 位置)元组，可比较、可哈希，
        用于校验搜索后棋盘是否完全还原。
        """
        return tuple(sorted(
            (piece.id, piece.piece_type, piece.color, piece.position)
            for piece in self._pieces.values()
        ))

    def to_visual_string(self) -> str:
        """文本形式，用于调试和日志"""
        lines = ["  0 1 2 3 4 5 6 7 8"]
        for y in range(BOARD_HEIGHT):
            cells = []
            for x in range(BOARD_WIDTH):
                piece = self._grid.get(Position(x, y))
                cells.append(piece.symbol if piece else "·")
            lines.append(f"{y} " + " ".join(cells))
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self._pieces)

    def __str__(self) -> str:
        return self.to_visual_string()
