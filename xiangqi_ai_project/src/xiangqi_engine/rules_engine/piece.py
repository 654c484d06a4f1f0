"""
象棋棋子数据结构

定义坐标、棋子颜色、棋子类型和棋子对象。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Tuple


class Position(NamedTuple):
    """
    棋盘坐标

    x为列(0-8)，y为行(0-9)。黑方在上(y=0)，红方在下(y=9)。
    不可变对象，按值传递。
    """
    x: int
    y: int


class PieceColor(Enum):
    """棋子颜色"""
    RED = "RED"
    BLACK = "BLACK"

    def opponent(self) -> 'PieceColor':
        """返回对手颜色"""
        return PieceColor.BLACK if self is PieceColor.RED else PieceColor.RED


class PieceType(Enum):
    """棋子类型"""
    GENERAL = "GENERAL"    # 帅/将
    ADVISOR = "ADVISOR"    # 仕/士
    ELEPHANT = "ELEPHANT"  # 相/象
    HORSE = "HORSE"        # 马
    CHARIOT = "CHARIOT"    # 车
    CANNON = "CANNON"      # 炮
    SOLDIER = "SOLDIER"    # 兵/卒


@dataclass(eq=False)
class Piece:
    """
    象棋棋子类

    除位置外其余属性在创建后不变。棋子按身份(id)区分，
    两个同类型同颜色的棋子互不相等。
    """

    # 中文字符显示
    SYMBOLS = {
        PieceColor.RED: {
            PieceType.GENERAL: "帅", PieceType.ADVISOR: "仕", PieceType.ELEPHANT: "相",
            PieceType.HORSE: "马", PieceType.CHARIOT: "车", PieceType.CANNON: "炮",
            PieceType.SOLDIER: "兵",
        },
        PieceColor.BLACK: {
            PieceType.GENERAL: "将", PieceType.ADVISOR: "士", PieceType.ELEPHANT: "象",
            PieceType.HORSE: "马", PieceType.CHARIOT: "车", PieceType.CANNON: "炮",
            PieceType.SOLDIER: "卒",
        },
    }

    # Unicode象棋符号 (U+1FA60 - U+1FA6E)
    UNICODE_SYMBOLS = {
        PieceColor.RED: {
            PieceType.GENERAL: "\U0001FA60", PieceType.ADVISOR: "\U0001FA61",
            PieceType.ELEPHANT: "\U0001FA62", PieceType.HORSE: "\U0001FA63",
            PieceType.CHARIOT: "\U0001FA64", PieceType.CANNON: "\U0001FA65",
            PieceType.SOLDIER: "\U0001FA66",
        },
        PieceColor.BLACK: {
            PieceType.GENERAL: "\U0001FA68", PieceType.ADVISOR: "\U0001FA69",
            PieceType.ELEPHANT: "\U0001FA6A", PieceType.HORSE: "\U0001FA6B",
            PieceType.CHARIOT: "\U0001FA6C", PieceType.CANNON: "\U0001FA6D",
            PieceType.SOLDIER: "\U0001FA6E",
        },
    }

    # 矩阵编码，红方为正，黑方为负
    TYPE_CODES = {
        PieceType.GENERAL: 1, PieceType.ADVISOR: 2, PieceType.ELEPHANT: 3,
        PieceType.HORSE: 4, PieceType.CHARIOT: 5, PieceType.CANNON: 6,
        PieceType.SOLDIER: 7,
    }

    id: str
    piece_type: PieceType
    color: PieceColor
    position: Position
    symbol: str = field(default="")
    use_unicode: bool = field(default=False, repr=False)

    def __post_init__(self):
        self.position = Position(*self.position)
        if not self.symbol:
            self.symbol = Piece.get_symbol(self.piece_type, self.color, self.use_unicode)

    def clone(self) -> 'Piece':
        """
        复制棋子

        Returns:
            Piece: 相同id、类型、颜色和位置的新对象
        """
        return Piece(self.id, self.piece_type, self.color, self.position,
                     self.symbol, self.use_unicode)

    def move_to(self, position: Tuple[int, int]):
        """更新棋子位置"""
        self.position = Position(*position)

    def distance_to(self, position: Tuple[int, int]) -> Tuple[int, int]:
        """
        计算到目标位置的距离

        Returns:
            Tuple[int, int]: (dx, dy) 绝对值
        """
        return abs(self.position.x - position[0]), abs(self.position.y - position[1])

    def can_capture(self, other: 'Piece') -> bool:
        """是否可以吃掉另一个棋子（颜色不同）"""
        return self.color != other.color

    def to_code(self) -> int:
        """矩阵编码"""
        code = self.TYPE_CODES[self.piece_type]
        return code if self.color is PieceColor.RED else -code

    def get_piece_name(self) -> str:
        """棋子类型名称"""
        return f"{self.piece_type.value.capitalize()} ({Piece.get_symbol(self.piece_type, self.color)})"

    def get_display_name(self) -> str:
        """带颜色的显示名称，用于日志"""
        side = "Red" if self.color is PieceColor.RED else "Black"
        return f"{side} {self.get_piece_name()}"

    @staticmethod
    def get_symbol(piece_type: PieceType, color: PieceColor, use_unicode: bool = False) -> str:
        """获取棋子显示符号"""
        table = Piece.UNICODE_SYMBOLS if use_unicode else Piece.SYMBOLS
        return table[color][piece_type]
