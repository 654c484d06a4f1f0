"""
象棋走法数据结构

定义走法和可撤销走法记录。
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from .piece import Piece, Position


@dataclass(frozen=True)
class Move:
    """
    象棋走法类

    只记录起始位置和目标位置，用于走法历史和AI返回值。
    """
    from_pos: Position
    to_pos: Position

    def __post_init__(self):
        object.__setattr__(self, 'from_pos', Position(*self.from_pos))
        object.__setattr__(self, 'to_pos', Position(*self.to_pos))

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            'from': {'x': self.from_pos.x, 'y': self.from_pos.y},
            'to': {'x': self.to_pos.x, 'y': self.to_pos.y},
        }


@dataclass(frozen=True)
class MoveRecord:
    """
    可撤销走法记录

    captured保存被吃棋子对象本身，撤销时原样放回，保证棋子身份不变。
    """
    piece: Piece
    from_pos: Position
    to_pos: Position
    captured: Optional[Piece] = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def to_move(self) -> Move:
        return Move(self.from_pos, self.to_pos)
