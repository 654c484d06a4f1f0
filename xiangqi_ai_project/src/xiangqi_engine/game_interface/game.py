"""
对局状态管理

维护当前行棋方、对局结果、光标、选中棋子和走法历史，
提供供界面层调用的选子、走子和光标操作。
"""

from enum import Enum
from typing import List, Optional, Tuple

from ..config.model_config import GameConfig
from ..rules_engine import (
    ChessBoard, RuleEngine, Move, Piece, PieceColor, Position,
    BOARD_WIDTH, BOARD_HEIGHT
)
from ..utils.logger import LoggerMixin


class GameStatus(Enum):
    """对局状态枚举"""
    ONGOING = "ongoing"         # 进行中
    RED_WIN = "red_win"         # 红方胜
    BLACK_WIN = "black_win"     # 黑方胜
    DRAW = "draw"               # 和棋（当前规则下不会出现）


# 光标方向 -> (dx, dy)
CURSOR_DIRECTIONS = {
    'up': (0, -1),
    'down': (0, 1),
    'left': (-1, 0),
    'right': (1, 0),
}


class Game(LoggerMixin):
    """
    对局类

    持有一个棋盘和绑定到该棋盘的规则引擎。选中棋子只保存其id，
    每次读取时从棋盘实时查找，棋子被吃后选中自动失效。
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        初始化对局

        Args:
            config: 对局配置，None时使用默认配置
        """
        self.config = config or GameConfig()

        self.board = ChessBoard(use_unicode=self.config.use_unicode_symbols)
        self.rules = RuleEngine(
            self.board, enforce_flying_general=self.config.enforce_flying_general
        )

        self.current_player = PieceColor[self.config.first_player]
        self.status = GameStatus.ONGOING
        self.cursor_position = Position(*self.config.cursor_start)
        self.move_history: List[Move] = []
        self._selected_piece_id: Optional[str] = None

    # ==================== 状态查询 ====================

    @property
    def selected_piece(self) -> Optional[Piece]:
        """当前选中的棋子，未选中或已被吃掉时为None"""
        if self._selected_piece_id is None:
            return None
        return self.board.get_piece_by_id(self._selected_piece_id)

    @property
    def is_over(self) -> bool:
        """对局是否已结束"""
        return self.status is not GameStatus.ONGOING

    def get_valid_moves_for_selected_piece(self) -> List[Position]:
        """
        获取选中棋子的所有合法目标位置

        Returns:
            List[Position]: 目标位置列表，未选中时为空
        """
        piece = self.selected_piece
        if piece is None:
            return []
        return self.rules.get_valid_moves(piece)

    # ==================== 玩家操作 ====================

    def select_piece_at_cursor(self) -> bool:
        """
        选中光标处的棋子

        Returns:
            bool: 光标处有当前行棋方的棋子时返回True
        """
        piece = self.board.get_piece_at(self.cursor_position)
        if piece is None or piece.color is not self.current_player:
            return False

        self._selected_piece_id = piece.id
        self.logger.debug(f"选中棋子: {piece.get_display_name()} @ {tuple(piece.position)}")
        return True

    def move_selected_piece_to_cursor(self) -> bool:
        """
        将选中棋子走到光标处

        走法不合法时状态不变，选中保持。

        Returns:
            bool: 是否走子成功
        """
        piece = self.selected_piece
        if piece is None:
            return False
        if not self.rules.is_valid_move(piece, self.cursor_position):
            return False

        return self.execute_move(piece.position, self.cursor_position)

    def move_cursor(self, direction: str) -> bool:
        """
        移动光标，光标不会移出棋盘

        Args:
            direction: 'up'、'down'、'left'或'right'

        Returns:
            bool: 光标位置是否改变，未知方向返回False
        """
        if direction not in CURSOR_DIRECTIONS:
            return False

        dx, dy = CURSOR_DIRECTIONS[direction]
        x = min(max(self.cursor_position.x + dx, 0), BOARD_WIDTH - 1)
        y = min(max(self.cursor_position.y + dy, 0), BOARD_HEIGHT - 1)
        new_position = Position(x, y)

        if new_position == self.cursor_position:
            return False
        self.cursor_position = new_position
        return True

    def clear_selection(self):
        """取消选中"""
        self._selected_piece_id = None

    # ==================== 走子提交 ====================

    def execute_move(self, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> bool:
        """
        提交一步走法

        玩家走子和AI走子都经过这里：修改棋盘、记录历史、更新对局状态、
        交换行棋方并取消选中。走法合法性由调用方负责。

        Args:
            from_pos: 起始位置
            to_pos: 目标位置

        Returns:
            bool: 棋盘拒绝该走法时返回False，状态不变
        """
        record = self.board.make_move(from_pos, to_pos)
        if record is None:
            return False

        move = record.to_move()
        self.move_history.append(move)

        if record.is_capture:
            self.logger.info(
                f"{record.piece.get_display_name()} {tuple(move.from_pos)} -> "
                f"{tuple(move.to_pos)} 吃 {record.captured.get_display_name()}"
            )
        else:
            self.logger.info(
                f"{record.piece.get_display_name()} {tuple(move.from_pos)} -> {tuple(move.to_pos)}"
            )

        self.update_game_status()
        self.current_player = self.current_player.opponent()
        self.clear_selection()
        return True

    def update_game_status(self):
        """根据双方帅/将是否还在棋盘上更新对局状态"""
        previous = self.status

        if self.board.find_general(PieceColor.RED) is None:
            self.status = GameStatus.BLACK_WIN
        elif self.board.find_general(PieceColor.BLACK) is None:
            self.status = GameStatus.RED_WIN
        else:
            self.status = GameStatus.ONGOING

        if self.status is not previous:
            self.logger.info(f"对局状态变化: {previous.value} -> {self.status.value}")

    def reset(self):
        """重新开局"""
        self.board.reset_board()
        self.current_player = PieceColor[self.config.first_player]
        self.status = GameStatus.ONGOING
        self.cursor_position = Position(*self.config.cursor_start)
        self.move_history = []
        self.clear_selection()
        self.logger.info("对局已重置")
