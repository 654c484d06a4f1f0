"""
测试Game类的功能

测试光标、选子、走子、对局状态和重置。
"""

from xiangqi_ai_project.src.xiangqi_engine.config import GameConfig
from xiangqi_ai_project.src.xiangqi_engine.game_interface import Game, GameStatus
from xiangqi_ai_project.src.xiangqi_engine.rules_engine import (
    Move, PieceColor, PieceType, Position
)


class TestGame:
    """Game类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.game = Game()

    def _move_cursor_to(self, x, y):
        """把光标移动到指定位置"""
        while self.game.cursor_position.x < x:
            self.game.move_cursor('right')
        while self.game.cursor_position.x > x:
            self.game.move_cursor('left')
        while self.game.cursor_position.y < y:
            self.game.move_cursor('down')
        while self.game.cursor_position.y > y:
            self.game.move_cursor('up')
        assert self.game.cursor_position == (x, y)

    def test_initial_state(self):
        """测试初始状态"""
        assert self.game.current_player is PieceColor.RED
        assert self.game.status is GameStatus.ONGOING
        assert self.game.cursor_position == Position(4, 4)
        assert self.game.move_history == []
        assert self.game.selected_piece is None
        assert not self.game.is_over
        assert len(self.game.board) == 32

    def test_move_cursor(self):
        """测试光标移动"""
        assert self.game.move_cursor('up')
        assert self.game.cursor_position == (4, 3)
        assert self.game.move_cursor('down')
        assert self.game.move_cursor('left')
        assert self.game.cursor_position == (3, 4)
        assert self.game.move_cursor('right')
        assert self.game.cursor_position == (4, 4)

    def test_move_cursor_clamped(self):
        """测试光标不会移出棋盘"""
        for _ in range(4):
            assert self.game.move_cursor('up')
        assert self.game.cursor_position == (4, 0)
        assert not self.game.move_cursor('up')
        assert self.game.cursor_position == (4, 0)

        self._move_cursor_to(8, 9)
        assert not self.game.move_cursor('right')
        assert not self.game.move_cursor('down')

    def test_move_cursor_unknown_direction(self):
        """测试未知方向"""
        assert not self.game.move_cursor('sideways')
        assert self.game.cursor_position == (4, 4)

    def test_select_piece(self):
        """测试选子"""
        # 空位
        assert not self.game.select_piece_at_cursor()
        assert self.game.selected_piece is None

        # 对方棋子
        self._move_cursor_to(4, 3)
        assert not self.game.select_piece_at_cursor()

        # 己方棋子
        self._move_cursor_to(4, 6)
        assert self.game.select_piece_at_cursor()
        assert self.game.selected_piece is self.game.board.get_piece_at((4, 6))
        assert self.game.get_valid_moves_for_selected_piece() == [Position(4, 5)]

    def test_valid_moves_without_selection(self):
        """测试未选子时没有走法"""
        assert self.game.get_valid_moves_for_selected_piece() == []

    def test_move_selected_piece(self):
        """测试走子后历史、行棋方和选中状态的变化"""
        self._move_cursor_to(4, 6)
        self.game.select_piece_at_cursor()
        soldier = self.game.selected_piece

        self.game.move_cursor('up')
        assert self.game.move_selected_piece_to_cursor()

        assert soldier.position == (4, 5)
        assert self.game.move_history == [Move((4, 6), (4, 5))]
        assert self.game.current_player is PieceColor.BLACK
        assert self.game.selected_piece is None
        assert self.game.status is GameStatus.ONGOING

    def test_illegal_move_keeps_state(self):
        """测试非法走子不改变状态，选中保持"""
        self._move_cursor_to(4, 6)
        self.game.select_piece_at_cursor()
        soldier = self.game.selected_piece
        before = self.game.board.snapshot()

        self._move_cursor_to(4, 4)
        assert not self.game.move_selected_piece_to_cursor()
        assert self.game.board.snapshot() == before
        assert self.game.selected_piece is soldier
        assert self.game.current_player is PieceColor.RED
        assert self.game.move_history == []

    def test_move_without_selection(self):
        """测试未选子时不能走子"""
        assert not self.game.move_selected_piece_to_cursor()

    def test_selection_tracks_live_piece(self):
        """测试选中棋子实时跟踪棋盘"""
        self._move_cursor_to(4, 6)
        self.game.select_piece_at_cursor()
        soldier = self.game.selected_piece

        self.game.board.move_piece((4, 6), (4, 5))
        assert self.game.selected_piece.position == (4, 5)

        self.game.board.remove_piece(soldier.id)
        assert self.game.selected_piece is None

    def test_clear_selection(self):
        """测试取消选中"""
        self._move_cursor_to(0, 9)
        assert self.game.select_piece_at_cursor()
        self.game.clear_selection()
        assert self.game.selected_piece is None

    def test_update_game_status(self):
        """测试对局状态判定"""
        board = self.game.board
        self.game.update_game_status()
        assert self.game.status is GameStatus.ONGOING

        board.remove_piece(board.find_general(PieceColor.RED).id)
        self.game.update_game_status()
        assert self.game.status is GameStatus.BLACK_WIN
        assert self.game.is_over

        self.game.reset()
        board.remove_piece(board.find_general(PieceColor.BLACK).id)
        self.game.update_game_status()
        assert self.game.status is GameStatus.RED_WIN

    def test_capturing_general_ends_game(self):
        """测试吃掉将后红方胜"""
        board = self.game.board
        board.clear()
        board.add_piece(PieceType.GENERAL, PieceColor.RED, (3, 9))
        board.add_piece(PieceType.GENERAL, PieceColor.BLACK, (4, 0))
        board.add_piece(PieceType.CHARIOT, PieceColor.RED, (4, 5))

        assert self.game.execute_move((4, 5), (4, 0))
        assert self.game.status is GameStatus.RED_WIN
        assert self.game.current_player is PieceColor.BLACK

    def test_execute_move_rejected_by_board(self):
        """测试棋盘拒绝的走法不改变状态"""
        assert not self.game.execute_move((4, 4), (4, 5))
        assert not self.game.execute_move((0, 9), (1, 9))
        assert self.game.move_history == []
        assert self.game.current_player is PieceColor.RED

    def test_reset(self):
        """测试重置对局"""
        self._move_cursor_to(4, 6)
        self.game.select_piece_at_cursor()
        self.game.move_cursor('up')
        self.game.move_selected_piece_to_cursor()
        self.game.execute_move((1, 2), (1, 9))
        self._move_cursor_to(0, 0)

        assert len(self.game.board) == 31
        self.game.reset()

        assert len(self.game.board) == 32
        assert self.game.current_player is PieceColor.RED
        assert self.game.status is GameStatus.ONGOING
        assert self.game.move_history == []
        assert self.game.cursor_position == (4, 4)
        assert self.game.selected_piece is None

    def test_game_config(self):
        """测试对局配置"""
        config = GameConfig(cursor_start=(0, 0), enforce_flying_general=True,
                            use_unicode_symbols=True)
        game = Game(config)
        assert game.cursor_position == (0, 0)
        assert game.rules.enforce_flying_general
        assert game.board.find_general(PieceColor.RED).symbol == "\U0001FA60"

        game.move_cursor('right')
        game.reset()
        assert game.cursor_position == (0, 0)

    def test_draw_status_declared(self):
        """测试和棋状态存在但不会由状态判定产生"""
        assert GameStatus.DRAW.value == "draw"
        self.game.update_game_status()
        assert self.game.status is not GameStatus.DRAW
