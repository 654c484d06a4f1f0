"""
测试RuleEngine类的功能

测试各棋子走法、走法生成和辅助判断。
"""

from xiangqi_ai_project.src.xiangqi_engine.rules_engine import (
    ChessBoard, PieceColor, PieceType, Position, RuleEngine
)


class TestRuleEngine:
    """RuleEngine类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.board = ChessBoard()
        self.rules = RuleEngine(self.board)

    def _empty_board(self):
        """清空棋盘，只留双方帅将"""
        self.board.clear()
        self.board.add_piece(PieceType.GENERAL, PieceColor.RED, (3, 9))
        self.board.add_piece(PieceType.GENERAL, PieceColor.BLACK, (5, 0))

    def test_initial_move_count(self):
        """测试开局红方共44种走法"""
        moves = self.rules.get_all_valid_moves(PieceColor.RED)
        assert len(moves) == 44
        assert self.rules.has_any_valid_move(PieceColor.BLACK)

    def test_general_initial_moves(self):
        """测试开局帅只能前进一步"""
        general = self.board.find_general(PieceColor.RED)
        assert self.rules.get_valid_moves(general) == [Position(4, 8)]

    def test_general_and_advisor_stay_in_palace(self):
        """测试帅仕的走法都在九宫内"""
        self._empty_board()
        self.board.add_piece(PieceType.ADVISOR, PieceColor.RED, (4, 8))
        self.board.add_piece(PieceType.ADVISOR, PieceColor.BLACK, (3, 0))

        for piece in self.board.get_all_pieces():
            for target in self.rules.get_valid_moves(piece):
                assert self.rules.is_in_palace(target, piece.color)

        advisor = self.board.get_piece_at((4, 8))
        assert sorted(self.rules.get_valid_moves(advisor)) == [(3, 7), (5, 7), (5, 9)]

    def test_general_cannot_leave_palace(self):
        """测试帅不能出九宫"""
        self._empty_board()
        general = self.board.find_general(PieceColor.RED)
        assert general.position == (3, 9)
        assert not self.rules.is_valid_move(general, (2, 9))
        assert self.rules.is_valid_move(general, (3, 8))

    def test_elephant_moves(self):
        """测试相走田字且不过河"""
        self._empty_board()
        elephant = self.board.add_piece(PieceType.ELEPHANT, PieceColor.RED, (2, 5))
        moves = self.rules.get_valid_moves(elephant)
        assert sorted(moves) == [(0, 7), (4, 7)]

        self.board.reset_board()
        for piece in self.board.get_all_pieces():
            if piece.piece_type is not PieceType.ELEPHANT:
                continue
            for target in self.rules.get_valid_moves(piece):
                dx, dy = piece.distance_to(target)
                assert dx == 2 and dy == 2
                if piece.color is PieceColor.RED:
                    assert target.y >= 5
                else:
                    assert target.y <= 4

    def test_elephant_eye_blocked(self):
        """测试塞象眼"""
        self._empty_board()
        elephant = self.board.add_piece(PieceType.ELEPHANT, PieceColor.BLACK, (2, 0))
        assert self.rules.is_valid_move(elephant, (4, 2))

        self.board.add_piece(PieceType.SOLDIER, PieceColor.RED, (3, 1))
        assert not self.rules.is_valid_move(elephant, (4, 2))
        assert self.rules.is_valid_move(elephant, (0, 2))

    def test_horse_leg_blocked(self):
        """测试蹩马腿"""
        self._empty_board()
        horse = self.board.add_piece(PieceType.HORSE, PieceColor.RED, (4, 4))
        assert len(self.rules.get_valid_moves(horse)) == 8

        self.board.add_piece(PieceType.SOLDIER, PieceColor.BLACK, (4, 3))
        moves = self.rules.get_valid_moves(horse)
        assert (3, 2) not in moves
        assert (5, 2) not in moves
        assert len(moves) == 6

        self.board.add_piece(PieceType.SOLDIER, PieceColor.BLACK, (5, 4))
        moves = self.rules.get_valid_moves(horse)
        assert (6, 3) not in moves
        assert (6, 5) not in moves
        assert len(moves) == 4

    def test_horse_initial_moves(self):
        """测试开局马的走法"""
        horse = self.board.get_piece_at((1, 9))
        assert sorted(self.rules.get_valid_moves(horse)) == [(0, 7), (2, 7)]

    def test_chariot_moves(self):
        """测试车直走且路径不能有子"""
        chariot = self.board.get_piece_at((0, 9))
        assert sorted(self.rules.get_valid_moves(chariot)) == [(0, 7), (0, 8)]
        assert not self.rules.is_valid_move(chariot, (0, 5))
        assert not self.rules.is_valid_move(chariot, (1, 8))

        self._empty_board()
        chariot = self.board.add_piece(PieceType.CHARIOT, PieceColor.RED, (0, 5))
        assert len(self.rules.get_valid_moves(chariot)) == 17

    def test_cannon_screen(self):
        """测试炮的吃子需要炮架"""
        cannon = self.board.get_piece_at((1, 7))
        moves = self.rules.get_valid_moves(cannon)
        assert Position(1, 0) in moves          # 隔黑炮打马
        assert Position(1, 2) not in moves      # 没有炮架不能吃
        assert Position(1, 1) not in moves      # 不吃子时路径必须畅通
        assert len(moves) == 12

    def test_cannon_move_property(self):
        """测试炮的吃子走法中间恰有一子，非吃子走法中间无子"""
        self.board.move_piece((4, 6), (4, 5))
        self.board.move_piece((7, 7), (4, 7))
        for piece in self.board.get_all_pieces():
            if piece.piece_type is not PieceType.CANNON:
                continue
            for target in self.rules.get_valid_moves(piece):
                between = self.rules.count_pieces_between(piece.position, target)
                if self.board.get_piece_at(target) is not None:
                    assert between == 1
                else:
                    assert between == 0

    def test_soldier_before_river(self):
        """测试过河前兵只能前进"""
        red_soldier = self.board.get_piece_at((4, 6))
        black_soldier = self.board.get_piece_at((4, 3))
        assert self.rules.get_valid_moves(red_soldier) == [Position(4, 5)]
        assert self.rules.get_valid_moves(black_soldier) == [Position(4, 4)]

    def test_soldier_after_river(self):
        """测试过河后兵可以横走，不能后退"""
        self._empty_board()
        soldier = self.board.add_piece(PieceType.SOLDIER, PieceColor.RED, (4, 4))
        assert self.rules.has_crossed_river(soldier)
        assert sorted(self.rules.get_valid_moves(soldier)) == [(3, 4), (4, 3), (5, 4)]

        soldier = self.board.add_piece(PieceType.SOLDIER, PieceColor.BLACK, (2, 5))
        assert sorted(self.rules.get_valid_moves(soldier)) == [(1, 5), (2, 6), (3, 5)]

    def test_soldier_never_moves_backward(self):
        """测试所有兵卒走法都不后退，横走只在过河后出现"""
        self.board.add_piece(PieceType.SOLDIER, PieceColor.RED, (6, 2))
        self.board.add_piece(PieceType.SOLDIER, PieceColor.BLACK, (1, 8))
        for piece in self.board.get_all_pieces():
            if piece.piece_type is not PieceType.SOLDIER:
                continue
            forward = -1 if piece.color is PieceColor.RED else 1
            for target in self.rules.get_valid_moves(piece):
                dy = target.y - piece.position.y
                assert dy in (0, forward)
                if dy == 0:
                    assert self.rules.has_crossed_river(piece)

    def test_basic_rejections(self):
        """测试越界和吃己方棋子被拒绝"""
        chariot = self.board.get_piece_at((0, 9))
        assert not self.rules.is_valid_move(chariot, (-1, 9))
        assert not self.rules.is_valid_move(chariot, (0, 10))
        assert not self.rules.is_valid_move(chariot, (1, 9))
        assert not self.rules.is_valid_move(chariot, (0, 9))

    def test_chariot_capture_scenario(self):
        """测试清空路径后黑车进底线，红车吃回"""
        self.board.remove_piece(self.board.get_piece_at((0, 3)).id)
        self.board.remove_piece(self.board.get_piece_at((0, 6)).id)

        black_chariot = self.board.get_piece_at((0, 0))
        assert self.rules.is_valid_move(black_chariot, (0, 8))
        self.board.move_piece((0, 0), (0, 8))

        red_chariot = self.board.get_piece_at((0, 9))
        assert self.rules.is_valid_move(red_chariot, (0, 8))
        assert self.board.move_piece((0, 9), (0, 8))
        assert self.board.get_piece_at((0, 8)) is red_chariot
        assert len(self.board) == 29

    def test_path_helpers(self):
        """测试路径辅助函数"""
        assert self.rules.is_path_clear((0, 9), (0, 7))
        assert not self.rules.is_path_clear((0, 9), (0, 5))
        assert self.rules.count_pieces_between((1, 7), (1, 0)) == 1
        assert self.rules.count_pieces_between((0, 0), (8, 0)) == 7

        # 不在同一行列
        assert not self.rules.is_path_clear((0, 0), (1, 1))
        assert self.rules.count_pieces_between((0, 0), (2, 3)) == 0

    def test_palace_and_river_helpers(self):
        """测试九宫和过河判断"""
        assert self.rules.is_in_palace((4, 8), PieceColor.RED)
        assert not self.rules.is_in_palace((4, 8), PieceColor.BLACK)
        assert self.rules.is_in_palace((3, 0), PieceColor.BLACK)
        assert not self.rules.is_in_palace((2, 0), PieceColor.BLACK)

        assert not self.rules.has_crossed_river(self.board.get_piece_at((4, 6)))
        assert not self.rules.has_crossed_river(self.board.get_piece_at((4, 3)))

    def test_flying_general_inert_by_default(self):
        """测试默认不限制帅将照面"""
        self.board.clear()
        red = self.board.add_piece(PieceType.GENERAL, PieceColor.RED, (3, 9))
        self.board.add_piece(PieceType.GENERAL, PieceColor.BLACK, (4, 0))

        assert not self.rules.is_flying_general()
        assert self.rules.is_valid_move(red, (4, 9))

        strict = RuleEngine(self.board, enforce_flying_general=True)
        assert not strict.is_valid_move(red, (4, 9))
        assert strict.is_valid_move(red, (3, 8))

        # 中间有子阻挡时可以走
        blocker = self.board.add_piece(PieceType.CHARIOT, PieceColor.BLACK, (4, 5))
        assert strict.is_valid_move(red, (4, 9))

        self.board.remove_piece(blocker.id)
        assert self.board.move_piece((3, 9), (4, 9))
        assert self.rules.is_flying_general()

    def test_fresh_board_generals_not_facing(self):
        """测试开局帅将之间有兵卒阻挡"""
        assert not self.rules.is_flying_general()
