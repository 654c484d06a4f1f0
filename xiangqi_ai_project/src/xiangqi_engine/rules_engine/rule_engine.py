"""
象棋规则引擎

实现各棋子的走法合法性判断和全盘走法生成。
"""

from typing import List, Tuple

from .chess_board import ChessBoard, BOARD_WIDTH, BOARD_HEIGHT
from .move import Move
from .piece import Piece, PieceColor, PieceType, Position


class RuleEngine:
    """
    象棋规则引擎

    绑定一个棋盘，本身不保存对局状态。
    不检查走子后己方帅/将是否被攻击，对局只在帅/将被吃掉时结束。
    """

    # 九宫范围
    PALACE_FILES = (3, 5)
    PALACE_RANKS = {
        PieceColor.RED: (7, 9),
        PieceColor.BLACK: (0, 2),
    }

    def __init__(self, board: ChessBoard, enforce_flying_general: bool = False):
        """
        初始化规则引擎

        Args:
            board: 棋盘
            enforce_flying_general: 是否启用将帅不能照面的规则，默认不启用
        """
        self.board = board
        self.enforce_flying_general = enforce_flying_general

    def is_valid_move(self, piece: Piece, target: Tuple[int, int]) -> bool:
        """
        验证走法是否合法

        Args:
            piece: 要移动的棋子
            target: 目标位置

        Returns:
            bool: 是否合法
        """
        target = Position(*target)

        if not self.board.is_valid_position(target):
            return False

        # 不能吃己方棋子
        target_piece = self.board.get_piece_at(target)
        if target_piece is not None and target_piece.color is piece.color:
            return False

        piece_type = piece.piece_type

        if piece_type is PieceType.GENERAL:
            return self._is_valid_general_move(piece, target)
        elif piece_type is PieceType.ADVISOR:
            return self._is_valid_advisor_move(piece, target)
        elif piece_type is PieceType.ELEPHANT:
            return self._is_valid_elephant_move(piece, target)
        elif piece_type is PieceType.HORSE:
            return self._is_valid_horse_move(piece, target)
        elif piece_type is PieceType.CHARIOT:
            return self._is_valid_chariot_move(piece, target)
        elif piece_type is PieceType.CANNON:
            return self._is_valid_cannon_move(piece, target)
        elif piece_type is PieceType.SOLDIER:
            return self._is_valid_soldier_move(piece, target)

        return False

    def get_valid_moves(self, piece: Piece) -> List[Position]:
        """
        生成棋子的所有合法目标位置

        逐一检查全部90个位置，保证与is_valid_move的结果一致。

        Args:
            piece: 棋子

        Returns:
            List[Position]: 合法目标位置列表
        """
        valid_moves = []

        for x in range(BOARD_WIDTH):
            for y in range(BOARD_HEIGHT):
                target = Position(x, y)
                if self.is_valid_move(piece, target):
                    valid_moves.append(target)

        return valid_moves

    def get_all_valid_moves(self, color: PieceColor) -> List[Move]:
        """
        生成指定颜色的所有合法走法

        Args:
            color: 棋子颜色

        Returns:
            List[Move]: 合法走法列表
        """
        moves = []
        for piece in self.board.get_pieces(color):
            from_pos = piece.position
            moves.extend(Move(from_pos, target) for target in self.get_valid_moves(piece))
        return moves

    def has_any_valid_move(self, color: PieceColor) -> bool:
        """指定颜色是否还有合法走法"""
        return any(self.get_valid_moves(piece) for piece in self.board.get_pieces(color))

    # ==================== 各棋子规则 ====================

    def _is_valid_general_move(self, piece: Piece, target: Position) -> bool:
        """帅/将：九宫内横竖走一步"""
        dx, dy = piece.distance_to(target)

        if (dx == 1 and dy == 0) or (dx == 0 and dy == 1):
            if not self.is_in_palace(target, piece.color):
                return False
            if self.enforce_flying_general and self._would_face_general(piece, target):
                return False
            return True

        return False

    def _is_valid_advisor_move(self, piece: Piece, target: Position) -> bool:
        """仕/士：九宫内斜走一步"""
        dx, dy = piece.distance_to(target)
        return dx == 1 and dy == 1 and self.is_in_palace(target, piece.color)

    def _is_valid_elephant_move(self, piece: Piece, target: Position) -> bool:
        """相/象：走田字，不能过河，象眼不能被塞"""
        dx, dy = piece.distance_to(target)
        if dx != 2 or dy != 2:
            return False

        # 不能过河
        if piece.color is PieceColor.RED and target.y < 5:
            return False
        if piece.color is PieceColor.BLACK and target.y > 4:
            return False

        # 塞象眼
        eye = Position((piece.position.x + target.x) // 2, (piece.position.y + target.y) // 2)
        return self.board.get_piece_at(eye) is None

    def _is_valid_horse_move(self, piece: Piece, target: Position) -> bool:
        """马：走日字，马腿不能被绊"""
        dx, dy = piece.distance_to(target)
        if not ((dx == 2 and dy == 1) or (dx == 1 and dy == 2)):
            return False

        x, y = piece.position
        if dx == 2:
            # 先横走
            leg = Position(x - 1 if target.x < x else x + 1, y)
        else:
            # 先竖走
            leg = Position(x, y - 1 if target.y < y else y + 1)

        return self.board.get_piece_at(leg) is None

    def _is_valid_chariot_move(self, piece: Piece, target: Position) -> bool:
        """车：横竖直走，路径不能有子"""
        dx, dy = piece.distance_to(target)
        if dx > 0 and dy > 0:
            return False
        if dx == 0 and dy == 0:
            return False

        return self.is_path_clear(piece.position, target)

    def _is_valid_cannon_move(self, piece: Piece, target: Position) -> bool:
        """炮：不吃子时同车，吃子时必须隔一个子（炮架）"""
        dx, dy = piece.distance_to(target)
        if dx > 0 and dy > 0:
            return False
        if dx == 0 and dy == 0:
            return False

        if self.board.get_piece_at(target) is not None:
            return self.count_pieces_between(piece.position, target) == 1
        return self.is_path_clear(piece.position, target)

    def _is_valid_soldier_move(self, piece: Piece, target: Position) -> bool:
        """兵/卒：一次一步，过河前只能前进，过河后可以横走，不能后退"""
        dx = abs(target.x - piece.position.x)
        dy = target.y - piece.position.y

        if dx + abs(dy) != 1:
            return False

        forward = -1 if piece.color is PieceColor.RED else 1

        if not self.has_crossed_river(piece):
            return dx == 0 and dy == forward
        return (dx == 0 and dy == forward) or (dx == 1 and dy == 0)

    # ==================== 辅助判断 ====================

    def is_in_palace(self, position: Tuple[int, int], color: PieceColor) -> bool:
        """位置是否在指定颜色的九宫内"""
        x, y = position
        min_x, max_x = self.PALACE_FILES
        min_y, max_y = self.PALACE_RANKS[color]
        return min_x <= x <= max_x and min_y <= y <= max_y

    @staticmethod
    def has_crossed_river(piece: Piece) -> bool:
        """棋子是否已过河（红方y<5，黑方y>4）"""
        if piece.color is PieceColor.RED:
            return piece.position.y < 5
        return piece.position.y > 4

    def is_path_clear(self, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> bool:
        """
        两点之间（不含两端）是否没有棋子

        只适用于同一行或同一列，其他情况返回False。
        """
        if from_pos[0] != to_pos[0] and from_pos[1] != to_pos[1]:
            return False
        return self.count_pieces_between(from_pos, to_pos) == 0

    def count_pieces_between(self, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> int:
        """
        统计两点之间（不含两端）的棋子数

        只适用于同一行或同一列，其他情况返回0。
        """
        from_x, from_y = from_pos
        to_x, to_y = to_pos
        count = 0

        if from_y == to_y:
            for x in range(min(from_x, to_x) + 1, max(from_x, to_x)):
                if self.board.get_piece_at((x, from_y)) is not None:
                    count += 1
        elif from_x == to_x:
            for y in range(min(from_y, to_y) + 1, max(from_y, to_y)):
                if self.board.get_piece_at((from_x, y)) is not None:
                    count += 1

        return count

    def is_flying_general(self) -> bool:
        """
        当前局面下双方帅/将是否照面

        同一列且中间没有任何棋子时为照面。任一方帅/将不存在时返回False。
        """
        red_general = self.board.find_general(PieceColor.RED)
        black_general = self.board.find_general(PieceColor.BLACK)
        if red_general is None or black_general is None:
            return False
        if red_general.position.x != black_general.position.x:
            return False
        return self.count_pieces_between(red_general.position, black_general.position) == 0

    def _would_face_general(self, general: Piece, target: Position) -> bool:
        """帅/将走到target后是否与对方帅/将照面"""
        enemy = self.board.find_general(general.color.opponent())
        if enemy is None or enemy.position.x != target.x:
            return False

        low, high = sorted((target.y, enemy.position.y))
        for y in range(low + 1, high):
            blocker = self.board.get_piece_at((target.x, y))
            # 走动的帅/将离开后原位置为空
            if blocker is not None and blocker is not general:
                return False
        return True
