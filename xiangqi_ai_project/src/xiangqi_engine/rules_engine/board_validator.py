"""
棋局合法性验证器

检查棋盘状态是否满足棋盘不变量和各棋子的位置约束。
"""

from typing import List, Tuple, Dict, Any

import numpy as np

from .chess_board import ChessBoard
from .piece import PieceColor, PieceType
from .rule_engine import RuleEngine


class BoardValidator:
    """
    棋局合法性验证器

    提供棋盘结构、棋子数量和棋子位置的验证功能。
    """

    def __init__(self, enforce_flying_general: bool = False):
        """
        初始化验证器

        Args:
            enforce_flying_general: 是否把帅将照面视为错误
        """
        self.enforce_flying_general = enforce_flying_general

        # 棋子数量上限（每方）
        self.piece_limits = {
            PieceType.GENERAL: 1,
            PieceType.ADVISOR: 2,
            PieceType.ELEPHANT: 2,
            PieceType.HORSE: 2,
            PieceType.CHARIOT: 2,
            PieceType.CANNON: 2,
            PieceType.SOLDIER: 5,
        }

    def validate_board_structure(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        验证棋盘基本结构：位置在界内、每个位置最多一个棋子、位置索引一致

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []
        seen = {}

        for piece in board.get_all_pieces():
            pos = piece.position
            if not board.is_valid_position(pos):
                errors.append(f"{piece.id} 位置越界: {tuple(pos)}")
                continue
            if pos in seen:
                errors.append(f"位置 {tuple(pos)} 有多个棋子: {seen[pos]}, {piece.id}")
            seen[pos] = piece.id
            if board.get_piece_at(pos) is not piece:
                errors.append(f"{piece.id} 位置索引不一致: {tuple(pos)}")

        matrix = board.to_matrix()
        if np.count_nonzero(matrix) != len(seen):
            errors.append(f"矩阵棋子数 {np.count_nonzero(matrix)} 与棋子数 {len(seen)} 不一致")

        return len(errors) == 0, errors

    def validate_piece_counts(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        验证每方各类棋子数量不超过上限

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        for color in PieceColor:
            counts: Dict[PieceType, int] = {}
            for piece in board.get_pieces(color):
                counts[piece.piece_type] = counts.get(piece.piece_type, 0) + 1

            for piece_type, limit in self.piece_limits.items():
                count = counts.get(piece_type, 0)
                if count > limit:
                    errors.append(f"{color.value} {piece_type.value} 数量超限: {count} > {limit}")

        return len(errors) == 0, errors

    def validate_piece_positions(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        验证棋子位置：帅仕在九宫内，相象不过河，兵卒不在己方兵线之后

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []
        rules = RuleEngine(board)

        for piece in board.get_all_pieces():
            x, y = piece.position
            is_red = piece.color is PieceColor.RED

            if piece.piece_type in (PieceType.GENERAL, PieceType.ADVISOR):
                if not rules.is_in_palace(piece.position, piece.color):
                    errors.append(f"{piece.get_display_name()} 位置错误: ({x}, {y}), 应在九宫内")
            elif piece.piece_type is PieceType.ELEPHANT:
                if (is_red and y < 5) or (not is_red and y > 4):
                    errors.append(f"{piece.get_display_name()} 过河: ({x}, {y})")
            elif piece.piece_type is PieceType.SOLDIER:
                if (is_red and y > 6) or (not is_red and y < 3):
                    errors.append(f"{piece.get_display_name()} 位置错误: ({x}, {y}), 兵卒不能后退")

        return len(errors) == 0, errors

    def validate_kings_facing(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        验证帅将是否照面

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []
        if RuleEngine(board).is_flying_general():
            errors.append("帅将照面，中间无棋子阻挡")
        return len(errors) == 0, errors

    def _validations(self) -> Dict[str, Any]:
        validations = {
            'structure': self.validate_board_structure,
            'piece_counts': self.validate_piece_counts,
            'piece_positions': self.validate_piece_positions,
        }
        # 默认规则下照面是允许的局面
        if self.enforce_flying_general:
            validations['kings_facing'] = self.validate_kings_facing
        return validations

    def full_validation(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        完整的棋局验证

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 所有错误信息列表)
        """
        all_errors = []
        for validation_func in self._validations().values():
            _, errors = validation_func(board)
            all_errors.extend(errors)
        return len(all_errors) == 0, all_errors

    def get_validation_report(self, board: ChessBoard) -> Dict[str, Any]:
        """
        获取详细的验证报告

        Args:
            board: 要验证的棋盘

        Returns:
            Dict[str, Any]: 验证报告
        """
        report = {
            'overall_valid': True,
            'total_errors': 0,
            'validations': {}
        }

        for test_name, test_func in self._validations().items():
            is_valid, errors = test_func(board)
            report['validations'][test_name] = {
                'valid': is_valid,
                'errors': errors,
                'error_count': len(errors)
            }

            if not is_valid:
                report['overall_valid'] = False
                report['total_errors'] += len(errors)

        return report
