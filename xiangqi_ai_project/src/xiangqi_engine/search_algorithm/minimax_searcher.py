"""
极小极大搜索AI

深度受限的minimax搜索加alpha-beta剪枝。搜索直接在对局棋盘上走子和撤销，
返回前棋盘必须完全还原。
"""

import logging
import math
import random
from typing import Dict, Iterator, List, Optional, Tuple

from .evaluation import evaluate_board
from ..config.model_config import AIConfig
from ..game_interface import Game, GameStatus
from ..rules_engine import Move, Piece, PieceColor, Position
from ..utils.exceptions import GameStateError
from ..utils.logger import performance_logger

logger = logging.getLogger(__name__)


class ChessAI:
    """
    象棋AI

    只在轮到自己且对局进行中时走子，走子通过Game.execute_move提交，
    与玩家走子的效果完全相同。
    """

    def __init__(
        self,
        game: Game,
        ai_color: PieceColor = PieceColor.BLACK,
        max_depth: int = 3,
        use_randomization: bool = True,
        rng: Optional[random.Random] = None
    ):
        """
        初始化AI

        Args:
            game: 对局
            ai_color: AI执子颜色
            max_depth: 搜索深度(半回合数)
            use_randomization: 是否打乱棋子顺序
            rng: 随机数生成器，None时使用不固定种子的生成器
        """
        self.game = game
        self.ai_color = ai_color
        self.max_depth = max_depth
        self.use_randomization = use_randomization
        self.rng = rng or random.Random()

        self.nodes_searched = 0
        self.last_search_stats: Dict[str, float] = {}

    @classmethod
    def from_config(cls, game: Game, config: AIConfig) -> 'ChessAI':
        """根据AI配置创建"""
        return cls(
            game,
            ai_color=PieceColor[config.ai_color],
            max_depth=config.max_depth,
            use_randomization=config.use_randomization,
            rng=random.Random(config.seed)
        )

    # ==================== 走子 ====================

    def make_move(self) -> Optional[Move]:
        """
        为AI方选择并执行一步走法

        Returns:
            Optional[Move]: 执行的走法；不该AI走、对局已结束或AI无子时返回None
        """
        if self.game.current_player is not self.ai_color:
            return None
        if self.game.status is not GameStatus.ONGOING:
            return None

        pieces = self._ordered_pieces()
        if not pieces:
            return None

        if self.max_depth <= 1:
            capture = self._find_capture(pieces)
            if capture is not None:
                logger.debug(f"浅层搜索直接吃子: {capture.to_dict()}")
                return self._commit(capture)

        best_move = self._search_root(pieces)
        if best_move is not None:
            return self._commit(best_move)

        logger.warning("搜索未找到走法，使用备用策略")
        return self._make_fallback_move()

    def _search_root(self, pieces: List[Piece]) -> Optional[Move]:
        """
        根节点搜索

        Args:
            pieces: 已排好顺序的AI方棋子

        Returns:
            Optional[Move]: 分数最高的走法，没有合法走法时返回None
        """
        board = self.game.board
        before = board.snapshot()

        self.nodes_searched = 0

        best_move = None
        best_score = -math.inf
        alpha = -math.inf
        beta = math.inf

        with performance_logger.timed('minimax_search') as timing:
            for from_pos, target in self._generate_moves(pieces):
                record = board.make_move(from_pos, target)
                score = self.minimax(self.max_depth - 1, False, alpha, beta)
                board.undo_move(record)

                if score > best_score:
                    best_score = score
                    best_move = Move(from_pos, target)

                alpha = max(alpha, best_score)
                if beta <= alpha:
                    break

        if board.snapshot() != before:
            raise GameStateError("搜索结束后棋盘未还原", "走子与撤销不一致")

        time_used = timing['elapsed']
        nodes_per_second = self.nodes_searched / time_used if time_used > 0 else 0.0
        self.last_search_stats = {
            'nodes': self.nodes_searched,
            'time_used': time_used,
            'nodes_per_second': nodes_per_second,
            'best_score': best_score,
        }
        performance_logger.log_search_stats(self.nodes_searched, time_used, nodes_per_second,
                                            depth=self.max_depth)

        return best_move

    def minimax(self, depth: int, maximizing: bool, alpha: float, beta: float) -> float:
        """
        minimax搜索加alpha-beta剪枝

        Args:
            depth: 剩余深度
            maximizing: 是否为AI方行棋
            alpha: 下界
            beta: 上界

        Returns:
            float: 从AI方视角的局面分数
        """
        self.nodes_searched += 1
        board = self.game.board

        if depth <= 0 or self._is_terminal():
            return evaluate_board(board, self.ai_color)

        color = self.ai_color if maximizing else self.ai_color.opponent()
        best = -math.inf if maximizing else math.inf
        searched = False

        for from_pos, target in self._generate_moves(board.get_pieces(color)):
            searched = True
            record = board.make_move(from_pos, target)
            score = self.minimax(depth - 1, not maximizing, alpha, beta)
            board.undo_move(record)

            if maximizing:
                best = max(best, score)
                alpha = max(alpha, best)
            else:
                best = min(best, score)
                beta = min(beta, best)

            if beta <= alpha:
                break

        # 无子可走的一方按静态局面评分
        if not searched:
            return evaluate_board(board, self.ai_color)

        return best

    # ==================== 辅助方法 ====================

    def _is_terminal(self) -> bool:
        """任一方帅/将已被吃"""
        board = self.game.board
        return (board.find_general(PieceColor.RED) is None or
                board.find_general(PieceColor.BLACK) is None)

    def _ordered_pieces(self) -> List[Piece]:
        """AI方棋子，启用随机化时打乱顺序"""
        pieces = self.game.board.get_pieces(self.ai_color)
        if self.use_randomization:
            self.rng.shuffle(pieces)
        return pieces

    def _generate_moves(self, pieces: List[Piece]) -> Iterator[Tuple[Position, Position]]:
        """
        依次生成各棋子的(起点, 终点)

        每个棋子的走法在轮到它时才生成，起点在生成时记录，
        不受之后搜索中走子撤销的影响。
        """
        rules = self.game.rules
        for piece in pieces:
            from_pos = piece.position
            for target in rules.get_valid_moves(piece):
                yield from_pos, target

    def _find_capture(self, pieces: List[Piece]) -> Optional[Move]:
        """按棋子顺序找到第一个吃子走法"""
        board = self.game.board
        for from_pos, target in self._generate_moves(pieces):
            if board.get_piece_at(target) is not None:
                return Move(from_pos, target)
        return None

    def _make_fallback_move(self) -> Optional[Move]:
        """
        备用走法：优先吃子，否则随机选一步合法走法

        Returns:
            Optional[Move]: 执行的走法，没有合法走法时返回None
        """
        pieces = self.game.board.get_pieces(self.ai_color)
        self.rng.shuffle(pieces)

        capture = self._find_capture(pieces)
        if capture is not None:
            return self._commit(capture)

        moves = [Move(from_pos, target) for from_pos, target in self._generate_moves(pieces)]
        if not moves:
            logger.info(f"{self.ai_color.value}方无合法走法")
            return None

        return self._commit(self.rng.choice(moves))

    def _commit(self, move: Move) -> Move:
        """通过对局提交走法"""
        if not self.game.execute_move(move.from_pos, move.to_pos):
            raise GameStateError("AI走法提交失败", f"{move.to_dict()}")
        logger.info(f"AI({self.ai_color.value})走子: {tuple(move.from_pos)} -> {tuple(move.to_pos)}")
        return move
