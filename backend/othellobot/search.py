import time
import logging
from dataclasses import dataclass
from typing import Tuple, Optional
from .board import Board, Position
from .eval import Evaluator
from .moves import MoveList

logger = logging.getLogger(__name__)

DEFAULT_DEPTH = 5


@dataclass
class SearchResult:
    move: Optional[Position]  # None means pass
    score: int
    nodes: int
    depth: int
    timed_out: bool = False

    @property
    def is_pass(self) -> bool:
        return self.move is None


class SearchEngine:
    """Fixed-depth minimax: every node within the horizon is visited once.

    Black maximizes and White minimizes the evaluator's score. A node whose
    side to move has no placement is scored statically, without playing
    out the pass.
    """

    def __init__(self, evaluator: Evaluator, depth: int = DEFAULT_DEPTH, max_time_ms: Optional[int] = None):
        if depth < 1:
            raise ValueError(f"Search depth must be positive, got {depth}")
        self.evaluator = evaluator
        self.depth = depth
        self.max_time_ms = max_time_ms

    def search_best_move(self, board: Board, depth: Optional[int] = None,
                         max_time_ms: Optional[int] = None) -> SearchResult:
        """Find the move with the best minimax value for the side to move"""
        if depth is None:
            depth = self.depth
        if depth < 1:
            raise ValueError(f"Search depth must be positive, got {depth}")
        if max_time_ms is None:
            max_time_ms = self.max_time_ms

        deadline = None
        if max_time_ms is not None:
            deadline = time.monotonic() + max_time_ms / 1000

        moves = board.valid_moves()
        if not moves:
            logger.info("No legal moves for %s, passing", board.to_move)
            return SearchResult(None, self.evaluator.evaluate(board), 1, depth)

        searched = MoveList()
        total_nodes = 1
        timed_out = False
        try:
            for move in moves:
                move.board = board.apply(move)
                score, nodes = self._minimax(move.board, depth - 1, deadline)
                move.score = score
                total_nodes += nodes
                searched.append(move)
        except TimeoutError:
            timed_out = True
            logger.warning("Search deadline hit after %d of %d root moves", len(searched), len(moves))
            if not searched:
                # Nothing finished: fall back to the first legal move
                first = moves[0]
                first.board = board.apply(first)
                first.score = self.evaluator.evaluate(first.board)
                searched.append(first)

        searched.log_all()
        best = searched[searched.select_best(board.to_move)]
        return SearchResult(best.where, best.score, total_nodes, depth, timed_out)

    def minimax(self, board: Board, depth: int) -> int:
        """Minimax value of ``board`` searched ``depth`` plies deep"""
        score, _ = self._minimax(board, depth, None)
        return score

    def _minimax(self, board: Board, depth: int, deadline: Optional[float]) -> Tuple[int, int]:
        """Return (value, nodes visited)"""
        if deadline is not None and time.monotonic() > deadline:
            raise TimeoutError()

        if depth == 0:
            return self.evaluator.evaluate(board), 1

        moves = board.valid_moves()
        if not moves:
            return self.evaluator.evaluate(board), 1

        total_nodes = 1
        for move in moves:
            child = board.apply(move)
            move.score, nodes = self._minimax(child, depth - 1, deadline)
            total_nodes += nodes

        best = moves[moves.select_best(board.to_move)]
        return best.score, total_nodes
