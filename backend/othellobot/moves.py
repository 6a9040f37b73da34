from dataclasses import dataclass
from typing import List, Optional
import logging

from .board import Board, Position, BLACK, is_pass

logger = logging.getLogger(__name__)

NO_MOVE = -1


@dataclass
class Move:
    """A placement of ``piece`` at ``where``; an off-board ``where`` is a pass.

    ``board`` and ``score`` are filled in once the move has been played out.
    """
    where: Position
    piece: int
    board: Optional[Board] = None
    score: Optional[int] = None

    @property
    def is_pass(self) -> bool:
        return is_pass(self.where)

    def __str__(self) -> str:
        x, y = self.where
        return f"[{x},{y}]"


class MoveList(list):
    """Moves in the order they were discovered (row-major)"""

    def generate_successors(self, board: Board, evaluator) -> None:
        """Attach the resulting board and its static score to every move"""
        for move in self:
            move.board = board.apply(move)
            move.score = evaluator.evaluate(move.board)

    def select_best(self, for_side: int) -> int:
        """Index of the move with the best score for ``for_side``, or NO_MOVE.

        Black maximizes, White minimizes. Only a strictly better score
        replaces the current best, so ties go to the earliest move.
        """
        if not self:
            return NO_MOVE

        best_index = 0
        best_score = self[0].score
        for i in range(1, len(self)):
            score = self[i].score
            if for_side == BLACK:
                better = score > best_score
            else:
                better = score < best_score
            if better:
                best_index = i
                best_score = score
        return best_index

    def positions(self) -> List[Position]:
        return [move.where for move in self]

    def log_all(self, level: int = logging.DEBUG) -> None:
        if not logger.isEnabledFor(level):
            return
        logger.log(level, "moves:")
        for move in self:
            logger.log(level, "%s (%s)", move, move.score)
