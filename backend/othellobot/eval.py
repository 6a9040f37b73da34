import json
from typing import List, Optional
from .board import Board, BLACK, WHITE, SIZE

DISCS = "discs"
POSITIONAL = "positional"
MODES = (DISCS, POSITIONAL)

# Default position weights: corners best, the edge squares next to a corner
# worst (they open the corner to the opponent), other edges medium.
DEFAULT_WEIGHTS = [
    [100, -25, 10, 10, 10, 10, -25, 100],
    [-25,   1,  1,  1,  1,  1,   1, -25],
    [ 10,   1,  1,  1,  1,  1,   1,  10],
    [ 10,   1,  1,  1,  1,  1,   1,  10],
    [ 10,   1,  1,  1,  1,  1,   1,  10],
    [ 10,   1,  1,  1,  1,  1,   1,  10],
    [-25,   1,  1,  1,  1,  1,   1, -25],
    [100, -25, 10, 10, 10, 10, -25, 100]
]


def load_weights(weights_file: str) -> List[List[int]]:
    """Load an 8x8 weight matrix from file or use defaults"""
    try:
        with open(weights_file, 'r') as f:
            weights = json.load(f)
    except FileNotFoundError:
        return [list(row) for row in DEFAULT_WEIGHTS]
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid weights file {weights_file}: {e}") from e
    _check_weights(weights)
    return weights


def _check_weights(weights) -> None:
    if (not isinstance(weights, list) or len(weights) != SIZE
            or any(not isinstance(row, list) or len(row) != SIZE for row in weights)):
        raise ValueError(f"Weights must be a {SIZE}x{SIZE} matrix")
    for row in weights:
        for w in row:
            if isinstance(w, bool) or not isinstance(w, int):
                raise ValueError(f"Weight must be an integer: {w!r}")


class Evaluator:
    """Scores a board from Black's point of view (positive = good for Black).

    ``discs`` counts discs; ``positional`` sums a weight matrix over the
    occupied squares. The matrix is owned by the instance.
    """

    def __init__(self, mode: str = POSITIONAL, weights: Optional[List[List[int]]] = None):
        if mode not in MODES:
            raise ValueError(f"Unknown evaluation mode: {mode!r}")
        if weights is None:
            weights = DEFAULT_WEIGHTS
        _check_weights(weights)
        self.mode = mode
        self.weights = [list(row) for row in weights]

    @classmethod
    def from_file(cls, weights_file: str) -> 'Evaluator':
        return cls(POSITIONAL, load_weights(weights_file))

    def evaluate(self, board: Board) -> int:
        if self.mode == DISCS:
            return self._disc_count(board)
        return self._positional(board)

    def _disc_count(self, board: Board) -> int:
        black_count, white_count = board.count()
        return black_count - white_count

    def _positional(self, board: Board) -> int:
        score = 0
        for r in range(SIZE):
            for c in range(SIZE):
                cell = board.grid[r][c]
                if cell == BLACK:
                    score += self.weights[r][c]
                elif cell == WHITE:
                    score -= self.weights[r][c]
        return score
