from typing import List, Tuple, Optional, Sequence
import copy

# Constants (values match the game server's JSON encoding)
EMPTY = 0
BLACK = 1
WHITE = 2

SIZE = 8

Position = Tuple[int, int]

# Canonical pass; any off-board position means the same thing
PASS: Position = (0, 0)

# Stable scan order: dx outer, dy inner
DIRECTIONS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)

OCCUPIED = "occupied"
NO_CAPTURES = "no-captures"
ILLEGAL_PASS = "illegal-pass"
WRONG_SIDE = "wrong-side"


def opposite(piece: int) -> int:
    """Return the other side's color (EMPTY stays EMPTY)"""
    if piece == BLACK:
        return WHITE
    if piece == WHITE:
        return BLACK
    return EMPTY


def is_valid(pos: Position) -> bool:
    """True iff both coordinates are on the board (1-8, not 0-7)"""
    x, y = pos
    return 1 <= x <= SIZE and 1 <= y <= SIZE


def is_pass(pos: Position) -> bool:
    return not is_valid(pos)


class IllegalMove(ValueError):
    """Raised when a move can't be played on a board.

    ``reason`` is one of OCCUPIED, NO_CAPTURES, ILLEGAL_PASS or WRONG_SIDE.
    """

    def __init__(self, move, reason: str, detail: str = ""):
        self.move = move
        self.reason = reason
        self.detail = detail
        message = f"{move} illegal move: {reason}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class Board:
    def __init__(self, grid: Optional[List[List[int]]] = None, to_move: int = BLACK):
        # grid[y-1][x-1]; rows top to bottom
        if grid is None:
            grid = [[EMPTY for _ in range(SIZE)] for _ in range(SIZE)]
        self.grid = grid
        self.to_move = to_move

    @classmethod
    def empty(cls, to_move: int = BLACK) -> 'Board':
        return cls(to_move=to_move)

    @classmethod
    def initial(cls) -> 'Board':
        """Standard Othello starting position, Black to move"""
        board = cls()
        board.grid[3][3] = WHITE  # (4,4)
        board.grid[4][4] = WHITE  # (5,5)
        board.grid[3][4] = BLACK  # (5,4)
        board.grid[4][3] = BLACK  # (4,5)
        return board

    @classmethod
    def from_pieces(cls, pieces: Sequence[Sequence[int]], to_move: int) -> 'Board':
        """Build a board from a decoded 8x8 piece grid, validating every cell"""
        if len(pieces) != SIZE or any(len(row) != SIZE for row in pieces):
            raise ValueError(f"Board must be {SIZE}x{SIZE}")
        for row in pieces:
            for cell in row:
                if isinstance(cell, bool) or cell not in (EMPTY, BLACK, WHITE):
                    raise ValueError(f"Invalid piece value: {cell!r}")
        if isinstance(to_move, bool) or to_move not in (BLACK, WHITE):
            raise ValueError(f"Invalid side to move: {to_move!r}")
        return cls([list(row) for row in pieces], to_move)

    def copy(self) -> 'Board':
        """Create a deep copy of the board"""
        return Board(copy.deepcopy(self.grid), self.to_move)

    def get(self, pos: Position) -> int:
        """Return the piece at a valid position"""
        if not is_valid(pos):
            raise ValueError(f"Invalid position: {pos}")
        x, y = pos
        return self.grid[y - 1][x - 1]

    def _set(self, pos: Position, piece: int):
        x, y = pos
        self.grid[y - 1][x - 1] = piece

    def valid_moves(self) -> 'MoveList':
        """Get legal moves for the side to move, in row-major order"""
        from .moves import Move, MoveList

        moves = MoveList()
        for y in range(1, SIZE + 1):
            for x in range(1, SIZE + 1):
                if self.grid[y - 1][x - 1] != EMPTY:
                    continue
                move = Move((x, y), self.to_move)
                if self._captures(move):
                    moves.append(move)
        return moves

    def try_move(self, move) -> List[Position]:
        """Return the discs a non-pass move would capture, without playing it"""
        self._check_side(move)
        if self.get(move.where) != EMPTY:
            raise IllegalMove(move, OCCUPIED, f"{move.where} is occupied by {self.get(move.where)}")

        captures = self._captures(move)
        if not captures:
            raise IllegalMove(move, NO_CAPTURES)
        return captures

    def _check_side(self, move):
        if move.piece != self.to_move:
            raise IllegalMove(move, WRONG_SIDE, f"{self.to_move} is to move, not {move.piece}")

    def _captures(self, move) -> List[Position]:
        captures: List[Position] = []
        for direction in DIRECTIONS:
            captures.extend(self._find_captures(move, direction))
        return captures

    def _find_captures(self, move, direction: Tuple[int, int]) -> List[Position]:
        """Collect the opponent run in one direction if our own disc closes it"""
        dx, dy = direction
        x, y = move.where
        run: List[Position] = []
        while True:
            x += dx
            y += dy
            if not is_valid((x, y)):
                # Ran off the board
                return []
            piece = self.grid[y - 1][x - 1]
            if piece == move.piece:
                # An empty run here is "no capture", not a capture of zero discs
                return run
            if piece == EMPTY:
                return []
            run.append((x, y))

    def apply(self, move) -> 'Board':
        """Apply a move (or pass) and return a new board"""
        new_board = self.copy()
        if move.is_pass:
            self._check_side(move)
            if self.valid_moves():
                raise IllegalMove(move, ILLEGAL_PASS, "there are valid moves available")
        else:
            captures = self.try_move(move)
            for pos in captures + [move.where]:
                new_board._set(pos, move.piece)
        new_board.to_move = opposite(self.to_move)
        return new_board

    def evaluate(self, evaluator=None) -> int:
        """Score this board; disc count when no evaluator is given"""
        if evaluator is None:
            from .eval import Evaluator
            evaluator = Evaluator(mode="discs")
        return evaluator.evaluate(self)

    def count(self) -> Tuple[int, int]:
        """Return (black_count, white_count)"""
        black_count = sum(1 for row in self.grid for cell in row if cell == BLACK)
        white_count = sum(1 for row in self.grid for cell in row if cell == WHITE)
        return black_count, white_count

    def terminal(self) -> bool:
        """Check if neither side can place a disc (game over)"""
        if self.valid_moves():
            return False
        other = Board(self.grid, opposite(self.to_move))
        return not other.valid_moves()

    def winner(self) -> Optional[int]:
        """Return winner: BLACK, WHITE, EMPTY (draw), or None (ongoing)"""
        if not self.terminal():
            return None

        black_count, white_count = self.count()
        if black_count > white_count:
            return BLACK
        elif white_count > black_count:
            return WHITE
        else:
            return EMPTY

    def render(self) -> str:
        """Text dump of the grid, one row per line"""
        symbols = {BLACK: "b", WHITE: "w", EMPTY: "."}
        return "\n".join(" ".join(symbols[cell] for cell in row) for row in self.grid)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid and self.to_move == other.to_move

    def __repr__(self) -> str:
        return f"Board(to_move={self.to_move}, count={self.count()})"
