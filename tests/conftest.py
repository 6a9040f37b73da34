import pytest

from othellobot.board import Board, BLACK, WHITE, EMPTY

SYMBOLS = {".": EMPTY, "b": BLACK, "w": WHITE}


def board_from_rows(rows, to_move=BLACK) -> Board:
    """rows[y-1][x-1] with '.', 'b', 'w'; missing rows are empty"""
    rows = list(rows) + ["........"] * (8 - len(rows))
    return Board.from_pieces([[SYMBOLS[ch] for ch in row] for row in rows], to_move)


def board_with(discs, to_move=BLACK) -> Board:
    """Empty board with {(x, y): piece} placed"""
    board = Board.empty(to_move)
    for (x, y), piece in discs.items():
        board.grid[y - 1][x - 1] = piece
    return board


@pytest.fixture
def place():
    return board_with


@pytest.fixture
def full_board_no_moves():
    """Board full of Black except one empty corner; White to move has no placement"""
    rows = ["." + "b" * 7] + ["b" * 8] * 7
    return board_from_rows(rows, WHITE)
