"""Unit tests for /src/chess/setup.py"""

import random
from collections import Counter

import pytest

from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.position import Position
from src.chess.setup import (
    COLUMNS,
    LOWER_ROOK_COLUMNS,
    STANDARD_BACK_RANK,
    UPPER_ROOK_COLUMNS,
    ShuffledBackRank,
    create_board,
    reduced_board,
    standard_board,
)
from src.core.exceptions import SetupError
from src.core.shared_types import Color, PieceType, SetupPolicy

SHUFFLE_RUNS = 10_000


def assert_full_army(board: Board) -> None:
    assert len(board) == 32
    for color in Color:
        counts = Counter(placed.type for placed in board.placed_pieces(color))
        assert counts == {
            PieceType.PAWN: 8,
            PieceType.ROOK: 2,
            PieceType.KNIGHT: 2,
            PieceType.BISHOP: 2,
            PieceType.QUEEN: 1,
            PieceType.KING: 1,
        }
        pawn_row = 1 if color == Color.WHITE else 6
        assert set(board.locate_pieces(Piece(PieceType.PAWN, color))) == {
            Position(pawn_row, column) for column in COLUMNS
        }


# -- STANDARD --
def test_standard_board() -> None:
    board = standard_board()
    assert_full_army(board)
    assert board.piece(Position.from_algebraic("e1")) == Piece(PieceType.KING, Color.WHITE)
    assert board.piece(Position.from_algebraic("d8")) == Piece(PieceType.QUEEN, Color.BLACK)
    assert board.piece(Position.from_algebraic("h8")) == Piece(PieceType.ROOK, Color.BLACK)
    assert all(placed.position.is_within_bounds() for placed in board)


def test_standard_board_diagram() -> None:
    assert str(standard_board()).splitlines() == [
        "rnbqkbnr",
        "pppppppp",
        "........",
        "........",
        "........",
        "........",
        "PPPPPPPP",
        "RNBQKBNR",
    ]


# -- REDUCED --
def test_reduced_board() -> None:
    board = reduced_board()
    assert len(board) == 15
    assert [p.position.to_algebraic() for p in board.placed_pieces(Color.WHITE) if p.type == PieceType.PAWN] == [
        "a2", "b2", "c2", "d2", "e2", "f2", "g2", "h2",
    ]
    black = {p.position.to_algebraic(): p.type for p in board.placed_pieces(Color.BLACK)}
    assert black == {
        "b8": PieceType.KNIGHT,
        "c8": PieceType.KNIGHT,
        "e8": PieceType.KING,
        "f8": PieceType.KNIGHT,
        "g8": PieceType.KNIGHT,
        "e7": PieceType.PAWN,
    }
    assert board.king_position(Color.WHITE) == Position.from_algebraic("e1")


# -- SHUFFLED --
def test_shuffled_back_ranks_are_valid() -> None:
    shuffler = ShuffledBackRank(random.Random(2024))
    for _ in range(SHUFFLE_RUNS):
        back_rank = shuffler.draw()

        assert sorted(back_rank) == list(COLUMNS)
        assert back_rank[4] == PieceType.KING
        assert Counter(back_rank.values()) == Counter(STANDARD_BACK_RANK.values())

        rooks = [column for column, piece_type in back_rank.items() if piece_type == PieceType.ROOK]
        assert rooks[0] in LOWER_ROOK_COLUMNS
        assert rooks[1] in UPPER_ROOK_COLUMNS

        bishops = [column for column, piece_type in back_rank.items() if piece_type == PieceType.BISHOP]
        assert bishops[0] % 2 != bishops[1] % 2


def test_shuffled_bishops_on_opposite_square_colors() -> None:
    """The two bishops of one player never share a square color"""
    board = ShuffledBackRank(random.Random(5)).board()
    for color in Color:
        first, second = board.locate_pieces(Piece(PieceType.BISHOP, color))
        assert first.is_light_square != second.is_light_square


def test_shuffled_board_mirrors_back_rank() -> None:
    board = ShuffledBackRank(random.Random(11)).board()
    assert_full_army(board)
    for column in COLUMNS:
        white = board.piece(Position(0, column))
        black = board.piece(Position(7, column))
        assert white is not None and black is not None
        assert white.type == black.type


def test_shuffled_layouts_vary() -> None:
    shuffler = ShuffledBackRank(random.Random(3))
    layouts = {tuple(shuffler.draw().values()) for _ in range(50)}
    assert len(layouts) > 1


def test_same_seed_same_layout() -> None:
    first = ShuffledBackRank(random.Random(42)).draw()
    second = ShuffledBackRank(random.Random(42)).draw()
    assert first == second


def test_no_admissible_column_left() -> None:
    shuffler = ShuffledBackRank(random.Random(0))
    back_rank = {column: PieceType.KNIGHT for column in LOWER_ROOK_COLUMNS}
    with pytest.raises(SetupError):
        shuffler._place(back_rank, PieceType.ROOK, LOWER_ROOK_COLUMNS)


def test_place_respects_accept() -> None:
    shuffler = ShuffledBackRank(random.Random(0))
    back_rank = {4: PieceType.KING}
    for _ in range(20):
        column = shuffler._place(dict(back_rank), PieceType.BISHOP, COLUMNS, accept=lambda c: c % 2 == 1)
        assert column % 2 == 1


# -- FACTORY --
@pytest.mark.parametrize(
    "policy, size",
    [(SetupPolicy.STANDARD, 32), (SetupPolicy.REDUCED, 15), (SetupPolicy.SHUFFLED, 32)],
)
def test_create_board(policy: SetupPolicy, size: int) -> None:
    board = create_board(policy, random.Random(1))
    assert len(board) == size
    for color in Color:
        assert board.king_position(color) is not None


def test_create_board_unknown_policy() -> None:
    with pytest.raises(SetupError):
        create_board("crazyhouse")  # type: ignore[arg-type]
