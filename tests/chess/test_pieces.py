"""Unit tests for /src/chess/pieces.py"""

import pytest

from src.chess.pieces import PIECE_SYMBOLS, Color, Piece, PieceType, PlacedPiece
from src.chess.position import Position


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_white_piece_symbols(piece_type: PieceType) -> None:
    """Capital letters are used for the white pieces"""
    piece = Piece(piece_type, Color.WHITE)
    assert piece.symbol == PIECE_SYMBOLS[piece_type].upper()


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_black_piece_symbols(piece_type: PieceType) -> None:
    """Lower case letters are used for the black pieces"""
    piece = Piece(piece_type, Color.BLACK)
    assert piece.symbol == PIECE_SYMBOLS[piece_type]


def test_pieces_are_values() -> None:
    """Only (type, color) matters: no identity"""
    assert Piece(PieceType.ROOK, Color.WHITE) == Piece(PieceType.ROOK, Color.WHITE)
    assert Piece(PieceType.ROOK, Color.WHITE) != Piece(PieceType.ROOK, Color.BLACK)


def test_pieces_are_immutable() -> None:
    piece = Piece(PieceType.PAWN, Color.WHITE)
    with pytest.raises(AttributeError):
        piece.type = PieceType.QUEEN  # type: ignore[misc]


def test_placed_piece_shortcuts() -> None:
    placed = PlacedPiece(Position(0, 4), Piece(PieceType.KING, Color.WHITE))
    assert placed.color == Color.WHITE
    assert placed.type == PieceType.KING
