"""Defines the chess pieces. Only (type, color) matters: where a piece stands is kept by the Board."""

from dataclasses import dataclass

from src.chess.position import Position
from src.core.shared_types import Color, PieceType

PIECE_SYMBOLS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

SYMBOL_TO_PIECE: dict[str, PieceType] = {
    value: key for key, value in PIECE_SYMBOLS.items()
}


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @property
    def symbol(self) -> str:
        # upper case: White pieces, lower case: Black pieces
        symbol = PIECE_SYMBOLS[self.type]
        return symbol.upper() if self.color == Color.WHITE else symbol


@dataclass(frozen=True)
class PlacedPiece:
    """A piece together with the position it stands on"""

    position: Position
    piece: Piece

    @property
    def color(self) -> Color:
        return self.piece.color

    @property
    def type(self) -> PieceType:
        return self.piece.type
