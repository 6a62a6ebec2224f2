"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    """Classification of a game state. Always recomputed, never stored."""

    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"

    @property
    def is_over(self) -> bool:
        return self in (Status.CHECKMATE, Status.STALEMATE, Status.DRAW)


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class SetupPolicy(StrEnum):
    """How the starting board of a new game gets populated."""

    STANDARD = "standard"
    REDUCED = "reduced"
    SHUFFLED = "shuffled"
