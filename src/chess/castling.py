"""
The castling rule.

Castling rights are not stored anywhere: whether the king or the rook ever moved is read from the game's history.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Self

from src.chess.commands import Command, MoveCommand, sequence
from src.chess.game import GameState
from src.chess.pieces import Piece, PlacedPiece
from src.chess.position import BOARD_DIMENSIONS, Position
from src.chess.threats import ThreatAnalyzer
from src.core.shared_types import Color, PieceType

KING_START_COLUMN = 4


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    """

    king_from: Position
    king_to: Position
    rook_from: Position
    rook_to: Position

    @classmethod
    def on_row(
        cls, row: int, king_to: int, rook_from: int, rook_to: int
    ) -> Self:
        """Convenience method: to make mapping shown below more readable"""
        return cls(
            Position(row, KING_START_COLUMN),
            Position(row, king_to),
            Position(row, rook_from),
            Position(row, rook_to),
        )

    def squares_between(self) -> list[Position]:
        """Squares in between the king and the rook. Must all be empty."""
        low, high = sorted((self.king_from.column, self.rook_from.column))
        return [Position(self.king_from.row, column) for column in range(low + 1, high)]

    def king_path(self) -> list[Position]:
        """Squares the king stands on, passes, or lands on. None of them may be attacked."""
        step = 1 if self.king_to.column > self.king_from.column else -1
        return [
            Position(self.king_from.row, column)
            for column in range(self.king_from.column, self.king_to.column + step, step)
        ]


def _back_row(color: Color) -> int:
    return 0 if color == Color.WHITE else BOARD_DIMENSIONS[0] - 1


# The moves (in classical chess) made when castling: king side first, then queen side
CASTLING_RULES: dict[Color, list[CastlingSquares]] = {
    color: [
        CastlingSquares.on_row(_back_row(color), king_to=6, rook_from=7, rook_to=5),
        CastlingSquares.on_row(_back_row(color), king_to=2, rook_from=0, rook_to=3),
    ]
    for color in Color
}


class CastlingRule:
    def __init__(self, threat_analyzer: ThreatAnalyzer) -> None:
        self.threat_analyzer = threat_analyzer

    def get_commands(self, state: GameState, placed: PlacedPiece) -> Iterator[Command]:
        """
        Castling commands for a king of the active player
        ---

        **you are allowed to castle if**

        * Neither the king nor the rook ever moved (or got captured and replaced).
        * All squares in between the two pieces are empty.
        * You are not in check, and the king does not pass through or land on an attacked square.
        """
        color = placed.color
        if placed.type != PieceType.KING or color != state.active_player.color:
            return

        for squares in CASTLING_RULES[color]:
            if placed.position != squares.king_from:
                continue
            if not never_moved(state, squares, color):
                continue
            if any(state.board.is_occupied(p) for p in squares.squares_between()):
                continue
            if self.threat_analyzer.is_any_attacked(
                state.board, squares.king_path(), color.opponent
            ):
                continue

            yield sequence(
                MoveCommand(squares.king_from, squares.king_to),
                MoveCommand(squares.rook_from, squares.rook_to),
            )


def never_moved(state: GameState, squares: CastlingSquares, color: Color) -> bool:
    """King and rook stood on their squares in the current state and in every earlier state"""
    king = Piece(PieceType.KING, color)
    rook = Piece(PieceType.ROOK, color)
    for earlier in (state, *state.history()):
        if earlier.board.piece(squares.king_from) != king:
            return False
        if earlier.board.piece(squares.rook_from) != rook:
            return False
    return True


def castling_rights(state: GameState) -> frozenset[tuple[Color, Position]]:
    """(color, rook square) for every castling that is still possible in principle, whether or not the path is free now"""
    return frozenset(
        (color, squares.rook_from)
        for color, all_squares in CASTLING_RULES.items()
        for squares in all_squares
        if never_moved(state, squares, color)
    )
