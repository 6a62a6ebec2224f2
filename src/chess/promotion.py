"""The promotion rule: a pawn reaching the last row turns into another piece."""

from collections.abc import Iterator

from src.chess.commands import Command, MoveCommand, RemoveCommand, SpawnCommand, sequence
from src.chess.game import GameState
from src.chess.moves import Board, pawn_targets, promotion_row
from src.chess.pieces import Piece, PlacedPiece
from src.chess.position import Position
from src.core.shared_types import PieceType

PROMOTION_OPTIONS: list[PieceType] = [
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
]


class PromotionRule:
    def is_promotion(self, placed: PlacedPiece, target: Position) -> bool:
        """A pawn push (or take) that reaches the final row"""
        return placed.type == PieceType.PAWN and target.row == promotion_row(
            placed.color
        )

    def get_commands(self, state: GameState, placed: PlacedPiece) -> Iterator[Command]:
        """One command for every piece type the pawn can promote into, for every target on the final row."""
        if placed.type != PieceType.PAWN:
            return

        for target in self._promotion_targets(placed, state.board):
            for piece_type in PROMOTION_OPTIONS:
                yield sequence(
                    MoveCommand(placed.position, target),
                    RemoveCommand(target),
                    SpawnCommand(target, Piece(piece_type, placed.color)),
                )

    def _promotion_targets(self, placed: PlacedPiece, board: Board) -> list[Position]:
        return [
            target
            for target in pawn_targets(placed.position, board)
            if self.is_promotion(placed, target)
        ]
