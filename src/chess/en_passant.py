"""The en passant rule: take a pawn that just passed yours with a double step."""

from collections.abc import Iterator

from src.chess.commands import Command, MoveCommand, RemoveCommand, sequence
from src.chess.game import GameState
from src.chess.moves import pawn_direction
from src.chess.pieces import Piece, PlacedPiece
from src.core.shared_types import PieceType


class EnPassantRule:
    def get_commands(self, state: GameState, placed: PlacedPiece) -> Iterator[Command]:
        """
        Check the adjacent files (on the same row as your pawn) for an opponent pawn that made a double step in the previous move.

        NOTE: Which move the opponent made is derived by comparing the board before and after the last update.
        """
        color = placed.color
        if placed.type != PieceType.PAWN or color != state.active_player.color:
            return

        previous = state.previous_state
        if previous is None:
            return

        opponent_pawn = Piece(PieceType.PAWN, color.opponent)
        opponent_direction = pawn_direction(color.opponent)
        for d_column in (-1, 1):
            landed = placed.position.offset(0, d_column)
            if not landed.is_within_bounds():
                continue
            started = landed.offset(-2 * opponent_direction, 0)
            passed = landed.offset(-opponent_direction, 0)
            if not started.is_within_bounds():
                continue

            made_double_step = (
                state.board.piece(landed) == opponent_pawn
                and previous.board.piece(started) == opponent_pawn
                and not state.board.is_occupied(started)
                and not previous.board.is_occupied(landed)
            )
            if made_double_step and not state.board.is_occupied(passed):
                yield sequence(
                    MoveCommand(placed.position, passed),
                    RemoveCommand(landed),
                )


def en_passant_captures(state: GameState) -> frozenset[Command]:
    """Every en passant capture open to the active player right now"""
    rule = EnPassantRule()
    return frozenset(
        command
        for placed in state.board.placed_pieces(state.active_player.color)
        for command in rule.get_commands(state, placed)
    )
