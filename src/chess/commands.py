"""
Commands: side-effect free transformations of a GameState.

Key idea: every command exposes `apply(state) -> GameState | None`.
None means the command could not be applied (some precondition of the command did not hold).
No exceptions are raised, so legal move generation stays a plain pipeline of data.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from functools import reduce
from typing import Optional, Protocol

from src.chess.game import GameState, Update
from src.chess.pieces import Piece
from src.chess.position import Position


class Command(Protocol):
    def apply(self, state: GameState) -> Optional[GameState]: ...


@dataclass(frozen=True)
class MoveCommand:
    """Move the piece on source to target, capturing whatever (opponent) piece stands on target."""

    source: Position
    target: Position

    def apply(self, state: GameState) -> Optional[GameState]:
        piece = state.board.piece(self.source)
        if piece is None:
            return None
        if state.board.is_occupied_by(self.target, piece.color):
            return None
        return state.with_board(state.board.with_move(self.source, self.target))


@dataclass(frozen=True)
class RemoveCommand:
    position: Position

    def apply(self, state: GameState) -> Optional[GameState]:
        if not state.board.is_occupied(self.position):
            return None
        return state.with_board(state.board.without_piece(self.position))


@dataclass(frozen=True)
class SpawnCommand:
    """Put a new piece on an empty square (promotion)"""

    position: Position
    piece: Piece

    def apply(self, state: GameState) -> Optional[GameState]:
        if state.board.is_occupied(self.position):
            return None
        return state.with_board(state.board.with_piece(self.position, self.piece))


@dataclass(frozen=True)
class EndTurnCommand:
    """Swap the active and passive player. Carries no data: use the END_TURN instance."""

    def apply(self, state: GameState) -> Optional[GameState]:
        return state.with_turn_ended()


@dataclass(frozen=True)
class SetLastUpdateCommand:
    update: Update

    def apply(self, state: GameState) -> Optional[GameState]:
        return state.with_last_update(self.update)


@dataclass(frozen=True)
class SequenceCommand:
    """
    Apply `first`, then `second` to the result.
    If either one fails, the whole sequence fails (no partial effect: the input state is never touched anyway).
    """

    first: Command
    second: Command

    def apply(self, state: GameState) -> Optional[GameState]:
        intermediate = self.first.apply(state)
        if intermediate is None:
            return None
        return self.second.apply(intermediate)


END_TURN = EndTurnCommand()


def sequence(*commands: Command) -> Command:
    """Chain commands together: sequence(a, b, c) == SequenceCommand(a, SequenceCommand(b, c))"""
    if not commands:
        raise ValueError("sequence() needs at least one command")
    return reduce(
        lambda chained, command: SequenceCommand(command, chained),
        reversed(commands[:-1]),
        commands[-1],
    )


def flatten(command: Command) -> Iterator[Command]:
    """The primitive commands inside a (nested) sequence, in the order they are applied"""
    if isinstance(command, SequenceCommand):
        yield from flatten(command.first)
        yield from flatten(command.second)
    else:
        yield command
