"""
Immutable game snapshots.

A GameState is never changed in place: applying a Command produces a new one, and the old state stays valid
(which is what history, undo and look-ahead simulation of candidate moves rely on).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Optional

from src.chess.board import Board
from src.core.shared_types import Color

if TYPE_CHECKING:
    from src.chess.commands import Command


@dataclass(frozen=True)
class Player:
    """Whether a player is active or passive follows from the GameState, not from the player."""

    color: Color


@dataclass(frozen=True)
class GameState:
    board: Board
    white_player: Player
    black_player: Player
    active_player: Player
    passive_player: Player
    last_update: Optional[Update] = None

    @classmethod
    def start(cls, board: Board) -> GameState:
        """Fresh game: white moves first, nothing happened yet."""
        white = Player(Color.WHITE)
        black = Player(Color.BLACK)
        return cls(
            board=board,
            white_player=white,
            black_player=black,
            active_player=white,
            passive_player=black,
        )

    def player(self, color: Color) -> Player:
        return self.white_player if color == Color.WHITE else self.black_player

    def with_board(self, board: Board) -> GameState:
        return replace(self, board=board)

    def with_turn_ended(self) -> GameState:
        return replace(
            self, active_player=self.passive_player, passive_player=self.active_player
        )

    def with_last_update(self, update: Update) -> GameState:
        return replace(self, last_update=update)

    @property
    def previous_state(self) -> Optional[GameState]:
        return self.last_update.state if self.last_update else None

    def history(self) -> Iterator[GameState]:
        """Earlier states, most recent first (following the chain of recorded updates)"""
        state = self.previous_state
        while state is not None:
            yield state
            state = state.previous_state


@dataclass(frozen=True)
class Update:
    """
    A (game state, command) pair.
    ---

    * Returned by legal move generation: `state` is the state *reached* by applying `command`.
    * Recorded as `GameState.last_update`: `state` is the state the move was *applied to*
        (a state cannot contain itself). Following these links gives the complete history of a game.
    """

    state: GameState
    command: Command
