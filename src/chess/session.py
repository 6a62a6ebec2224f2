"""
The GameSession is the entrypoint into the domain layer for the service layer.
It keeps track of the current (immutable) GameState and translates moves in UCI notation to the Updates the Rulebook produces.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.chess.commands import Command, MoveCommand, SpawnCommand, flatten
from src.chess.game import GameState, Update
from src.chess.pieces import PIECE_SYMBOLS, SYMBOL_TO_PIECE
from src.chess.position import Position
from src.chess.rulebook import Rulebook
from src.core.exceptions import GameStateError, IllegalMoveError
from src.core.shared_types import Color, PieceType, SetupPolicy, Status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    """Description of a move: where a piece went from/to (and what it promoted into)"""

    from_square: Position
    to_square: Position
    promote_to: Optional[PieceType] = None

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q)
        * "e1g1": the king castles king side
        """
        if len(uci) not in (4, 5):
            raise IllegalMoveError(f"Cannot interpret {uci!r} as a move in UCI notation.")
        try:
            from_square = Position.from_algebraic(uci[:2])
            to_square = Position.from_algebraic(uci[2:4])
        except ValueError as e:
            raise IllegalMoveError(f"Cannot interpret {uci!r} as a move in UCI notation.") from e
        if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
            raise IllegalMoveError(f"Move {uci!r} leaves the board.")
        promote_to = None
        if len(uci) == 5:
            if uci[4] not in SYMBOL_TO_PIECE:
                raise IllegalMoveError(f"Unknown promotion piece in {uci!r}.")
            promote_to = SYMBOL_TO_PIECE[uci[4]]
        return cls(from_square, to_square, promote_to)

    @classmethod
    def from_command(cls, command: Command) -> Self:
        """
        Read the move off a (composed) command:
        the first primitive move gives the squares (for castling: the king's move), a spawned piece gives the promotion.
        """
        primitives = list(flatten(command))
        first_move = next(c for c in primitives if isinstance(c, MoveCommand))
        spawned = [c.piece.type for c in primitives if isinstance(c, SpawnCommand)]
        return cls(
            from_square=first_move.source,
            to_square=first_move.target,
            promote_to=spawned[0] if spawned else None,
        )

    def to_uci(self) -> str:
        piece_char = PIECE_SYMBOLS[self.promote_to] if self.promote_to else ""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{piece_char}"


@dataclass
class GameSession:
    rulebook: Rulebook
    state: GameState

    @classmethod
    def new_game(
        cls, rulebook: Rulebook, policy: SetupPolicy = SetupPolicy.STANDARD
    ) -> Self:
        return cls(rulebook, rulebook.create_game(policy))

    @property
    def status(self) -> Status:
        return self.rulebook.get_status(self.state)

    @property
    def color_to_move(self) -> Color:
        return self.state.active_player.color

    @property
    def winner(self) -> Optional[Color]:
        """Only for checkmate: the player to move just got mated, so the opponent won."""
        if self.status != Status.CHECKMATE:
            return None
        return self.state.passive_player.color

    @property
    def moves(self) -> list[Move]:
        """Moves played so far, in order. Read from the history of the current state."""
        moves: list[Move] = []
        update = self.state.last_update
        while update is not None:
            moves.append(Move.from_command(update.command))
            update = update.state.last_update
        return moves[::-1]

    def legal_moves(self, square: Optional[Position] = None) -> list[Move]:
        """Legal moves of the player to move (only those of the piece on `square`, if specified)"""
        if square is not None:
            updates = self.rulebook.get_updates(self.state, square)
        else:
            updates = [
                update
                for square_updates in self.rulebook.get_all_updates(self.state).values()
                for update in square_updates
            ]
        return [Move.from_command(update.command) for update in updates]

    def make_move(self, move_uci: str) -> Status:
        """
        Attempt to make a move
        -----

        1. the game must still be going on
        2. find the legal update that matches the requested move
        3. that update becomes the new state
        """
        status = self.status
        if status.is_over:
            raise GameStateError(f"Game is over. status: {status}")

        requested = Move.from_uci(move_uci)
        update = self._find_update(requested)
        if update is None:
            logger.warning("Rejected move %s for %s", move_uci, self.color_to_move)
            raise IllegalMoveError(f"Move not allowed: {move_uci}")

        self.state = update.state
        logger.info("Played %s", move_uci)
        return self.status

    def undo(self) -> GameState:
        """Go back to the state before the last move"""
        previous = self.state.previous_state
        if previous is None:
            raise GameStateError("No moves to undo.")
        self.state = previous
        return previous

    def _find_update(self, requested: Move) -> Optional[Update]:
        for update in self.rulebook.get_updates(self.state, requested.from_square):
            if Move.from_command(update.command) == requested:
                return update
        return None
