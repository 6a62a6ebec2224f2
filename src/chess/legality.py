"""
Legal move generation
---

generate pseudo-legal candidates --> apply them speculatively --> reject the resulting states that break a global rule.
(In standard chess there is a single global rule: you may not leave your own king attacked.)
"""

import logging
from collections.abc import Iterator

from src.chess.check import CheckRule
from src.chess.commands import END_TURN, SequenceCommand, SetLastUpdateCommand
from src.chess.game import GameState, Update
from src.chess.movement import MovementRule
from src.chess.position import Position

logger = logging.getLogger(__name__)


def legal_updates(
    state: GameState,
    position: Position,
    movement_rule: MovementRule,
    check_rule: CheckRule,
) -> Iterator[Update]:
    """
    All legal updates for the piece of the active player standing on position.
    ----

    1. No piece of the active player on that square (empty, or the opponent's)? --> nothing to yield.
    2. Ask the movement rule for pseudo-legal commands.
    3. Extend every command: end the turn, then record the move as the last update.
    4. Apply it. A command that fails to apply is dropped.
    5. After the turn flip, the mover is the passive player: drop the states where their king is attacked.
    """
    placed = state.board.get_piece(position, state.active_player.color)
    if placed is None:
        return

    for move in movement_rule.get_commands(state, placed):
        turn_end = SequenceCommand(move, END_TURN)
        record = SequenceCommand(turn_end, SetLastUpdateCommand(Update(state, turn_end)))

        new_state = record.apply(state)
        if new_state is None:
            logger.debug("Dropped %s: could not be applied", move)
            continue

        if check_rule.check(new_state, new_state.passive_player):
            continue

        yield Update(new_state, record)
