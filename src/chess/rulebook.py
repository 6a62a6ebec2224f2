"""
The Rulebook is the entrypoint into the rules for the layers above (session, service).
It wires the separate rules together and exposes three things: creating a game, legal moves from a square, and the game status.
"""

import logging
import random
from typing import Optional

from src.chess.castling import CastlingRule
from src.chess.check import CheckRule
from src.chess.en_passant import EnPassantRule
from src.chess.end import EndRule
from src.chess.game import GameState, Update
from src.chess.legality import legal_updates
from src.chess.movement import MovementRule
from src.chess.position import Position
from src.chess.promotion import PromotionRule
from src.chess.setup import create_board
from src.chess.threats import ThreatAnalyzer
from src.core.shared_types import SetupPolicy, Status

logger = logging.getLogger(__name__)


class Rulebook:
    """The standard chess rulebook"""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        threat_analyzer = ThreatAnalyzer()
        castling_rule = CastlingRule(threat_analyzer)
        en_passant_rule = EnPassantRule()
        promotion_rule = PromotionRule()

        self.rng = rng
        self.check_rule = CheckRule(threat_analyzer)
        self.movement_rule = MovementRule(castling_rule, en_passant_rule, promotion_rule)
        self.end_rule = EndRule(self.check_rule, self.movement_rule)

    def create_game(self, policy: SetupPolicy = SetupPolicy.STANDARD) -> GameState:
        """New game, populated according to the given setup policy. White moves first."""
        board = create_board(policy, self.rng)
        logger.debug("Created %s game:\n%s", policy, board)
        return GameState.start(board)

    def get_status(self, state: GameState) -> Status:
        return self.end_rule.get_status(state)

    def get_updates(self, state: GameState, position: Position) -> list[Update]:
        """
        All legal updates (future game states) for the piece on the specified position.
        Empty if the position does not hold a piece of the active player.
        """
        updates = list(
            legal_updates(state, position, self.movement_rule, self.check_rule)
        )
        logger.debug(
            "%d legal update(s) from %s", len(updates), position.to_algebraic()
        )
        return updates

    def get_all_updates(self, state: GameState) -> dict[Position, list[Update]]:
        """Legal updates for every piece of the active player (only the pieces that can move)"""
        all_updates: dict[Position, list[Update]] = {}
        for placed in state.board.placed_pieces(state.active_player.color):
            updates = self.get_updates(state, placed.position)
            if updates:
                all_updates[placed.position] = updates
        return all_updates
