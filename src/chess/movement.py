"""
The movement rule: every pseudo-legal move of a single piece.

Pseudo-legal: consistent with the geometry of the piece and the preconditions of the special moves,
but not yet checked for leaving your own king attacked.
"""

from collections.abc import Iterator

from src.chess.castling import CastlingRule
from src.chess.commands import Command, MoveCommand
from src.chess.en_passant import EnPassantRule
from src.chess.game import GameState
from src.chess.moves import MOVEMENT_RULES
from src.chess.pieces import PlacedPiece
from src.chess.promotion import PromotionRule


class MovementRule:
    def __init__(
        self,
        castling_rule: CastlingRule,
        en_passant_rule: EnPassantRule,
        promotion_rule: PromotionRule,
    ) -> None:
        self.castling_rule = castling_rule
        self.en_passant_rule = en_passant_rule
        self.promotion_rule = promotion_rule

    def get_commands(self, state: GameState, placed: PlacedPiece) -> Iterator[Command]:
        """
        Combines the following (always in this order, so enumeration is reproducible)
        ---

        1. the basic movement rule of the piece type (pawn moves onto the final row excluded)
        2. promotion moves
        3. castling moves
        4. en passant moves
        """
        targets_fn = MOVEMENT_RULES[placed.type]
        for target in targets_fn(placed.position, state.board):
            if not self.promotion_rule.is_promotion(placed, target):
                yield MoveCommand(placed.position, target)

        yield from self.promotion_rule.get_commands(state, placed)
        yield from self.castling_rule.get_commands(state, placed)
        yield from self.en_passant_rule.get_commands(state, placed)
