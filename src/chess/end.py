"""
The end rule: classify the status of a game.

| in check | has legal move | status    |
|----------|----------------|-----------|
| no       | yes            | ONGOING   |
| yes      | yes            | CHECK     |
| yes      | no             | CHECKMATE |
| no       | no             | STALEMATE |

DRAW is decided by the draw rules, which are only consulted while the active player still has a legal move.
"""

from typing import Callable, Optional

from src.chess.castling import castling_rights
from src.chess.check import CheckRule
from src.chess.commands import Command
from src.chess.en_passant import en_passant_captures
from src.chess.game import GameState
from src.chess.legality import legal_updates
from src.chess.movement import MovementRule
from src.chess.position import Position
from src.core.shared_types import Color, PieceType, Status

# number of plies (half moves) without capture or pawn move
FIFTY_MOVE_PLIES = 100
REPETITIONS_FOR_DRAW = 3

MINOR_PIECES = (PieceType.KNIGHT, PieceType.BISHOP)

# castling rights still held, en passant captures open right now
RepetitionRights = tuple[frozenset[tuple[Color, Position]], frozenset[Command]]


# --- DRAW RULES ---
def insufficient_material(state: GameState) -> bool:
    """K vs K, K+minor vs K, and K+B vs K+B with both bishops on the same square color"""
    non_kings = [
        placed for placed in state.board if placed.type != PieceType.KING
    ]
    if not non_kings:
        return True
    if len(non_kings) == 1:
        return non_kings[0].type in MINOR_PIECES
    if len(non_kings) == 2:
        first, second = non_kings
        return (
            first.type == second.type == PieceType.BISHOP
            and first.color != second.color
            and first.position.is_light_square == second.position.is_light_square
        )
    return False


def threefold_repetition(state: GameState) -> bool:
    """
    The same position occurred (at least) twice before.
    Same position: same board, same player to move, same castling rights and same en passant captures.
    """
    occurrences = 1
    rights: Optional[RepetitionRights] = None
    for earlier in state.history():
        if earlier.active_player != state.active_player or earlier.board != state.board:
            continue
        if rights is None:
            rights = _repetition_rights(state)
        if _repetition_rights(earlier) == rights:
            occurrences += 1
    return occurrences >= REPETITIONS_FOR_DRAW


def _repetition_rights(state: GameState) -> RepetitionRights:
    return castling_rights(state), en_passant_captures(state)


def fifty_move_rule(state: GameState) -> bool:
    """100 plies in a row without any capture or pawn move"""
    plies = 0
    current = state
    for earlier in state.history():
        if _is_capture_or_pawn_move(earlier, current):
            return False
        plies += 1
        if plies >= FIFTY_MOVE_PLIES:
            return True
        current = earlier
    return False


def _is_capture_or_pawn_move(before: GameState, after: GameState) -> bool:
    """Derived from the boards: a piece disappeared, or the pawns are no longer where they were"""
    if len(after.board) < len(before.board):
        return True
    pawns_before = {p for p in before.board if p.type == PieceType.PAWN}
    pawns_after = {p for p in after.board if p.type == PieceType.PAWN}
    return pawns_before != pawns_after


DrawRule = Callable[[GameState], bool]
DEFAULT_DRAW_RULES: tuple[DrawRule, ...] = (
    insufficient_material,
    threefold_repetition,
    fifty_move_rule,
)


class EndRule:
    def __init__(
        self,
        check_rule: CheckRule,
        movement_rule: MovementRule,
        draw_rules: tuple[DrawRule, ...] = DEFAULT_DRAW_RULES,
    ) -> None:
        self.check_rule = check_rule
        self.movement_rule = movement_rule
        self.draw_rules = draw_rules

    def get_status(self, state: GameState) -> Status:
        in_check = self.check_rule.check(state, state.active_player)

        if not self.has_legal_move(state):
            return Status.CHECKMATE if in_check else Status.STALEMATE

        if any(rule(state) for rule in self.draw_rules):
            return Status.DRAW

        return Status.CHECK if in_check else Status.ONGOING

    def has_legal_move(self, state: GameState) -> bool:
        """Stops at the first legal update found"""
        for placed in state.board.placed_pieces(state.active_player.color):
            updates = legal_updates(
                state, placed.position, self.movement_rule, self.check_rule
            )
            if next(updates, None) is not None:
                return True
        return False
