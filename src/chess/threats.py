"""
Capturing rules / attacking rules

Where the movement rules answer
_"Where can the piece standing on the specified square go?"_

these rules answer
_"Is the specified square in the line-of-sight of a piece of the specified color and type?"_
"""

from typing import Callable

from src.chess.moves import (
    DIAGONALS,
    KING_DELTAS,
    KNIGHT_DELTAS,
    STRAIGHTS,
    Board,
    Vector,
    pawn_direction,
)
from src.chess.pieces import Piece
from src.chess.position import Position
from src.core.shared_types import Color, PieceType


def raycasting_attack(
    position: Position,
    by_color: Color,
    by_piece_types: tuple[PieceType, ...],
    board: Board,
    directions: list[Vector],
) -> bool:
    """
    Move along the directions until we hit a piece or the edge of the board.

    ---
    Returns TRUE if the first piece encountered along any direction is of the specified color and one of the specified types.
    """
    for d_row, d_column in directions:
        target = position.offset(d_row, d_column)
        while target.is_within_bounds():
            piece_found = board.piece(target)
            if piece_found is not None:
                if piece_found.color == by_color and piece_found.type in by_piece_types:
                    return True
                break
            target = target.offset(d_row, d_column)
    return False


def single_step_attack(
    position: Position,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    deltas: list[Vector],
) -> bool:
    """
    Raycasting is for sliding pieces. This is the equivalent for pawns, kings, and knights that just can move a single step along a direction.

    ---
    Returns TRUE if a piece of the specified color and type stands a single step away.
    """
    attacker = Piece(by_piece_type, by_color)
    for d_row, d_column in deltas:
        target = position.offset(d_row, d_column)
        if target.is_within_bounds() and board.piece(target) == attacker:
            return True
    return False


def is_attacked_by_pawn(position: Position, by_color: Color, board: Board) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric, so to check IF a white pawn could take on your square -->
    Must look one row DOWN the board. Hence, the vectors point opposite to the direction the pawn moves in.
    """
    backwards = -pawn_direction(by_color)
    inverse_pawn_take_deltas: list[Vector] = [(backwards, 1), (backwards, -1)]
    return single_step_attack(
        position, by_color, PieceType.PAWN, board, inverse_pawn_take_deltas
    )


def is_attacked_by_knight(position: Position, by_color: Color, board: Board) -> bool:
    return single_step_attack(position, by_color, PieceType.KNIGHT, board, KNIGHT_DELTAS)


def is_attacked_by_king(position: Position, by_color: Color, board: Board) -> bool:
    return single_step_attack(position, by_color, PieceType.KING, board, KING_DELTAS)


def is_attacked_diagonally(position: Position, by_color: Color, board: Board) -> bool:
    """Bishops and the queen"""
    return raycasting_attack(
        position, by_color, (PieceType.BISHOP, PieceType.QUEEN), board, DIAGONALS
    )


def is_attacked_straight(position: Position, by_color: Color, board: Board) -> bool:
    """Rooks and the queen"""
    return raycasting_attack(
        position, by_color, (PieceType.ROOK, PieceType.QUEEN), board, STRAIGHTS
    )


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Position, Color, Board], bool]
ATTACK_RULES: list[IsAttackedFn] = [
    is_attacked_by_pawn,
    is_attacked_by_knight,
    is_attacked_diagonally,
    is_attacked_straight,
    is_attacked_by_king,
]


class ThreatAnalyzer:
    """Answers whether a square is attacked. Consumed by the check rule and the castling rule."""

    def is_attacked(self, board: Board, position: Position, by_color: Color) -> bool:
        return any(rule(position, by_color, board) for rule in ATTACK_RULES)

    def is_any_attacked(
        self, board: Board, positions: list[Position], by_color: Color
    ) -> bool:
        return any(self.is_attacked(board, position, by_color) for position in positions)
