"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the target squares for each piece type.

Legality (not leaving your own king attacked) is checked later, by simulating the move. See legality.py
Special moves (castling, en passant, promotion) are produced by their own rules.
"""

from typing import Callable, Protocol

from src.chess.pieces import Piece
from src.chess.position import BOARD_DIMENSIONS, Position
from src.core.shared_types import Color, PieceType


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, position: Position) -> Piece | None: ...
    def is_occupied(self, position: Position) -> bool: ...


Vector = tuple[int, int]

DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


def pawn_direction(color: Color) -> int:
    """White moves UP the board (increasing rows), black moves DOWN"""
    return 1 if color == Color.WHITE else -1


def pawn_start_row(color: Color) -> int:
    return 1 if color == Color.WHITE else BOARD_DIMENSIONS[0] - 2


def promotion_row(color: Color) -> int:
    return BOARD_DIMENSIONS[0] - 1 if color == Color.WHITE else 0


# --- MOVEMENT RULES ---
def raycasting_targets(
    position: Position, board: Board, directions: list[Vector]
) -> list[Position]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board. An opponent's piece blocking the ray can be captured.
    """
    player_color = _color_on(position, board)

    targets: list[Position] = []
    for d_row, d_column in directions:
        target = position.offset(d_row, d_column)
        while target.is_within_bounds():
            if board.is_occupied(target):
                if _color_on(target, board) != player_color:
                    targets.append(target)
                break
            targets.append(target)
            target = target.offset(d_row, d_column)
    return targets


def single_step_targets(
    position: Position, board: Board, deltas: list[Vector]
) -> list[Position]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump a single step along a direction"""
    player_color = _color_on(position, board)

    targets: list[Position] = []
    for d_row, d_column in deltas:
        target = position.offset(d_row, d_column)
        if not target.is_within_bounds():
            continue
        if _color_on(target, board) != player_color:
            targets.append(target)
    return targets


def pawn_targets(position: Position, board: Board) -> list[Position]:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting row), if both squares are empty
    - takes diagonally

    NOTE: En passant and promotion are their own rules
    """
    color = _color_on(position, board)
    direction = pawn_direction(color)

    targets: list[Position] = []
    one_step = position.offset(direction, 0)
    if one_step.is_within_bounds() and not board.is_occupied(one_step):
        targets.append(one_step)
        two_steps = position.offset(2 * direction, 0)
        if position.row == pawn_start_row(color) and not board.is_occupied(two_steps):
            targets.append(two_steps)

    for d_column in (-1, 1):
        take = position.offset(direction, d_column)
        if take.is_within_bounds() and _color_on(take, board) == color.opponent:
            targets.append(take)
    return targets


def knight_targets(position: Position, board: Board) -> list[Position]:
    """Knights always move such that |delta_row| + |delta_column| = 3"""
    return single_step_targets(position, board, KNIGHT_DELTAS)


def bishop_targets(position: Position, board: Board) -> list[Position]:
    """Bishops move diagonally: |delta_row| = |delta_column|"""
    return raycasting_targets(position, board, DIAGONALS)


def rook_targets(position: Position, board: Board) -> list[Position]:
    """Rooks move either horizontally or vertically"""
    return raycasting_targets(position, board, STRAIGHTS)


def queen_targets(position: Position, board: Board) -> list[Position]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return bishop_targets(position, board) + rook_targets(position, board)


def king_targets(position: Position, board: Board) -> list[Position]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (see castling.py).
    """
    return single_step_targets(position, board, KING_DELTAS)


def _color_on(position: Position, board: Board) -> Color | None:
    piece = board.piece(position)
    return piece.color if piece else None


# -- STRATEGY PATTERN: MOVEMENT RULES ---
TargetsFn = Callable[[Position, Board], list[Position]]
MOVEMENT_RULES: dict[PieceType, TargetsFn] = {
    PieceType.PAWN: pawn_targets,
    PieceType.KNIGHT: knight_targets,
    PieceType.BISHOP: bishop_targets,
    PieceType.ROOK: rook_targets,
    PieceType.QUEEN: queen_targets,
    PieceType.KING: king_targets,
}
