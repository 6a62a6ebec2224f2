"""
Starting positions
---

Three policies to populate the board of a new game:

* STANDARD: the classical starting position.
* REDUCED: a fixed, deliberately asymmetric layout (white: king + 8 pawns, black: king, 4 knights and a single pawn).
* SHUFFLED: the back rank is drawn at random (with constraints), the pawns are placed as usual.
"""

import logging
import random
from collections.abc import Iterable, Iterator
from typing import Callable, Optional

from src.chess.board import Board
from src.chess.castling import KING_START_COLUMN
from src.chess.pieces import Piece, PlacedPiece
from src.chess.position import BOARD_DIMENSIONS, Position
from src.core.exceptions import SetupError
from src.core.shared_types import Color, PieceType, SetupPolicy

logger = logging.getLogger(__name__)

BackRank = dict[int, PieceType]

COLUMNS = range(BOARD_DIMENSIONS[1])

STANDARD_BACK_RANK: BackRank = {
    0: PieceType.ROOK,
    1: PieceType.KNIGHT,
    2: PieceType.BISHOP,
    3: PieceType.QUEEN,
    4: PieceType.KING,
    5: PieceType.BISHOP,
    6: PieceType.KNIGHT,
    7: PieceType.ROOK,
}

# REDUCED layout. Each color gets its own back rank and pawn columns.
REDUCED_BACK_RANKS: dict[Color, BackRank] = {
    Color.WHITE: {4: PieceType.KING},
    Color.BLACK: {
        1: PieceType.KNIGHT,
        2: PieceType.KNIGHT,
        4: PieceType.KING,
        5: PieceType.KNIGHT,
        6: PieceType.KNIGHT,
    },
}
REDUCED_PAWN_COLUMNS: dict[Color, list[int]] = {
    Color.WHITE: list(COLUMNS),
    Color.BLACK: [4],
}

# SHUFFLED layout: one rook on either side of the king
LOWER_ROOK_COLUMNS = range(0, 3)
UPPER_ROOK_COLUMNS = range(5, 8)


def back_row(color: Color) -> int:
    return 0 if color == Color.WHITE else BOARD_DIMENSIONS[0] - 1


def pawn_row(color: Color) -> int:
    return 1 if color == Color.WHITE else BOARD_DIMENSIONS[0] - 2


def make_back_rank(color: Color, back_rank: BackRank) -> Iterator[PlacedPiece]:
    row = back_row(color)
    for column, piece_type in back_rank.items():
        yield PlacedPiece(Position(row, column), Piece(piece_type, color))


def make_pawns(color: Color, columns: Iterable[int] = COLUMNS) -> Iterator[PlacedPiece]:
    row = pawn_row(color)
    for column in columns:
        yield PlacedPiece(Position(row, column), Piece(PieceType.PAWN, color))


def make_board(back_ranks: dict[Color, BackRank], pawn_columns: dict[Color, list[int]]) -> Board:
    placed: list[PlacedPiece] = []
    for color in Color:
        placed.extend(make_back_rank(color, back_ranks[color]))
        placed.extend(make_pawns(color, pawn_columns[color]))
    return Board.from_placed_pieces(placed)


def standard_board() -> Board:
    return make_board(
        {color: STANDARD_BACK_RANK for color in Color},
        {color: list(COLUMNS) for color in Color},
    )


def reduced_board() -> Board:
    return make_board(REDUCED_BACK_RANKS, REDUCED_PAWN_COLUMNS)


class ShuffledBackRank:
    """
    Draws a random back rank by rejection sampling
    ----

    **Constraints**
    * The king is fixed on its usual column.
    * One rook is drawn from the columns left of the king, the other from the columns right of the king.
    * The two bishops end up on squares of opposite color.
    * Knights and queen go to whatever columns are left.

    Every draw picks a column uniformly at random and retries while the column is taken (or not admissible).
    Before drawing, we make sure at least one admissible column is left, so the retry loop always terminates.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def draw(self) -> BackRank:
        back_rank: BackRank = {KING_START_COLUMN: PieceType.KING}

        self._place(back_rank, PieceType.ROOK, LOWER_ROOK_COLUMNS)
        first_bishop = self._place(back_rank, PieceType.BISHOP, COLUMNS)
        self._place(back_rank, PieceType.ROOK, UPPER_ROOK_COLUMNS)
        self._place(
            back_rank,
            PieceType.BISHOP,
            COLUMNS,
            accept=lambda column: column % 2 != first_bishop % 2,
        )
        for piece_type in (PieceType.KNIGHT, PieceType.KNIGHT, PieceType.QUEEN):
            self._place(back_rank, piece_type, COLUMNS)

        logger.debug(
            "Shuffled back rank: %s",
            " ".join(back_rank[column].value for column in sorted(back_rank)),
        )
        return dict(sorted(back_rank.items()))

    def _place(
        self,
        back_rank: BackRank,
        piece_type: PieceType,
        columns: range,
        accept: Callable[[int], bool] = lambda column: True,
    ) -> int:
        admissible = [c for c in columns if c not in back_rank and accept(c)]
        if not admissible:
            raise SetupError(
                f"No column left for {piece_type} in {list(columns)}. Back rank so far: {back_rank}"
            )

        while True:
            column = self.rng.choice(columns)
            if column in admissible:
                back_rank[column] = piece_type
                return column

    def board(self) -> Board:
        """Both colors get the same (mirrored) back rank"""
        back_rank = self.draw()
        return make_board(
            {color: back_rank for color in Color},
            {color: list(COLUMNS) for color in Color},
        )


def create_board(policy: SetupPolicy, rng: Optional[random.Random] = None) -> Board:
    if policy == SetupPolicy.STANDARD:
        return standard_board()
    if policy == SetupPolicy.REDUCED:
        return reduced_board()
    if policy == SetupPolicy.SHUFFLED:
        return ShuffledBackRank(rng).board()
    raise SetupError(f"Unknown setup policy: {policy!r}")
