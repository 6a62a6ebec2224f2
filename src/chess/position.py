"""
A position (square) on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True, order=True)
class Position:
    """
    Row 0 is white's back rank, column 0 is the a-file.
    Field order makes the ordering row-major: a1, b1, ..., h1, a2, ...
    """

    row: int
    column: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Position:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        column = ord(sq[0]) - ord("a")
        row = int(sq[1]) - 1
        return cls(row, column)

    def to_algebraic(self) -> str:
        return f"{chr(self.column + ord('a'))}{self.row + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.column < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_column: int) -> Position:
        """NOTE: result may lie outside of the board. Check with `is_within_bounds()`"""
        return Position(self.row + d_row, self.column + d_column)

    @property
    def is_light_square(self) -> bool:
        # a1 is a dark square
        return (self.row + self.column) % 2 == 1


def all_positions() -> list[Position]:
    """Every square of the board, in canonical (row-major) order"""
    return [
        Position(row, column)
        for row in range(BOARD_DIMENSIONS[0])
        for column in range(BOARD_DIMENSIONS[1])
    ]
