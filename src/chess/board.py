"""
The Board: an immutable mapping from Position to Piece.

Every 'modification' returns a new Board (copy-on-write), so older game states keep pointing to the board they were created with.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional, Self

from src.chess.pieces import Piece, PlacedPiece
from src.chess.position import BOARD_DIMENSIONS, Position
from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Color, PieceType


@dataclass(frozen=True)
class Board:
    """
    Whatever mapping is passed in gets copied into a read-only, position-sorted view.
    Positions outside of the board are rejected.
    """

    pieces: Mapping[Position, Piece] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        for position in self.pieces:
            if not position.is_within_bounds():
                raise InvalidBoardError(
                    f"Position {position} lies outside of the {BOARD_DIMENSIONS} board."
                )
        ordered = {position: self.pieces[position] for position in sorted(self.pieces)}
        object.__setattr__(self, "pieces", MappingProxyType(ordered))

    @classmethod
    def from_placed_pieces(cls, placed_pieces: Iterable[PlacedPiece]) -> Self:
        """
        The usual way a Board gets populated.
        ---

        Guards the board invariants:
        * every position lies on the board
        * no two pieces share a position
        """
        pieces: dict[Position, Piece] = {}
        for placed in placed_pieces:
            if placed.position in pieces:
                raise InvalidBoardError(
                    f"Cannot place {placed.piece} on {placed.position.to_algebraic()}: occupied by {pieces[placed.position]}."
                )
            pieces[placed.position] = placed.piece
        return cls(pieces)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return dict(self.pieces) == dict(other.pieces)

    def __hash__(self) -> int:
        return hash(frozenset(self.pieces.items()))

    def __len__(self) -> int:
        return len(self.pieces)

    def __iter__(self) -> Iterator[PlacedPiece]:
        for position, piece in self.pieces.items():
            yield PlacedPiece(position, piece)

    # --- LOOKUPS ---
    def piece(self, position: Position) -> Optional[Piece]:
        return self.pieces.get(position)

    def get_piece(self, position: Position, color: Color) -> Optional[PlacedPiece]:
        """
        The piece of the given color on that position.
        Returns None both for an empty square and for a square occupied by the opponent.
        """
        piece = self.piece(position)
        if piece is None or piece.color != color:
            return None
        return PlacedPiece(position, piece)

    def is_occupied(self, position: Position) -> bool:
        return position in self.pieces

    def is_occupied_by(self, position: Position, color: Color) -> bool:
        piece = self.piece(position)
        return piece is not None and piece.color == color

    def placed_pieces(self, color: Optional[Color] = None) -> list[PlacedPiece]:
        """All pieces (of one color, if specified) in canonical position order"""
        return [placed for placed in self if color is None or placed.color == color]

    def locate_pieces(self, piece: Piece) -> list[Position]:
        return [position for position, found in self.pieces.items() if found == piece]

    def king_position(self, color: Color) -> Optional[Position]:
        kings = self.locate_pieces(Piece(PieceType.KING, color))
        return kings[0] if kings else None

    # --- COPY-ON-WRITE UPDATES ---
    def with_piece(self, position: Position, piece: Piece) -> "Board":
        """New board with the piece put on the position (replacing whatever stood there)."""
        pieces = dict(self.pieces)
        pieces[position] = piece
        return Board(pieces)

    def without_piece(self, position: Position) -> "Board":
        pieces = dict(self.pieces)
        pieces.pop(position, None)
        return Board(pieces)

    def with_move(self, source: Position, target: Position) -> "Board":
        """Move the piece standing on source to target. Whatever stood on target is captured."""
        pieces = dict(self.pieces)
        pieces[target] = pieces.pop(source)
        return Board(pieces)

    def __str__(self) -> str:
        """Diagram with white at the bottom. Handy when debugging a failing test."""
        rows: list[str] = []
        for row in range(BOARD_DIMENSIONS[0] - 1, -1, -1):
            symbols = [
                piece.symbol if (piece := self.piece(Position(row, column))) else "."
                for column in range(BOARD_DIMENSIONS[1])
            ]
            rows.append("".join(symbols))
        return "\n".join(rows)
