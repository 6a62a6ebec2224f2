"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.game import GameState
from src.chess.pieces import SYMBOL_TO_PIECE, Piece, PlacedPiece
from src.chess.position import Position
from src.chess.rulebook import Rulebook
from src.chess.session import Move
from src.core.shared_types import Color

# square name --> piece symbol (upper case: white, lower case: black)
Layout = dict[str, str]
StateFactory = Callable[..., GameState]
PlayFn = Callable[..., GameState]


def piece_from_symbol(symbol: str) -> Piece:
    color = Color.WHITE if symbol.isupper() else Color.BLACK
    return Piece(SYMBOL_TO_PIECE[symbol.lower()], color)


def board_from_layout(layout: Layout) -> Board:
    return Board.from_placed_pieces(
        PlacedPiece(Position.from_algebraic(square), piece_from_symbol(symbol))
        for square, symbol in layout.items()
    )


@pytest.fixture
def make_board() -> Callable[[Layout], Board]:
    """Call the inner function with a layout, e.g. {"e1": "K", "e8": "k"}"""
    return board_from_layout


@pytest.fixture
def rulebook() -> Rulebook:
    return Rulebook()


@pytest.fixture
def make_state() -> StateFactory:
    """Call the inner function with a layout (e.g. {"e1": "K", "e8": "k"}) and the color that should move first"""

    def _make_state(layout: Layout, to_move: Color = Color.WHITE) -> GameState:
        state = GameState.start(board_from_layout(layout))
        if to_move == Color.BLACK:
            state = state.with_turn_ended()
        return state

    return _make_state


@pytest.fixture
def play(rulebook: Rulebook) -> PlayFn:
    """Call the inner function with a state and a number of moves in UCI notation. Every move must be legal."""

    def _play(state: GameState, *moves_uci: str) -> GameState:
        for move_uci in moves_uci:
            requested = Move.from_uci(move_uci)
            matches = [
                update
                for update in rulebook.get_updates(state, requested.from_square)
                if Move.from_command(update.command) == requested
            ]
            assert len(matches) == 1, f"{move_uci} is not a legal move in\n{state.board}"
            state = matches[0].state
        return state

    return _play
