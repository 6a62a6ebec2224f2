"""Unit tests for src/services/game_service.py"""

from collections.abc import Iterator
from uuid import uuid4

import pytest

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
)
from src.core.exceptions import GameStateError, IllegalMoveError, RepositoryError
from src.core.shared_types import Color, PieceType, SetupPolicy, Status
from src.db.repository import InMemoryGameRepository
from src.services.game_service import GameService


@pytest.fixture
def repository() -> Iterator[InMemoryGameRepository]:
    """Ensures to clear the repository between tests"""
    repo = InMemoryGameRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(repository: InMemoryGameRepository) -> GameService:
    return GameService(repository)


def play(service: GameService, response: GameResponse, *moves_uci: str) -> GameResponse:
    for uci in moves_uci:
        response = service.make_move(
            MoveRequest(game_id=response.game_id, from_square=uci[:2], to_square=uci[2:4])
        )
    return response


# --- SERVICE - CREATE NEW GAME ----
def test_create_a_new_game(service: GameService, repository: InMemoryGameRepository) -> None:
    """Check that new game is created, persisted in repo, and return has the appropriate information."""
    response = service.create_new_game(CreateGameRequest())

    assert isinstance(response, GameResponse)
    assert repository.get_game(response.game_id) is not None
    assert len(response.pieces) == 32
    assert response.pieces["e1"] == "K"
    assert response.pieces["d8"] == "q"
    assert response.color_to_move == Color.WHITE
    assert response.status == Status.ONGOING
    assert response.winner is None
    assert response.move_history == []


def test_create_reduced_game(service: GameService) -> None:
    response = service.create_new_game(CreateGameRequest(policy=SetupPolicy.REDUCED))
    assert len(response.pieces) == 15


def test_seeded_shuffled_games_are_identical(service: GameService) -> None:
    request = CreateGameRequest(policy=SetupPolicy.SHUFFLED, seed=1960)
    first = service.create_new_game(request)
    second = service.create_new_game(request)
    assert first.game_id != second.game_id
    assert first.pieces == second.pieces


# --- SERVICE - GET GAME ----
def test_get_game(service: GameService) -> None:
    created = service.create_new_game(CreateGameRequest())
    fetched = service.get_game(GetGameRequest(game_id=created.game_id))
    assert fetched == created


def test_get_unknown_game(service: GameService) -> None:
    with pytest.raises(RepositoryError):
        service.get_game(GetGameRequest(game_id=uuid4()))


# --- SERVICE - LEGAL MOVES ----
def test_legal_moves(service: GameService) -> None:
    created = service.create_new_game(CreateGameRequest())
    response = service.legal_moves(LegalMovesRequest(game_id=created.game_id))
    assert isinstance(response, LegalMovesResponse)
    assert response.color == Color.WHITE
    assert len(response.legal_moves) == 20


def test_legal_moves_of_one_square(service: GameService) -> None:
    created = service.create_new_game(CreateGameRequest())
    response = service.legal_moves(LegalMovesRequest(game_id=created.game_id, square="b1"))
    assert sorted(response.legal_moves) == ["b1a3", "b1c3"]


# --- SERVICE - MAKE MOVE ----
def test_make_move(service: GameService) -> None:
    created = service.create_new_game(CreateGameRequest())
    response = play(service, created, "e2e4")
    assert response.pieces["e4"] == "P"
    assert "e2" not in response.pieces
    assert response.color_to_move == Color.BLACK
    assert response.move_history == ["e2e4"]


def test_make_illegal_move(service: GameService) -> None:
    created = service.create_new_game(CreateGameRequest())
    with pytest.raises(IllegalMoveError):
        play(service, created, "e2e5")
    # nothing changed
    assert service.get_game(GetGameRequest(game_id=created.game_id)) == created


def test_checkmate_reports_winner(service: GameService) -> None:
    created = service.create_new_game(CreateGameRequest())
    response = play(service, created, "f2f3", "e7e5", "g2g4", "d8h4")
    assert response.status == Status.CHECKMATE
    assert response.winner == Color.BLACK
    with pytest.raises(GameStateError):
        play(service, response, "a2a3")


def test_make_move_with_promotion(service: GameService) -> None:
    """Reduced layout: march the a-pawn up and take a knight on b8 (promoting)"""
    created = service.create_new_game(CreateGameRequest(policy=SetupPolicy.REDUCED))
    response = play(service, created, "a2a4", "e8d8", "a4a5", "d8e8", "a5a6", "e8d8", "a6a7", "d8e8")
    response = service.make_move(
        MoveRequest(
            game_id=response.game_id,
            from_square="a7",
            to_square="b8",
            promote_to=PieceType.QUEEN,
        )
    )
    assert response.pieces["b8"] == "Q"
    assert response.move_history[-1] == "a7b8q"


# --- SERVICE - UNDO ----
def test_undo_move(service: GameService) -> None:
    created = service.create_new_game(CreateGameRequest())
    play(service, created, "e2e4", "e7e5")
    response = service.undo_move(GetGameRequest(game_id=created.game_id))
    assert response.move_history == ["e2e4"]
    assert response.color_to_move == Color.BLACK


def test_undo_without_moves(service: GameService) -> None:
    created = service.create_new_game(CreateGameRequest())
    with pytest.raises(GameStateError):
        service.undo_move(GetGameRequest(game_id=created.game_id))


# --- SERVICE - DELETE ----
def test_delete_game(service: GameService, repository: InMemoryGameRepository) -> None:
    created = service.create_new_game(CreateGameRequest())
    service.delete_game(DeleteGameRequest(game_id=created.game_id))
    assert repository.get_game(created.game_id) is None


def test_delete_unknown_game(service: GameService) -> None:
    with pytest.raises(RepositoryError):
        service.delete_game(DeleteGameRequest(game_id=uuid4()))
