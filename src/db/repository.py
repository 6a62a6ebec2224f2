"""Protocol repository, plus the in-memory implementation the service uses by default"""

from typing import Protocol
from uuid import UUID, uuid4

from src.chess.session import GameSession


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameSession | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameSession) -> UUID:
        """Store new game and return the newly created game ID."""
        ...

    def delete_game(self, game_id: UUID) -> GameSession | None:
        """Remove a game's record."""
        ...


class InMemoryGameRepository:
    """Sessions kept in a dictionary, for the lifetime of the process"""

    def __init__(self) -> None:
        self._games: dict[UUID, GameSession] = {}

    def get_game(self, game_id: UUID) -> GameSession | None:
        return self._games.get(game_id)

    def create_game(self, game: GameSession) -> UUID:
        game_id = uuid4()
        self._games[game_id] = game
        return game_id

    def delete_game(self, game_id: UUID) -> GameSession | None:
        return self._games.pop(game_id, None)

    def clear(self) -> None:
        self._games.clear()
