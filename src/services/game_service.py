"""Orchestration of communication from API models to the chess domain and the repository (and the reverse direction)."""

import logging
import random
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
)
from src.chess.pieces import PIECE_SYMBOLS
from src.chess.position import Position
from src.chess.rulebook import Rulebook
from src.chess.session import GameSession, Move
from src.core.exceptions import RepositoryError
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Create a new game, populated according to the requested setup policy."""
        rng = random.Random(request.seed) if request.seed is not None else None
        session = GameSession.new_game(Rulebook(rng), request.policy)
        game_id = self.repo.create_game(session)
        logger.info("Created game %s (%s)", game_id, request.policy)
        return self._create_game_response(game_id, session)

    def get_game(self, request: GetGameRequest) -> GameResponse:
        session = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, session)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Legal moves of the player to move. (Only those from the requested square, if one was given.)"""
        session = self._fetch_game(request.game_id)
        square = Position.from_algebraic(request.square) if request.square else None
        legal_moves = session.legal_moves(square)
        return LegalMovesResponse(
            game_id=request.game_id,
            color=session.color_to_move,
            legal_moves=[move.to_uci() for move in legal_moves],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. IllegalMoveError / GameStateError propagate from the session."""
        session = self._fetch_game(request.game_id)
        move = Move(
            from_square=Position.from_algebraic(request.from_square),
            to_square=Position.from_algebraic(request.to_square),
            promote_to=request.promote_to,
        )
        session.make_move(move.to_uci())
        return self._create_game_response(request.game_id, session)

    def undo_move(self, request: GetGameRequest) -> GameResponse:
        session = self._fetch_game(request.game_id)
        session.undo()
        return self._create_game_response(request.game_id, session)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, session: GameSession) -> GameResponse:
        board = session.state.board
        return GameResponse(
            game_id=game_id,
            pieces={
                placed.position.to_algebraic(): placed.piece.symbol for placed in board
            },
            color_to_move=session.color_to_move,
            status=session.status,
            winner=session.winner,
            move_history=[move.to_uci() for move in session.moves],
        )

    def _fetch_game(self, game_id: UUID) -> GameSession:
        """Attempt to find the game in the repository and raise error if it fails."""
        session = self.repo.get_game(game_id)
        if session is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return session
