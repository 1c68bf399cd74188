"""Orchestration of communication from API models to business logic and persistence layers (and the reverse direction)."""

import logging
import time
from typing import Callable, Optional

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    PromotionRequest,
    RestartRequest,
)
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    RepositoryError,
)
from src.core.models import GameSnapshot
from src.core.room_id import generate_room_id
from src.core.shared_types import GameStatus, PieceType
from src.db.repository import GameRepository
from src.engine.game import GameState, SelectionResult
from src.engine.notation import format_move_for_display
from src.engine.position import Position
from src.engine.rules import legal_moves

_log = logging.getLogger(__name__)

Clock = Callable[[], float]

MOVE_COMPLETED = {SelectionResult.MOVED, SelectionResult.PROMOTION_PENDING}


class GameService:
    """
    Orchestration of layers for a chess game played in a room.

    NOTE: every call is a read-modify-write of the whole game. The caller must make sure there is
    only one mutation per room in flight at a time.
    """

    def __init__(self, repository: GameRepository, clock: Clock = time.time) -> None:
        self.repo = repository
        self.clock = clock

    # -- API logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Open a new room with the standard starting position."""
        room_id = request.room_id or generate_room_id()
        game = GameState.new_game(room_id=room_id, clock=self.clock)
        stored = self.repo.create_game(game.to_snapshot())
        return self._create_game_response(self._to_game(stored))

    def get_game(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game = self._to_game(self._fetch_game(request.room_id))
        return self._create_game_response(game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Legal destinations of the piece on the requested square. Empty when it is not that piece's turn."""
        game = self._to_game(self._fetch_game(request.room_id))
        origin = Position.from_algebraic(request.square)
        piece = game.board.piece(origin)

        destinations: list[Position] = []
        if (
            not game.is_over
            and game.pending_promotion is None
            and piece is not None
            and piece.color == game.current_player
        ):
            destinations = legal_moves(game.board, origin)

        return LegalMovesResponse(
            room_id=request.room_id,
            square=request.square,
            legal_moves=[target.to_algebraic() for target in destinations],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """
        Attempt a move
        -----

        Replays the two clicks of a player (origin, then destination) on the state machine.
        If the move reaches the back rank and `promote_to` is given, the promotion is resolved right away.
        """
        game = self._to_game(self._fetch_game(request.room_id))
        self._assert_in_progress(game)
        if game.pending_promotion is not None:
            raise GameStateError(
                f"Waiting for a promotion choice on {game.pending_promotion.position.to_algebraic()}"
            )

        origin = Position.from_algebraic(request.from_square)
        target = Position.from_algebraic(request.to_square)
        piece = game.board.piece(origin)
        if piece is not None and piece.color != game.current_player:
            raise NotYourTurnError(f"{game.current_player} to move, not {piece.color}")
        if game.select_square(origin) != SelectionResult.SELECTED:
            raise IllegalMoveError(
                f"No piece of {game.current_player} to move on {request.from_square}"
            )

        result = game.select_square(target)
        if result not in MOVE_COMPLETED:
            raise IllegalMoveError(
                f"Move not allowed: {request.from_square}{request.to_square}"
            )

        if result == SelectionResult.PROMOTION_PENDING and request.promote_to:
            self._promote(game, target, request.promote_to)

        return self._store(game)

    def promote(self, request: PromotionRequest) -> GameResponse:
        """Pick the piece for a pawn waiting on the back rank."""
        game = self._to_game(self._fetch_game(request.room_id))
        self._promote(game, Position.from_algebraic(request.square), request.piece_type)
        return self._store(game)

    def restart(self, request: RestartRequest) -> GameResponse:
        """Reset the room to the starting position. History and timers are discarded."""
        game = self._to_game(self._fetch_game(request.room_id)).restart()
        _log.info("Restarted room %s", request.room_id)
        return self._store(game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a room."""
        self.repo.delete_game(request.room_id)

    # -- Internal helpers --
    def _fetch_game(self, room_id: str) -> GameSnapshot:
        """Attempt to find the game in the repository and raise error if it fails."""
        snapshot = self.repo.get_game(room_id)
        if snapshot is None:
            raise RepositoryError(f"Game with {room_id=} not found.")
        return snapshot

    def _to_game(self, snapshot: GameSnapshot) -> GameState:
        return GameState.from_snapshot(snapshot, clock=self.clock)

    def _store(self, game: GameState) -> GameResponse:
        snapshot = game.to_snapshot()
        stored = self.repo.update_game(snapshot.room_id, snapshot)
        if stored is None:
            raise RepositoryError(f"Game with room_id={snapshot.room_id!r} not found.")
        return self._create_game_response(game)

    def _assert_in_progress(self, game: GameState) -> None:
        if game.is_over:
            raise GameStateError(f"Game is over. status: {game.game_status}")

    def _promote(self, game: GameState, square: Position, piece_type: PieceType) -> None:
        if not game.resolve_promotion(square, piece_type):
            raise IllegalMoveError(
                f"No promotion to {piece_type} pending on {square.to_algebraic()}"
            )

    def _create_game_response(self, game: GameState) -> GameResponse:
        """Convert the GameState into a GameResponse."""
        snapshot = game.to_snapshot()
        king_square: Optional[str] = (
            game.check.king_position.to_algebraic()
            if game.check.king_position is not None
            else None
        )
        pending_square: Optional[str] = (
            game.pending_promotion.position.to_algebraic()
            if game.pending_promotion is not None
            else None
        )
        return GameResponse(
            room_id=snapshot.room_id,
            board=snapshot.board_state,
            current_player=game.current_player,
            game_status=game.game_status,
            history=snapshot.history,
            move_list=self._move_list(game),
            timers=snapshot.timers,
            in_check=game.check.in_check,
            king_square=king_square,
            pending_promotion=pending_square,
            winner=game.winner,
        )

    def _move_list(self, game: GameState) -> list[str]:
        """
        Numbered move list, ex. ["1. e4", "e5", "2. Nf3"]

        Only the status after the last move is known, so only that move gets a check / mate marker.
        """
        # A move waiting for its promotion choice has not been evaluated yet
        last_index = len(game.history) - 1 if game.pending_promotion is None else -1
        return [
            format_move_for_display(
                move,
                index + 1,
                is_check=index == last_index and game.game_status == GameStatus.CHECK,
                is_checkmate=index == last_index
                and game.game_status == GameStatus.CHECKMATE,
            )
            for index, move in enumerate(game.history)
        ]
