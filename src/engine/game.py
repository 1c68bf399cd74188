"""
The GameState is the entrypoint into the domain layer for the service layer.
It owns turn order, the piece selection of the player to move, the move history and the promotion sub-flow.

All transitions are driven by a click on a square (`select_square`), a promotion choice (`resolve_promotion`) or a restart.
Invalid input never raises: it is rejected as a no-op and reported through the returned SelectionResult,
so callers can turn it into feedback for the user.
"""

import logging
import time
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Callable, Optional, Self

from src.core.exceptions import GameStateError
from src.core.models import GameSnapshot
from src.core.shared_types import ACTIVE_STATUSES, Color, GameStatus, PieceType
from src.engine.board import Board
from src.engine.codec import (
    decode_board,
    decode_color,
    decode_history,
    decode_status,
    decode_timers,
    encode_board,
    encode_history,
    encode_timers,
)
from src.engine.moves import Move, is_promotion_square
from src.engine.pieces import PROMOTION_OPTIONS, Piece
from src.engine.position import Position
from src.engine.rules import CheckInfo, check_info, derive_status, legal_moves
from src.engine.timers import PlayerTimers

_log = logging.getLogger(__name__)

Clock = Callable[[], float]


class SelectionResult(StrEnum):
    """What a click did. Anything but MOVED / PROMOTION_PENDING left the board untouched."""

    IGNORED = "ignored"
    SELECTED = "selected"
    DESELECTED = "deselected"
    MOVED = "moved"
    PROMOTION_PENDING = "promotion_pending"
    # clicked a square that is not a legal destination, or clicked out of turn
    REJECTED = "rejected"


@dataclass(frozen=True)
class PendingPromotion:
    """A pawn reached the back rank and waits for the player to pick a piece."""

    position: Position
    color: Color


@dataclass
class GameState:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    current_player: Color = Color.WHITE
    selected_piece: Optional[Position] = None
    valid_moves: list[Position] = field(default_factory=list)
    game_status: GameStatus = GameStatus.PLAYING
    history: list[Move] = field(default_factory=list)
    check: CheckInfo = field(default_factory=CheckInfo.none)
    pending_promotion: Optional[PendingPromotion] = None
    timers: PlayerTimers = field(default_factory=PlayerTimers.default)
    # session identity: survives a restart
    room_id: Optional[str] = None
    is_online: bool = False
    player_color: Optional[Color] = None
    clock: Clock = field(default=time.time, repr=False, compare=False)

    @classmethod
    def new_game(
        cls,
        room_id: Optional[str] = None,
        is_online: bool = False,
        player_color: Optional[Color] = None,
        clock: Clock = time.time,
    ) -> Self:
        """Standard starting position, white to move, empty history."""
        return cls(
            board=Board.standard(),
            timers=PlayerTimers.default(clock()),
            room_id=room_id,
            is_online=is_online,
            player_color=player_color,
            clock=clock,
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: GameSnapshot,
        is_online: bool = False,
        player_color: Optional[Color] = None,
        clock: Clock = time.time,
    ) -> Self:
        """Rebuild the game from persisted data. Malformed payloads get replaced by defaults (see src/engine/codec.py)"""
        board = decode_board(snapshot.board_state)
        history = decode_history(snapshot.history)
        current_player = decode_color(snapshot.current_player)
        return cls(
            board=board,
            current_player=current_player,
            game_status=decode_status(snapshot.game_status),
            history=history,
            check=check_info(board, current_player),
            pending_promotion=_pending_promotion_from_history(board, history),
            timers=decode_timers(snapshot.timers),
            room_id=snapshot.room_id,
            is_online=is_online,
            player_color=player_color,
            clock=clock,
        )

    def to_snapshot(self) -> GameSnapshot:
        """Encode back into a format the Service layer uses. Selection is not part of it: it only lives in the client."""
        if self.room_id is None:
            raise GameStateError("Cannot persist a game that is not bound to a room.")
        return GameSnapshot(
            room_id=self.room_id,
            board_state=encode_board(self.board),
            history=encode_history(self.history),
            timers=encode_timers(self.timers),
            current_player=self.current_player.value,
            game_status=self.game_status.value,
        )

    @property
    def is_over(self) -> bool:
        return self.game_status not in ACTIVE_STATUSES

    @property
    def winner(self) -> Optional[Color]:
        """
        For now only works for checkmate.
        The side to move just got mated, so the opponent must be the winner
        """
        if self.game_status != GameStatus.CHECKMATE:
            return None
        return self.current_player.opponent

    def select_square(self, position: Position) -> SelectionResult:
        """
        Handle a click on a square
        ----

        1. Game over, or waiting for a promotion choice? --> nothing happens
        2. No piece selected yet: select one of your own pieces (and compute where it can go)
        3. Piece selected:
            * same square --> deselect
            * legal destination --> make the move
            * another of your own pieces --> select that one instead
            * anything else --> deselect, and report the click as rejected
        """
        if self.is_over or self.pending_promotion is not None:
            return SelectionResult.IGNORED

        if not position.is_within_bounds():
            return SelectionResult.IGNORED

        if self._is_out_of_turn():
            _log.debug(
                "Rejected click on %s: %s to move, player is %s",
                position.to_algebraic(),
                self.current_player,
                self.player_color,
            )
            return SelectionResult.REJECTED

        piece = self.board.piece(position)
        if self.selected_piece is None:
            if self._is_own_piece(piece):
                self._select(position)
                return SelectionResult.SELECTED
            return SelectionResult.IGNORED

        if position == self.selected_piece:
            self._clear_selection()
            return SelectionResult.DESELECTED

        if position in self.valid_moves:
            return self.apply_move(self.selected_piece, position)

        if self._is_own_piece(piece):
            self._select(position)
            return SelectionResult.SELECTED

        self._clear_selection()
        return SelectionResult.REJECTED

    def apply_move(self, from_position: Position, to_position: Position) -> SelectionResult:
        """
        Make a move
        -----

        1. play the move on a copy of the board (the moved piece is marked as moved)
        2. charge the time spent to the player's clock
        3. pawn reached the back rank? --> record the move, wait for the promotion choice. Turn does NOT pass yet.
        4. otherwise: record the move, pass the turn and update check / game status
        """
        if self.is_over or self.pending_promotion is not None:
            return SelectionResult.IGNORED

        if self._is_out_of_turn():
            return SelectionResult.REJECTED

        piece = self.board.piece(from_position)
        if not self._is_own_piece(piece) or to_position not in legal_moves(
            self.board, from_position
        ):
            return SelectionResult.REJECTED
        # for the type checker: _is_own_piece() already made sure there is a piece
        assert piece is not None

        board = self.board.clone()
        captured_piece = board.move_piece(from_position, to_position)
        move = Move(
            from_position=from_position,
            to_position=to_position,
            piece=piece,
            captured_piece=captured_piece,
        )
        self.board = board
        self.timers = self.timers.charge(self.current_player, now=self.clock())
        self._clear_selection()

        if is_promotion_square(piece, to_position):
            move.is_promotion = True
            self.history.append(move)
            self.pending_promotion = PendingPromotion(to_position, piece.color)
            _log.debug("%s awaits a promotion choice", move.to_uci())
            return SelectionResult.PROMOTION_PENDING

        self.history.append(move)
        self._end_turn()
        _log.debug("%s played, status: %s", move.to_uci(), self.game_status)
        return SelectionResult.MOVED

    def resolve_promotion(self, position: Position, piece_type: PieceType) -> bool:
        """
        Replace the pawn waiting on `position` by a piece of the chosen type.

        NOTE: The promotion completes the move of the promoting player, so the turn passes here
        (same order as a normal move: first pass the turn, then derive check / status for the side to move).
        """
        pending = self.pending_promotion
        if pending is None or pending.position != position:
            return False
        if piece_type not in PROMOTION_OPTIONS:
            return False

        board = self.board.clone()
        board.promote_piece(position, piece_type)
        self.board = board
        self.history[-1] = replace(self.history[-1], promotion_piece=piece_type)
        self.pending_promotion = None
        self._end_turn()
        _log.debug("%s promoted, status: %s", self.history[-1].to_uci(), self.game_status)
        return True

    def restart(self) -> Self:
        """A brand new game. Only the session identity (room, online flag, player color) is kept."""
        return type(self).new_game(
            room_id=self.room_id,
            is_online=self.is_online,
            player_color=self.player_color,
            clock=self.clock,
        )

    # -- PRIVATE HELPERS ---
    def _is_out_of_turn(self) -> bool:
        """In online games you may only touch the board on your own turn"""
        return self.is_online and self.player_color != self.current_player

    def _is_own_piece(self, piece: Optional[Piece]) -> bool:
        return piece is not None and piece.color == self.current_player

    def _select(self, position: Position) -> None:
        self.selected_piece = position
        self.valid_moves = legal_moves(self.board, position)

    def _clear_selection(self) -> None:
        self.selected_piece = None
        self.valid_moves = []

    def _end_turn(self) -> None:
        """Pass the turn, then check for end conditions from the point of view of the next player."""
        self.current_player = self.current_player.opponent
        self.check = check_info(self.board, self.current_player)
        self.game_status = derive_status(self.board, self.current_player)


def _pending_promotion_from_history(
    board: Board, history: list[Move]
) -> Optional[PendingPromotion]:
    """A promotion that was interrupted: last move is flagged as a promotion, but no piece was picked yet."""
    if not history:
        return None
    last_move = history[-1]
    if not last_move.is_promotion or last_move.promotion_piece is not None:
        return None
    piece = board.piece(last_move.to_position)
    if piece is None or piece.type != PieceType.PAWN:
        return None
    return PendingPromotion(last_move.to_position, piece.color)
