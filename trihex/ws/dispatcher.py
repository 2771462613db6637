"""Event-dispatch boundary between the socket transport and a board session.

Every event runs under one lock per session, so a reconcile-and-commit never
interleaves with another event. Oracle calls are synchronous, so nothing
observes the oracle between reconciliation and commit.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from pydantic import ValidationError

from trihex.board.errors import DecodeError
from trihex.board.models import Cell, Color, Piece
from trihex.board.session import BoardSession, MoveOutcome
from trihex.ws.messages import ErrorPayload, GameUpdated, SocketEvent, TurnUpdated

logger = logging.getLogger(__name__)

Emitter = Callable[[str, dict], Awaitable[None]]


class GameEventDispatcher:
    """Routes socket events and local clicks into one BoardSession."""

    def __init__(self, session: BoardSession, emit: Emitter) -> None:
        self.session = session
        self._emit = emit
        self._lock = asyncio.Lock()
        self.status: str | None = None
        self.last_error: str | None = None

    def handlers(self) -> dict[str, Callable[[Any], Awaitable[Any]]]:
        """Event name -> coroutine, for registering with a socket client."""
        return {
            SocketEvent.MOVE.value: self.on_move,
            SocketEvent.TURN_UPDATED.value: self.on_turn_updated,
            SocketEvent.GAME_UPDATED.value: self.on_game_updated,
            SocketEvent.ERROR.value: self.on_error,
        }

    # ------------------------------------------------------------------ #
    #  Incoming events
    # ------------------------------------------------------------------ #

    async def on_move(self, payload: Any) -> MoveOutcome:
        async with self._lock:
            outcome = self.session.receive_wire_move(payload)
        if outcome.ok:
            logger.info(
                f"Applied remote move {outcome.move.from_cell.key} -> {outcome.move.to_cell.key}"
            )
        return outcome

    async def on_turn_updated(self, payload: Any) -> bool:
        try:
            turn = Color.from_name(TurnUpdated.model_validate(payload).current_turn)
        except (ValidationError, DecodeError) as e:
            logger.warning(f"Invalid turn-updated payload: {e}")
            return False
        async with self._lock:
            return self.session.sync_turn(turn)

    async def on_game_updated(self, payload: Any) -> None:
        try:
            update = GameUpdated.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Invalid game-updated payload: {e}")
            return
        self.status = update.status
        logger.info(f"Game status is now {update.status}")

    async def on_error(self, payload: Any) -> None:
        try:
            message = ErrorPayload.model_validate(payload).message
        except ValidationError:
            message = str(payload)
        self.last_error = message
        logger.error(f"Server reported error: {message}")

    # ------------------------------------------------------------------ #
    #  Local input
    # ------------------------------------------------------------------ #

    async def select(self, piece: Piece) -> bool:
        async with self._lock:
            return self.session.click_piece(piece)

    async def choose_destination(self, cell: Cell) -> bool:
        """Commit the selected piece's move onto ``cell`` and broadcast it.

        Returns False when nothing was committed or the broadcast failed; in
        the latter case the move stays applied locally and ``last_error`` says so.
        """
        async with self._lock:
            wire = self.session.click_destination(cell)
            if wire is None:
                return False
            try:
                await self._emit(SocketEvent.MOVE.value, wire.to_payload())
            except Exception as e:
                self.last_error = f"Move committed locally but not sent: {e}"
                logger.error(f"Broadcast of move {wire.to_payload()} failed", exc_info=e)
                return False
        return True
