from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from trihex.board.errors import HistoryError
from trihex.board.models import MoveRecord
from trihex.config import settings

logger = logging.getLogger(__name__)


class HistoryUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="_id")
    username: str
    profile_picture_url: str | None = Field(default=None, alias="profilePictureUrl")


class HistoryPlayer(BaseModel):
    color: str
    user: HistoryUser


class GameMoves(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    game_id: str = Field(alias="gameId")
    name: str
    total_moves: int = Field(alias="totalMoves")
    moves: list[MoveRecord] = Field(default_factory=list)
    players: list[HistoryPlayer] = Field(default_factory=list)

    def ordered_moves(self) -> list[MoveRecord]:
        """Moves in canonical order (by move number, stable for ties)."""
        return sorted(self.moves, key=lambda m: m.move_number)


class HistoryClient:
    """Reads archived games from the history API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        token: str | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.history_api_url,
            timeout=timeout or settings.history_timeout_seconds,
            transport=transport,
            headers=headers,
        )

    async def __aenter__(self) -> HistoryClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_game_moves(self, game_id: str) -> GameMoves:
        path = f"/history/games/{game_id}/moves"
        try:
            response = await self._client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise HistoryError(
                f"History API returned {e.response.status_code} for game {game_id}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise HistoryError(f"History API request failed: {e}") from e

        try:
            game = GameMoves.model_validate(response.json())
        except (ValidationError, ValueError) as e:
            raise HistoryError(f"Malformed history for game {game_id}: {e}") from e

        logger.info(f"Fetched {len(game.moves)} moves for game {game_id}")
        return game
