"""
Game Service - In-process layer between callers and the engine.

The service:
1. Creates games and keeps their states in memory
2. Parses raw action requests and applies them to the right game
3. Serializes actions per game under that game's lock
4. Renders per-player views
5. Auto-passes for seats that have stalled too long

This layer is transport-agnostic; persistence is the caller's job.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable
import logging
import threading
import time

from pydantic import ValidationError

from ..bots.policy import BotPolicy, FirstLegalPolicy
from ..config import RulesConfig, ServiceConfig
from ..engine_core.action import Action, ErrorCode
from ..engine_core.reducer import apply_action
from ..engine_core.setup import create_game
from ..engine_core.state import GameState
from ..engine_core.view import awaiting_seat, build_player_view
from .schemas import ActionResponse, CreateGameResponse, PlayerViewModel, parse_action_request

logger = logging.getLogger(__name__)


class GameNotFoundError(KeyError):
    """No game with the requested id."""


@dataclass
class GameRecord:
    """One hosted game: its current state, its lock and when it last moved."""
    state: GameState
    lock: threading.Lock = field(default_factory=threading.Lock)
    last_activity: float = 0.0


@dataclass
class GameService:
    """
    Hosts games in memory.

    Usage:
        service = GameService()
        created = service.create_game(["Ann", "Bo"], seed=7)
        response = service.submit_action(created.game_id, {"action": "drawCard", "playerId": "p1"})
        view = service.get_view(created.game_id, "p2")
    """
    config: ServiceConfig = field(default_factory=ServiceConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    stall_policy: BotPolicy = field(default_factory=FirstLegalPolicy)
    clock: Callable[[], float] = time.monotonic

    _games: dict[str, GameRecord] = field(default_factory=dict)
    _registry_lock: threading.Lock = field(default_factory=threading.Lock)

    def create_game(
        self,
        player_names: list[str],
        seed: int | None = None,
        game_id: str | None = None,
    ) -> CreateGameResponse:
        """Create and register a new game. Raises ValueError for a bad player count."""
        state = create_game(player_names, seed=seed, rules=self.rules, game_id=game_id)
        with self._registry_lock:
            self._games[state.game_id] = GameRecord(state=state, last_activity=self.clock())
        logger.info("Hosting game %s", state.game_id)
        return CreateGameResponse(
            game_id=state.game_id,
            player_ids=[p.player_id for p in state.players],
            seed=seed,
        )

    def get_state(self, game_id: str) -> GameState:
        """The current state of a game. Callers must treat it as read-only."""
        return self._get_record(game_id).state

    def list_games(self) -> list[str]:
        with self._registry_lock:
            return list(self._games)

    def remove_game(self, game_id: str) -> bool:
        with self._registry_lock:
            return self._games.pop(game_id, None) is not None

    def submit_action(self, game_id: str, request: dict[str, Any]) -> ActionResponse:
        """
        Parse and apply one raw action request.

        Never raises for bad input: unknown games, malformed payloads and
        engine rejections all come back as an unsuccessful response.
        """
        try:
            record = self._get_record(game_id)
        except GameNotFoundError:
            return ActionResponse(
                success=False,
                error=f"Game {game_id} not found",
                error_code=ErrorCode.GAME_NOT_FOUND.value,
            )

        try:
            action = parse_action_request(request)
        except (ValidationError, ValueError) as e:
            return ActionResponse(
                success=False,
                error=str(e),
                error_code=ErrorCode.MALFORMED_PAYLOAD.value,
            )

        return self._apply(record, action)

    def submit(self, game_id: str, action: Action) -> ActionResponse:
        """Apply an already-built engine Action."""
        try:
            record = self._get_record(game_id)
        except GameNotFoundError:
            return ActionResponse(
                success=False,
                error=f"Game {game_id} not found",
                error_code=ErrorCode.GAME_NOT_FOUND.value,
            )
        return self._apply(record, action)

    def get_view(self, game_id: str, player_id: str) -> PlayerViewModel:
        """
        The view of one player.

        Raises GameNotFoundError or ValueError for an unknown player.
        """
        record = self._get_record(game_id)
        with record.lock:
            view = build_player_view(record.state, player_id)
        return PlayerViewModel.model_validate(view)

    def resolve_stalled(self, game_id: str, now: float | None = None) -> ActionResponse | None:
        """
        Auto-pass for the awaited seat once the game has been idle too long.

        Applies the stall policy's choice (the first legal action by
        default). Returns None when nothing was stalled.
        """
        record = self._get_record(game_id)
        now = self.clock() if now is None else now

        with record.lock:
            state = record.state
            if state.is_over or now - record.last_activity < self.config.stall_timeout_seconds:
                return None
            seat = awaiting_seat(state)
            if seat is None:
                return None
            player = state.get_player_by_seat(seat)
            decision = self.stall_policy.choose_action(state, player.player_id)
            if decision is None:
                return None

            logger.warning(
                "Game %s: %s stalled for %.0fs, auto-passing with %s",
                game_id, player.player_id, now - record.last_activity,
                decision.action.action_type.value,
            )
            return self._apply_locked(record, decision.action, now)

    def _get_record(self, game_id: str) -> GameRecord:
        with self._registry_lock:
            record = self._games.get(game_id)
        if record is None:
            raise GameNotFoundError(game_id)
        return record

    def _apply(self, record: GameRecord, action: Action) -> ActionResponse:
        with record.lock:
            return self._apply_locked(record, action, self.clock())

    def _apply_locked(self, record: GameRecord, action: Action, now: float) -> ActionResponse:
        result = apply_action(record.state, action)
        if not result.success:
            return ActionResponse(
                success=False,
                error=result.error,
                error_code=result.error_code.value if result.error_code else None,
            )

        record.state = result.new_state
        record.last_activity = now
        if record.state.is_over:
            logger.info("Game %s is over: %s wins", record.state.game_id, record.state.winner)

        view = build_player_view(record.state, action.player_id)
        return ActionResponse(
            success=True,
            changes=result.state_changes,
            view=PlayerViewModel.model_validate(view),
        )
