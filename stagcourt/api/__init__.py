"""
API Module - The serialized boundary of the engine.

Turns raw camelCase action requests into engine actions, applies them
per game under a lock and renders per-player views. There is no
transport here; callers wire it to HTTP, websockets or a test.
"""

from .schemas import (
    ActionRequest,
    ActionResponse,
    CreateGameResponse,
    PlayerViewModel,
    PublicPlayerModel,
    parse_action_request,
)
from .service import GameNotFoundError, GameRecord, GameService

__all__ = [
    "ActionRequest",
    "ActionResponse",
    "CreateGameResponse",
    "PlayerViewModel",
    "PublicPlayerModel",
    "parse_action_request",
    "GameNotFoundError",
    "GameRecord",
    "GameService",
]
