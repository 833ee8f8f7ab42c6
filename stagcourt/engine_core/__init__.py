"""
Engine Core - Deterministic rules engine for Stagcourt.

The engine is the runtime that:
1. Creates a seeded GameState
2. Applies actions via the reducer, on a clone
3. Resolves card effects step-by-step through pending actions
4. Generates legal actions
5. Projects per-player views
"""

from .cards import ALL_CARDS, Card, CardKind
from .state import GameState, LogEntry, PlayerState, TurnPhase, WinReason
from .action import Action, ActionPayload, ActionResult, ActionType, ErrorCode
from .pending import PENDING_TYPES, PendingAction, pending_to_dict
from .reducer import Reducer, apply_action
from .view import PlayerView, PublicPlayerInfo, available_actions, awaiting_seat, build_player_view
from .action_generator import ActionGenerator, is_legal, legal_actions
from .setup import create_game

__all__ = [
    "ALL_CARDS",
    "Card",
    "CardKind",
    "GameState",
    "LogEntry",
    "PlayerState",
    "TurnPhase",
    "WinReason",
    "Action",
    "ActionPayload",
    "ActionResult",
    "ActionType",
    "ErrorCode",
    "PENDING_TYPES",
    "PendingAction",
    "pending_to_dict",
    "Reducer",
    "apply_action",
    "PlayerView",
    "PublicPlayerInfo",
    "available_actions",
    "awaiting_seat",
    "build_player_view",
    "ActionGenerator",
    "is_legal",
    "legal_actions",
    "create_game",
]
