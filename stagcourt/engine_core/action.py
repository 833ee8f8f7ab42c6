"""
Action System - Actions, payloads, rejections and results.

Actions represent:
1. Kingdom actions (draw, draft, play a Stag)
2. Territory actions (play a card, reveal a hand with nothing to play)
3. Responses to a pending interactive resolution

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .cards import Card


class ActionType(str, Enum):
    """Every action name accepted by the engine."""
    # Kingdom actions
    DRAW_CARD = "drawCard"
    DRAFT_KINGDOM = "draftKingdom"
    PLAY_STAG = "playStag"

    # Territory actions
    PLAY_TERRITORY = "playTerritory"
    NO_TERRITORY = "noTerritory"

    # Pending responses
    DRAFT_KINGDOM_PICK = "draftKingdomPick"
    STAG_KINGDOM_PICK = "stagKingdomPick"
    HUNT_RESPONSE = "huntResponse"
    HUNT_DISCARD = "huntDiscard"
    MAGI_CHOICE = "magiChoice"
    MAGI_PLACE_CARDS = "magiPlaceCards"
    TITHE_DISCARD = "titheDiscard"
    TITHE_CONTRIBUTE = "titheContribute"
    KING_COMMAND_RESPONSE = "kingCommandResponse"
    KING_COMMAND_COLLECT = "kingCommandCollect"
    DISCARD_TO_HAND_LIMIT = "discardToHandLimit"
    DISCARD_FOR_COST = "discardForCost"


KINGDOM_ACTIONS = frozenset({
    ActionType.DRAW_CARD,
    ActionType.DRAFT_KINGDOM,
    ActionType.PLAY_STAG,
})

TERRITORY_ACTIONS = frozenset({
    ActionType.PLAY_TERRITORY,
    ActionType.NO_TERRITORY,
})


class ErrorCode(str, Enum):
    """Structured rejection codes."""
    GAME_OVER = "GAME_OVER"
    UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
    PLAYER_ELIMINATED = "PLAYER_ELIMINATED"
    PHASE_MISMATCH = "PHASE_MISMATCH"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
    CARD_NOT_OWNED = "CARD_NOT_OWNED"
    INSUFFICIENT_CONTRIBUTIONS = "INSUFFICIENT_CONTRIBUTIONS"
    # Raised by the game service, never by the engine
    GAME_NOT_FOUND = "GAME_NOT_FOUND"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types read different fields.
    This is a generic container; validation happens in the handlers.
    """
    player_id: str

    # Single-card actions
    card_id: Card | None = None

    # Multi-card selections
    card_ids: list[Card] | None = None
    discard_ids: list[Card] | None = None

    # Hunt response
    healing_id: Card | None = None
    magi_id: Card | None = None

    # King's Command
    stag_id: Card | None = None
    stag_ids: list[Card] | None = None

    # Magi split
    draw_top: int = 0
    draw_bottom: int = 0
    place_bottom: int = 0

    # Tithe
    contribute: bool = False


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload

    @property
    def player_id(self) -> str:
        return self.payload.player_id

    @classmethod
    def draw_card(cls, player_id: str) -> Action:
        return cls(ActionType.DRAW_CARD, ActionPayload(player_id=player_id))

    @classmethod
    def draft_kingdom(cls, player_id: str, card: Card) -> Action:
        return cls(ActionType.DRAFT_KINGDOM, ActionPayload(player_id=player_id, card_id=card))

    @classmethod
    def play_stag(cls, player_id: str, stag: Card, discards: list[Card] | None = None) -> Action:
        """Factory for playing a Stag; omit discards to choose them afterwards."""
        return cls(
            ActionType.PLAY_STAG,
            ActionPayload(
                player_id=player_id,
                card_id=stag,
                discard_ids=list(discards) if discards is not None else None,
            ),
        )

    @classmethod
    def play_territory(cls, player_id: str, card: Card) -> Action:
        return cls(ActionType.PLAY_TERRITORY, ActionPayload(player_id=player_id, card_id=card))

    @classmethod
    def no_territory(cls, player_id: str) -> Action:
        return cls(ActionType.NO_TERRITORY, ActionPayload(player_id=player_id))

    @classmethod
    def draft_kingdom_pick(cls, player_id: str, card: Card) -> Action:
        return cls(ActionType.DRAFT_KINGDOM_PICK, ActionPayload(player_id=player_id, card_id=card))

    @classmethod
    def stag_kingdom_pick(cls, player_id: str, card: Card) -> Action:
        return cls(ActionType.STAG_KINGDOM_PICK, ActionPayload(player_id=player_id, card_id=card))

    @classmethod
    def hunt_response(
        cls,
        player_id: str,
        healing: Card | None = None,
        magi: Card | None = None,
    ) -> Action:
        """Factory for a Hunt response; no Healing means the Hunt is accepted."""
        return cls(
            ActionType.HUNT_RESPONSE,
            ActionPayload(player_id=player_id, healing_id=healing, magi_id=magi),
        )

    @classmethod
    def magi_choice(cls, player_id: str, draw_top: int, draw_bottom: int, place_bottom: int) -> Action:
        return cls(
            ActionType.MAGI_CHOICE,
            ActionPayload(
                player_id=player_id,
                draw_top=draw_top,
                draw_bottom=draw_bottom,
                place_bottom=place_bottom,
            ),
        )

    @classmethod
    def select_cards(cls, action_type: ActionType, player_id: str, cards: list[Card]) -> Action:
        """Factory for the card-selection responses (discards, Magi placement)."""
        return cls(action_type, ActionPayload(player_id=player_id, card_ids=list(cards)))

    @classmethod
    def tithe_contribute(cls, player_id: str, contribute: bool) -> Action:
        return cls(ActionType.TITHE_CONTRIBUTE, ActionPayload(player_id=player_id, contribute=contribute))

    @classmethod
    def king_command_response(cls, player_id: str, stag: Card | None) -> Action:
        return cls(ActionType.KING_COMMAND_RESPONSE, ActionPayload(player_id=player_id, stag_id=stag))

    @classmethod
    def king_command_collect(cls, player_id: str, stags: list[Card]) -> Action:
        return cls(ActionType.KING_COMMAND_COLLECT, ActionPayload(player_id=player_id, stag_ids=list(stags)))


@dataclass
class Rejection:
    """Why an action was refused. Produced before any state mutation."""
    reason: str
    code: ErrorCode = ErrorCode.MALFORMED_PAYLOAD


def reject(reason: str, code: ErrorCode = ErrorCode.MALFORMED_PAYLOAD) -> Rejection:
    return Rejection(reason=reason, code=code)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Error and error code (if failed)
    - Log lines appended by this action
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: ErrorCode | None = None

    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: Any, changes: list[str] | None = None) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, state_changes=changes or [])
