"""
Pending Actions - The inner state machine of interactive resolutions.

Each variant is a dataclass carrying the seat whose input is awaited
plus the accumulators its resolution needs (seat queues, counters,
collected cards). Exactly one variant, or None, is held in
GameState.pending_action.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Union

from .action import ActionType
from .cards import Card


@dataclass
class DraftKingdom:
    """Opponents pick Kingdom cards after the active player drafted one."""
    type: ClassVar[str] = "draftKingdom"
    action: ClassVar[ActionType] = ActionType.DRAFT_KINGDOM_PICK

    drafter_seat: int
    current_drafter_seat: int
    remaining_drafter_seats: list[int] = field(default_factory=list)

    @property
    def responder_seat(self) -> int:
        return self.current_drafter_seat


@dataclass
class HuntResponse:
    """Opponents in turn decide whether to reveal Healing against a Hunt."""
    type: ClassVar[str] = "huntResponse"
    action: ClassVar[ActionType] = ActionType.HUNT_RESPONSE

    hunt_player_seat: int
    hunt_card: Card
    hunt_total_value: int
    responding_seat: int
    discards_per_player: int
    draws_for_hunter: int
    remaining_responder_seats: list[int] = field(default_factory=list)
    averters: int = 0
    non_averter_seats: list[int] = field(default_factory=list)

    @property
    def responder_seat(self) -> int:
        return self.responding_seat


@dataclass
class HuntDiscard:
    """Opponents who did not avert discard, one at a time."""
    type: ClassVar[str] = "huntDiscard"
    action: ClassVar[ActionType] = ActionType.HUNT_DISCARD

    hunt_player_seat: int
    hunt_card: Card
    current_discard_seat: int
    discards_per_player: int
    draws_for_hunter: int
    averters: int = 0
    remaining_discard_seats: list[int] = field(default_factory=list)

    @property
    def responder_seat(self) -> int:
        return self.current_discard_seat


@dataclass
class MagiChoice:
    """The Magi player splits the effect points."""
    type: ClassVar[str] = "magiChoice"
    action: ClassVar[ActionType] = ActionType.MAGI_CHOICE

    player_seat: int
    magi_card: Card

    @property
    def responder_seat(self) -> int:
        return self.player_seat


@dataclass
class MagiPlaceCards:
    """The Magi player picks which hand cards go to the bottom of the deck."""
    type: ClassVar[str] = "magiPlaceCards"
    action: ClassVar[ActionType] = ActionType.MAGI_PLACE_CARDS

    player_seat: int
    magi_card: Card
    place_bottom_count: int

    @property
    def responder_seat(self) -> int:
        return self.player_seat


@dataclass
class TitheDiscard:
    """Discard-two/draw-two cycle, owner first then opponents clockwise."""
    type: ClassVar[str] = "titheDiscard"
    action: ClassVar[ActionType] = ActionType.TITHE_DISCARD

    tithe_player_seat: int
    tithe_card: Card
    current_discard_seat: int
    remaining_discard_seats: list[int] = field(default_factory=list)
    contributions_so_far: int = 0

    @property
    def responder_seat(self) -> int:
        return self.current_discard_seat


@dataclass
class TitheContribute:
    """The Tithe owner decides whether to pay for another cycle."""
    type: ClassVar[str] = "titheContribute"
    action: ClassVar[ActionType] = ActionType.TITHE_CONTRIBUTE

    player_seat: int
    tithe_card: Card
    contributions_so_far: int = 0

    @property
    def responder_seat(self) -> int:
        return self.player_seat


@dataclass
class KingCommandResponse:
    """Opponents in turn discard a Stag or show a Stag-free hand."""
    type: ClassVar[str] = "kingCommandResponse"
    action: ClassVar[ActionType] = ActionType.KING_COMMAND_RESPONSE

    command_player_seat: int
    responding_seat: int
    remaining_responder_seats: list[int] = field(default_factory=list)
    discarded_stags: list[Card] = field(default_factory=list)

    @property
    def responder_seat(self) -> int:
        return self.responding_seat


@dataclass
class KingCommandCollect:
    """The command player takes any subset of the surrendered Stags."""
    type: ClassVar[str] = "kingCommandCollect"
    action: ClassVar[ActionType] = ActionType.KING_COMMAND_COLLECT

    command_player_seat: int
    discarded_stags: list[Card] = field(default_factory=list)

    @property
    def responder_seat(self) -> int:
        return self.command_player_seat


@dataclass
class DiscardToHandLimit:
    type: ClassVar[str] = "discardToHandLimit"
    action: ClassVar[ActionType] = ActionType.DISCARD_TO_HAND_LIMIT

    player_seat: int
    must_discard: int

    @property
    def responder_seat(self) -> int:
        return self.player_seat


@dataclass
class DiscardForCost:
    """Discards owed for a Stag placement chosen after the Stag was announced."""
    type: ClassVar[str] = "discardForCost"
    action: ClassVar[ActionType] = ActionType.DISCARD_FOR_COST

    player_seat: int
    stag_card: Card
    must_discard: int

    @property
    def responder_seat(self) -> int:
        return self.player_seat


@dataclass
class StagKingdomDraft:
    """Opponents pick Kingdom cards after a Stag was placed."""
    type: ClassVar[str] = "stagKingdomDraft"
    action: ClassVar[ActionType] = ActionType.STAG_KINGDOM_PICK

    stag_player_seat: int
    current_drafter_seat: int
    remaining_drafter_seats: list[int] = field(default_factory=list)

    @property
    def responder_seat(self) -> int:
        return self.current_drafter_seat


@dataclass
class StagKingdomPickSelf:
    """The Stag player picks last from the Kingdom."""
    type: ClassVar[str] = "stagKingdomPickSelf"
    action: ClassVar[ActionType] = ActionType.STAG_KINGDOM_PICK

    stag_player_seat: int

    @property
    def responder_seat(self) -> int:
        return self.stag_player_seat


PendingAction = Union[
    DraftKingdom,
    HuntResponse,
    HuntDiscard,
    MagiChoice,
    MagiPlaceCards,
    TitheDiscard,
    TitheContribute,
    KingCommandResponse,
    KingCommandCollect,
    DiscardToHandLimit,
    DiscardForCost,
    StagKingdomDraft,
    StagKingdomPickSelf,
]

PENDING_TYPES: tuple[type, ...] = PendingAction.__args__


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _plain(value: Any) -> Any:
    if isinstance(value, Card):
        return value.id
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def pending_to_dict(pending: PendingAction | None) -> dict[str, Any] | None:
    """Render a pending action the way the boundary sees it (camelCase, string ids)."""
    if pending is None:
        return None
    data: dict[str, Any] = {"type": pending.type}
    for f in fields(pending):
        data[_camel(f.name)] = _plain(getattr(pending, f.name))
    return data
