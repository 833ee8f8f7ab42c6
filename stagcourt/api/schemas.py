"""
Pydantic Schemas - The request/response contract of the engine boundary.

Requests arrive as camelCase dicts of the form
{"action": <name>, "playerId": ..., ...payload}; the "action" field
selects the request model. Card ids are checked against the catalog
here, so the engine only ever sees Card values.

Error Codes (see engine_core.action.ErrorCode):
- MALFORMED_PAYLOAD: The request failed validation
- GAME_NOT_FOUND: No game with that id
- everything else: the engine rejected the action
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from ..engine_core.action import Action, ActionType
from ..engine_core.cards import Card


def _check_card_id(value: str) -> str:
    Card.parse(value)
    return value


CardId = Annotated[str, AfterValidator(_check_card_id)]

CAMEL_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


def _card(card_id: Optional[str]) -> Optional[Card]:
    return Card.parse(card_id) if card_id is not None else None


def _cards(card_ids: Optional[list[str]]) -> Optional[list[Card]]:
    return [Card.parse(c) for c in card_ids] if card_ids is not None else None


# =============================================================================
# Request Models
# =============================================================================

class ActionRequestBase(BaseModel):
    """Fields shared by every action request."""
    player_id: str

    model_config = {**CAMEL_CONFIG, "extra": "forbid"}


class DrawCardRequest(ActionRequestBase):
    action: Literal["drawCard"]

    def to_action(self) -> Action:
        return Action.draw_card(self.player_id)


class DraftKingdomRequest(ActionRequestBase):
    action: Literal["draftKingdom"]
    card_id: CardId

    def to_action(self) -> Action:
        return Action.draft_kingdom(self.player_id, Card.parse(self.card_id))


class PlayStagRequest(ActionRequestBase):
    """Place a Stag; leave discardIds out to choose the discards afterwards."""
    action: Literal["playStag"]
    card_id: CardId
    discard_ids: Optional[list[CardId]] = None

    def to_action(self) -> Action:
        return Action.play_stag(self.player_id, Card.parse(self.card_id), _cards(self.discard_ids))


class PlayTerritoryRequest(ActionRequestBase):
    action: Literal["playTerritory"]
    card_id: CardId

    def to_action(self) -> Action:
        return Action.play_territory(self.player_id, Card.parse(self.card_id))


class NoTerritoryRequest(ActionRequestBase):
    action: Literal["noTerritory"]

    def to_action(self) -> Action:
        return Action.no_territory(self.player_id)


class KingdomPickRequest(ActionRequestBase):
    """A Kingdom pick during a draft or after a Stag placement."""
    action: Literal["draftKingdomPick", "stagKingdomPick"]
    card_id: CardId

    def to_action(self) -> Action:
        card = Card.parse(self.card_id)
        if self.action == "draftKingdomPick":
            return Action.draft_kingdom_pick(self.player_id, card)
        return Action.stag_kingdom_pick(self.player_id, card)


class HuntResponseRequest(ActionRequestBase):
    """Reveal Healing (and optionally a Magi) to avert, or send nulls to accept."""
    action: Literal["huntResponse"]
    healing_id: Optional[CardId] = None
    magi_id: Optional[CardId] = None

    def to_action(self) -> Action:
        return Action.hunt_response(self.player_id, _card(self.healing_id), _card(self.magi_id))


class CardSelectionRequest(ActionRequestBase):
    """Any response that names an exact set of cards from hand."""
    action: Literal[
        "huntDiscard",
        "magiPlaceCards",
        "titheDiscard",
        "discardToHandLimit",
        "discardForCost",
    ]
    card_ids: list[CardId]

    def to_action(self) -> Action:
        return Action.select_cards(ActionType(self.action), self.player_id, _cards(self.card_ids))


class MagiChoiceRequest(ActionRequestBase):
    action: Literal["magiChoice"]
    draw_top: int = Field(0, ge=0)
    draw_bottom: int = Field(0, ge=0)
    place_bottom: int = Field(0, ge=0)

    def to_action(self) -> Action:
        return Action.magi_choice(self.player_id, self.draw_top, self.draw_bottom, self.place_bottom)


class TitheContributeRequest(ActionRequestBase):
    action: Literal["titheContribute"]
    contribute: bool

    def to_action(self) -> Action:
        return Action.tithe_contribute(self.player_id, self.contribute)


class KingCommandResponseRequest(ActionRequestBase):
    action: Literal["kingCommandResponse"]
    stag_id: Optional[CardId] = None

    def to_action(self) -> Action:
        return Action.king_command_response(self.player_id, _card(self.stag_id))


class KingCommandCollectRequest(ActionRequestBase):
    action: Literal["kingCommandCollect"]
    stag_ids: list[CardId] = Field(default_factory=list)

    def to_action(self) -> Action:
        return Action.king_command_collect(self.player_id, _cards(self.stag_ids))


ActionRequest = Annotated[
    Union[
        DrawCardRequest,
        DraftKingdomRequest,
        PlayStagRequest,
        PlayTerritoryRequest,
        NoTerritoryRequest,
        KingdomPickRequest,
        HuntResponseRequest,
        CardSelectionRequest,
        MagiChoiceRequest,
        TitheContributeRequest,
        KingCommandResponseRequest,
        KingCommandCollectRequest,
    ],
    Field(discriminator="action"),
]

_action_request_adapter: TypeAdapter = TypeAdapter(ActionRequest)


def parse_action_request(data: dict[str, Any]) -> Action:
    """
    Turn a raw {action, playerId, ...} dict into an engine Action.

    Raises pydantic.ValidationError for unknown actions, missing
    fields and card ids outside the catalog.
    """
    request = _action_request_adapter.validate_python(data)
    return request.to_action()


# =============================================================================
# Response Models
# =============================================================================

class PublicPlayerModel(BaseModel):
    """A seat as the whole table sees it."""
    player_id: str
    seat_index: int
    name: str
    hand_count: int
    territory: list[str] = Field(default_factory=list)
    territory_magi_as_healing: list[str] = Field(default_factory=list)
    contributions_remaining: int
    contributions_made: int
    ante: int
    stag_points: int
    hand_limit: int
    eliminated: bool

    model_config = {**CAMEL_CONFIG, "from_attributes": True}


class PlayerViewModel(BaseModel):
    """The per-player view, ready to be dumped as camelCase JSON."""
    game_id: str
    player_id: str
    seat_index: int
    hand: list[str] = Field(default_factory=list)
    players: list[PublicPlayerModel] = Field(default_factory=list)
    kingdom: list[str] = Field(default_factory=list)
    in_play: list[str] = Field(default_factory=list)
    deck_count: int
    discard_count: int
    burned_count: int
    turn_phase: str
    turn_number: int
    current_seat: Optional[int] = None
    awaiting_seat: Optional[int] = None
    pending_action: Optional[dict[str, Any]] = None
    available_actions: list[str] = Field(default_factory=list)
    log: list[str] = Field(default_factory=list)
    winner: Optional[str] = None
    win_reason: Optional[str] = None

    model_config = {**CAMEL_CONFIG, "from_attributes": True}


class ActionResponse(BaseModel):
    """Outcome of one submitted action."""
    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = None
    changes: list[str] = Field(default_factory=list)
    view: Optional[PlayerViewModel] = None

    model_config = CAMEL_CONFIG


class CreateGameResponse(BaseModel):
    game_id: str
    player_ids: list[str]
    seed: Optional[int] = None

    model_config = CAMEL_CONFIG
