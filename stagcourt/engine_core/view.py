"""
View Projector - What one player is allowed to see.

build_player_view is read-only: it copies the parts of the state a
player may see (own hand, every territory, hand counts, the Kingdom,
pile sizes and the log tail) and lists the actions that player can
take right now.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .action import ActionType
from .cards import stag_discard_cost
from .pending import pending_to_dict
from .scoring import hand_limit, stag_points
from .state import GameState, PlayerState, TurnPhase


@dataclass
class PublicPlayerInfo:
    """Everything about a player that the whole table can see."""
    player_id: str
    seat_index: int
    name: str
    hand_count: int
    territory: list[str]
    territory_magi_as_healing: list[str]
    contributions_remaining: int
    contributions_made: int
    ante: int
    stag_points: int
    hand_limit: int
    eliminated: bool


@dataclass
class PlayerView:
    """The state as seen by one player."""
    game_id: str
    player_id: str
    seat_index: int
    hand: list[str]
    players: list[PublicPlayerInfo]
    kingdom: list[str]
    in_play: list[str]
    deck_count: int
    discard_count: int
    burned_count: int
    turn_phase: str
    turn_number: int
    current_seat: int | None
    awaiting_seat: int | None
    pending_action: dict[str, Any] | None
    available_actions: list[str] = field(default_factory=list)
    log: list[str] = field(default_factory=list)
    winner: str | None = None
    win_reason: str | None = None


def awaiting_seat(state: GameState) -> int | None:
    """The seat whose input the game is waiting on, if any."""
    if state.is_over:
        return None
    if state.pending_action is not None:
        return state.pending_action.responder_seat
    if state.turn_phase in (TurnPhase.KINGDOM_ACTION, TurnPhase.TERRITORY_ACTION):
        return state.current_seat
    return None


def can_play_stag(player: PlayerState) -> bool:
    """True if some Stag in hand has enough other cards to pay for it."""
    others = len(player.hand) - 1
    return any(c.is_stag and stag_discard_cost(c.value) <= others for c in player.hand)


def available_actions(state: GameState, player_id: str) -> list[ActionType]:
    """
    Actions the player may submit right now.

    Empty once the game is over, for eliminated players, and for
    anyone the game is not waiting on.
    """
    player = state.get_player(player_id)
    if player is None or player.eliminated or state.is_over:
        return []

    pending = state.pending_action
    if pending is not None:
        if pending.responder_seat == player.seat_index:
            return [pending.action]
        return []

    if player.seat_index != state.current_seat:
        return []

    if state.turn_phase == TurnPhase.KINGDOM_ACTION:
        actions = [ActionType.DRAW_CARD]
        if state.kingdom:
            actions.append(ActionType.DRAFT_KINGDOM)
        if can_play_stag(player):
            actions.append(ActionType.PLAY_STAG)
        return actions

    if state.turn_phase == TurnPhase.TERRITORY_ACTION:
        if any(not c.is_stag for c in player.hand):
            return [ActionType.PLAY_TERRITORY]
        return [ActionType.NO_TERRITORY]

    return []


def build_player_view(state: GameState, player_id: str) -> PlayerView:
    """
    Project the state for one player.

    Raises ValueError for a player id that is not in the game.
    """
    viewer = state.get_player(player_id)
    if viewer is None:
        raise ValueError(f"Unknown player: {player_id}")

    players = [
        PublicPlayerInfo(
            player_id=p.player_id,
            seat_index=p.seat_index,
            name=p.name,
            hand_count=len(p.hand),
            territory=[c.id for c in p.territory],
            territory_magi_as_healing=[c.id for c in p.territory_magi_as_healing],
            contributions_remaining=p.contributions_remaining,
            contributions_made=p.contributions_made,
            ante=p.ante,
            stag_points=stag_points(p),
            hand_limit=hand_limit(state, p),
            eliminated=p.eliminated,
        )
        for p in state.players
    ]

    tail = state.rules.log_tail
    log = [entry.message for entry in state.log[-tail:]] if tail else []

    return PlayerView(
        game_id=state.game_id,
        player_id=viewer.player_id,
        seat_index=viewer.seat_index,
        hand=[c.id for c in viewer.hand],
        players=players,
        kingdom=[c.id for c in state.kingdom],
        in_play=[c.id for c in state.in_play],
        deck_count=len(state.deck),
        discard_count=len(state.discard),
        burned_count=len(state.burned),
        turn_phase=state.turn_phase.value,
        turn_number=state.turn_number,
        current_seat=state.current_seat,
        awaiting_seat=awaiting_seat(state),
        pending_action=pending_to_dict(state.pending_action),
        available_actions=[a.value for a in available_actions(state, player_id)],
        log=log,
        winner=state.winner,
        win_reason=state.win_reason.value if state.win_reason else None,
    )
