"""
Hunt - Attack every opponent; each may avert with Healing.

1. Burn 3 cards, then the Hunt goes into play
2. Each living opponent in turn reveals Healing (optionally with a
   Magi) or accepts the Hunt
3. Opponents who did not avert discard, one at a time
4. The hunter draws, minus one per averter, and the Hunt enters
   the hunter's territory
"""

from __future__ import annotations
from typing import cast

from ..action import ActionPayload, Rejection, reject
from ..cards import Card, CardKind, count_kind
from ..pending import HuntDiscard, HuntResponse
from ..scoring import territory_healing_value
from ..state import GameState, PlayerState
from ..turn import finish_resolution
from ..zones import play_to_territory, settle_to_territory, stage_from_hand
from .common import (
    burn_cards,
    discard_selection,
    draw_into_hand,
    require_in_hand,
    resolution_interrupted,
    validate_selection,
)


def hunt_total_value(player: PlayerState, hunt: Card) -> int:
    """Card value plus one per Hunt already in the hunter's territory."""
    return hunt.value + count_kind(player.territory, CardKind.HUNT)


def hunt_swing(state: GameState, player: PlayerState) -> int:
    """Cards each non-averter discards, and the hunter's base draw."""
    return state.rules.hunt_base_swing + count_kind(player.territory, CardKind.KINGS_COMMAND)


def start_hunt(state: GameState, player: PlayerState, hunt: Card) -> Rejection | None:
    if not burn_cards(state, state.rules.hunt_burn_count):
        return None

    total = hunt_total_value(player, hunt)
    swing = hunt_swing(state, player)
    stage_from_hand(state, player, hunt)
    state.add_log(f"{player.name} plays {hunt.display_name()} (total Hunt value: {total}).")

    pending = HuntResponse(
        hunt_player_seat=player.seat_index,
        hunt_card=hunt,
        hunt_total_value=total,
        responding_seat=-1,
        discards_per_player=swing,
        draws_for_hunter=swing,
        remaining_responder_seats=state.opponent_seats_in_order(player.seat_index),
    )
    _next_responder(state, pending)
    return None


def handle_hunt_response(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    pending = cast(HuntResponse, state.pending_action)

    healing, magi = payload.healing_id, payload.magi_id
    if healing is None and magi is not None:
        return reject("A Magi can only be revealed together with a Healing card")
    if healing is not None:
        if healing.kind != CardKind.HEALING:
            return reject("Not a Healing card")
        rejection = require_in_hand(player, healing)
        if rejection:
            return rejection
    if magi is not None:
        if magi.kind != CardKind.MAGI:
            return reject("Not a Magi card")
        rejection = require_in_hand(player, magi)
        if rejection:
            return rejection

    if healing is None:
        state.add_log(f"{player.name} accepts the Hunt.")
        pending.non_averter_seats.append(player.seat_index)
    else:
        revealed = healing.display_name() + (" + Magi" if magi else "")
        total = healing.value + territory_healing_value(player)
        if magi is not None:
            total += state.rules.magi_healing_bonus

        if total >= pending.hunt_total_value:
            pending.averters += 1
            state.add_log(
                f"{player.name} averts the Hunt with {revealed} "
                f"(Healing {total} >= Hunt {pending.hunt_total_value})."
            )
        else:
            pending.non_averter_seats.append(player.seat_index)
            state.add_log(
                f"{player.name} tries to avert with {revealed} "
                f"(Healing {total} < Hunt {pending.hunt_total_value}) and fails!"
            )

        # Revealed cards stay revealed, averted or not
        play_to_territory(player, healing)
        if magi is not None:
            play_to_territory(player, magi)
            player.territory_magi_as_healing.append(magi)

    _next_responder(state, pending)
    return None


def handle_hunt_discard(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    pending = cast(HuntDiscard, state.pending_action)

    must_discard = min(pending.discards_per_player, len(player.hand))
    rejection = validate_selection(player, payload.card_ids, must_discard)
    if rejection:
        return rejection

    discard_selection(state, player, payload.card_ids)
    if state.winner:
        return None
    state.add_log(f"{player.name} discards {must_discard} card(s) from the Hunt.")

    _next_discarder(state, pending)
    return None


def _next_responder(state: GameState, pending: HuntResponse) -> None:
    while pending.remaining_responder_seats:
        seat = pending.remaining_responder_seats.pop(0)
        responder = state.get_player_by_seat(seat)
        if responder.eliminated:
            continue
        if not responder.hand:
            state.add_log(f"{responder.name} has an empty hand and cannot avert.")
            continue
        pending.responding_seat = seat
        state.pending_action = pending
        return

    discard_seats = [
        s for s in pending.non_averter_seats
        if not state.get_player_by_seat(s).eliminated
    ]
    discard = HuntDiscard(
        hunt_player_seat=pending.hunt_player_seat,
        hunt_card=pending.hunt_card,
        current_discard_seat=-1,
        discards_per_player=pending.discards_per_player,
        draws_for_hunter=pending.draws_for_hunter,
        averters=pending.averters,
        remaining_discard_seats=discard_seats,
    )
    _next_discarder(state, discard)


def _next_discarder(state: GameState, pending: HuntDiscard) -> None:
    while pending.remaining_discard_seats:
        seat = pending.remaining_discard_seats.pop(0)
        discarder = state.get_player_by_seat(seat)
        if discarder.eliminated or not discarder.hand:
            continue
        pending.current_discard_seat = seat
        state.pending_action = pending
        return

    _finish_hunt(state, pending)


def _finish_hunt(state: GameState, pending: HuntDiscard) -> None:
    state.pending_action = None
    if resolution_interrupted(state, pending.hunt_player_seat):
        return
    hunter = state.get_player_by_seat(pending.hunt_player_seat)

    draws = max(0, pending.draws_for_hunter - pending.averters)
    if draws > 0:
        if not draw_into_hand(state, hunter, draws):
            return
        state.add_log(f"{hunter.name} draws {draws} card(s) from the Hunt.")
    else:
        state.add_log(f"{hunter.name} draws no cards (all opponents averted).")

    settle_to_territory(state, hunter, pending.hunt_card)
    finish_resolution(state)
