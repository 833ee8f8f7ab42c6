"""
Tithe - Everyone cycles two cards; the owner may pay to cycle again.

The owner discards 2 and draws 2, then each living opponent clockwise
does the same. Players holding fewer than 2 cards discard what they
have; an empty hand just draws. Afterwards the owner may pay one
contribution for another owner-only cycle, at most
rules.tithe_max_contributions times. The Tithe enters the owner's
territory only if at least one contribution was paid.
"""

from __future__ import annotations
from typing import cast

from ..action import ActionPayload, ErrorCode, Rejection, reject
from ..cards import Card
from ..pending import TitheContribute, TitheDiscard
from ..state import GameState, PlayerState
from ..turn import finish_resolution
from ..zones import settle_to_discard, settle_to_territory, stage_from_hand
from .common import discard_selection, draw_into_hand, resolution_interrupted, validate_selection


def start_tithe(state: GameState, player: PlayerState, tithe: Card) -> Rejection | None:
    stage_from_hand(state, player, tithe)
    state.add_log(f"{player.name} plays {tithe.display_name()}.")

    pending = TitheDiscard(
        tithe_player_seat=player.seat_index,
        tithe_card=tithe,
        current_discard_seat=-1,
        remaining_discard_seats=[player.seat_index] + state.opponent_seats_in_order(player.seat_index),
    )
    _next_discarder(state, pending)
    return None


def handle_tithe_discard(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    pending = cast(TitheDiscard, state.pending_action)

    must_discard = min(state.rules.tithe_cycle_size, len(player.hand))
    rejection = validate_selection(player, payload.card_ids, must_discard)
    if rejection:
        return rejection

    discard_selection(state, player, payload.card_ids)
    if state.winner or resolution_interrupted(state, pending.tithe_player_seat):
        return None
    if not player.eliminated:
        state.add_log(f"{player.name} discards {must_discard} for Tithe.")
        if not draw_into_hand(state, player, state.rules.tithe_cycle_size):
            return None

    _next_discarder(state, pending)
    return None


def handle_tithe_contribute(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    pending = cast(TitheContribute, state.pending_action)

    if not payload.contribute:
        _finish_tithe(state, pending.player_seat, pending.tithe_card, pending.contributions_so_far > 0)
        return None

    if player.contributions_remaining < 1:
        return reject("Not enough contributions remaining", ErrorCode.INSUFFICIENT_CONTRIBUTIONS)

    player.contributions_remaining -= 1
    player.contributions_made += 1
    paid = pending.contributions_so_far + 1
    state.add_log(
        f"{player.name} contributes 1 for Tithe cycle "
        f"({paid}/{state.rules.tithe_max_contributions})."
    )

    cycle = TitheDiscard(
        tithe_player_seat=player.seat_index,
        tithe_card=pending.tithe_card,
        current_discard_seat=-1,
        remaining_discard_seats=[player.seat_index],
        contributions_so_far=paid,
    )
    _next_discarder(state, cycle)
    return None


def _next_discarder(state: GameState, pending: TitheDiscard) -> None:
    cycle = state.rules.tithe_cycle_size
    while pending.remaining_discard_seats:
        seat = pending.remaining_discard_seats.pop(0)
        discarder = state.get_player_by_seat(seat)
        if discarder.eliminated:
            continue
        if not discarder.hand:
            state.add_log(f"{discarder.name} has no cards to discard and draws {cycle}.")
            if not draw_into_hand(state, discarder, cycle):
                return
            continue
        pending.current_discard_seat = seat
        state.pending_action = pending
        return

    owner_seat = pending.tithe_player_seat
    if pending.contributions_so_far >= state.rules.tithe_max_contributions:
        _finish_tithe(state, owner_seat, pending.tithe_card, True)
        return

    state.pending_action = TitheContribute(
        player_seat=owner_seat,
        tithe_card=pending.tithe_card,
        contributions_so_far=pending.contributions_so_far,
    )


def _finish_tithe(state: GameState, owner_seat: int, tithe: Card, contributed: bool) -> None:
    owner = state.get_player_by_seat(owner_seat)
    if contributed:
        settle_to_territory(state, owner, tithe)
        state.add_log(f"Tithe enters {owner.name}'s territory (+3 for deck-out scoring).")
    else:
        settle_to_discard(state, tithe)
        state.add_log("Tithe is discarded (no contributions made).")
    finish_resolution(state)
