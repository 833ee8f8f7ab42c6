"""
Magi - Split the effect points across three deck manipulations.

Points are spent in a fixed order: draw from the top, draw from the
bottom, then place cards from hand on the bottom of the deck. The
Magi then enters territory, where it raises the hand limit by one.
A Magi revealed during a Hunt response is handled by the Hunt.
"""

from __future__ import annotations
from typing import cast

from ..action import ActionPayload, Rejection, reject
from ..cards import Card
from ..pending import MagiChoice, MagiPlaceCards
from ..scoring import trigger_deck_exhaustion
from ..state import GameState, PlayerState
from ..turn import finish_resolution
from ..zones import draw_from_bottom, place_on_bottom, settle_to_territory, stage_from_hand
from .common import draw_into_hand, validate_selection


def start_magi(state: GameState, player: PlayerState, magi: Card) -> Rejection | None:
    stage_from_hand(state, player, magi)
    state.add_log(
        f"{player.name} plays {magi.display_name()} and splits "
        f"{state.rules.magi_effect_points} points."
    )
    state.pending_action = MagiChoice(player_seat=player.seat_index, magi_card=magi)
    return None


def handle_magi_choice(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    pending = cast(MagiChoice, state.pending_action)

    split = (payload.draw_top, payload.draw_bottom, payload.place_bottom)
    if any(n < 0 for n in split):
        return reject("Magi points cannot be negative")
    points = state.rules.magi_effect_points
    if sum(split) != points:
        return reject(f"Magi points must add up to exactly {points}, got {sum(split)}")

    state.add_log(
        f"{player.name} draws {payload.draw_top} from the top, "
        f"{payload.draw_bottom} from the bottom and places {payload.place_bottom} on the bottom."
    )
    if not draw_into_hand(state, player, payload.draw_top):
        return None
    for _ in range(payload.draw_bottom):
        card = draw_from_bottom(state)
        if card is None:
            trigger_deck_exhaustion(state)
            return None
        player.hand.append(card)

    count = min(payload.place_bottom, len(player.hand))
    if count == 0:
        _finish_magi(state, player, pending.magi_card)
        return None

    state.pending_action = MagiPlaceCards(
        player_seat=player.seat_index,
        magi_card=pending.magi_card,
        place_bottom_count=count,
    )
    return None


def handle_magi_place_cards(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    pending = cast(MagiPlaceCards, state.pending_action)

    rejection = validate_selection(player, payload.card_ids, pending.place_bottom_count)
    if rejection:
        return rejection

    for card in payload.card_ids:
        place_on_bottom(state, player, card)
    state.add_log(f"{player.name} places {pending.place_bottom_count} card(s) on the bottom of the deck.")

    _finish_magi(state, player, pending.magi_card)
    return None


def _finish_magi(state: GameState, player: PlayerState, magi: Card) -> None:
    settle_to_territory(state, player, magi)
    state.add_log(f"{magi.display_name()} enters {player.name}'s territory (+1 hand limit).")
    finish_resolution(state)
