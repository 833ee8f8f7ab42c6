"""
Territory actions - Play one non-Stag card, or reveal a hand that has none.
"""

from __future__ import annotations
from typing import Callable

from ..action import ActionPayload, Rejection, reject
from ..cards import Card, CardKind, format_cards
from ..state import GameState, PlayerState
from ..turn import finish_resolution
from ..zones import play_to_territory
from .common import burn_cards, draw_into_hand, require_card, require_in_hand
from .hunt import start_hunt
from .kings_command import start_kings_command
from .magi import start_magi
from .tithe import start_tithe


def play_healing(state: GameState, player: PlayerState, card: Card) -> Rejection | None:
    play_to_territory(player, card)
    state.add_log(f"{player.name} plays {card.display_name()} into their territory.")
    finish_resolution(state)
    return None


CardEffect = Callable[[GameState, PlayerState, Card], "Rejection | None"]

CARD_EFFECTS: dict[CardKind, CardEffect] = {
    CardKind.HUNT: start_hunt,
    CardKind.HEALING: play_healing,
    CardKind.MAGI: start_magi,
    CardKind.TITHE: start_tithe,
    CardKind.KINGS_COMMAND: start_kings_command,
}


def handle_play_territory(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    card = payload.card_id
    rejection = require_card(card)
    if rejection:
        return rejection
    if card.is_stag:
        return reject("Stags are placed as a Kingdom action, not a territory action")
    rejection = require_in_hand(player, card)
    if rejection:
        return rejection

    return CARD_EFFECTS[card.kind](state, player, card)


def handle_no_territory(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    """
    Reveal a hand holding nothing but Stags.

    Burns 1 card and draws the player 3 to make up for the lost action.
    """
    if any(not c.is_stag for c in player.hand):
        return reject("You have a card you can play into your territory")

    if player.hand:
        state.add_log(f"{player.name} reveals their hand: {format_cards(player.hand)}.")
    else:
        state.add_log(f"{player.name} reveals an empty hand.")

    if not burn_cards(state, 1):
        return None
    draws = state.rules.no_territory_draws
    if not draw_into_hand(state, player, draws):
        return None
    state.add_log(f"{player.name} burns 1 card and draws {draws}.")
    finish_resolution(state)
    return None
