"""
Zone Manager - Card movement between zones.

Every function moves cards between the disjoint zones of a GameState
and never creates or destroys a card. Functions that need the deck
reshuffle the discard pile into it when it runs dry and burn one card
right after the reshuffle. When deck and discard are both empty they
signal exhaustion (None / False); ending the game is the caller's job.
"""

from __future__ import annotations
from typing import Iterator

from .cards import Card
from .state import GameState, PlayerState


def ensure_deck(state: GameState) -> bool:
    """
    Make sure the deck has a card to give.

    Returns True if the deck now has cards, False if deck and
    discard are both empty.
    """
    if state.deck:
        return True
    if not state.discard:
        return False
    state.deck = list(state.discard)
    state.discard = []
    state.rng.shuffle(state.deck)
    state.add_log("Discard pile shuffled into deck.")
    state.burned.append(state.deck.pop())
    state.add_log("Burned 1 card after reshuffle.")
    return bool(state.deck)


def draw_card(state: GameState) -> Card | None:
    """Take the top card of the deck, or None when the deck is exhausted."""
    if not ensure_deck(state):
        return None
    return state.deck.pop()


def draw_from_bottom(state: GameState) -> Card | None:
    """Take the bottom card of the deck, or None when the deck is exhausted."""
    if not ensure_deck(state):
        return None
    return state.deck.pop(0)


def burn_card(state: GameState) -> bool:
    """Move the top card of the deck out of the game."""
    if not ensure_deck(state):
        return False
    state.burned.append(state.deck.pop())
    return True


def deal_to_kingdom(state: GameState) -> bool:
    """Deal the top card of the deck face-up into the Kingdom."""
    if not ensure_deck(state):
        return False
    state.kingdom.append(state.deck.pop())
    return True


def discard_kingdom(state: GameState) -> None:
    """Discard whatever is left in the Kingdom (no costs paid)."""
    if state.kingdom:
        state.discard.extend(state.kingdom)
        state.kingdom = []


def take_from_kingdom(state: GameState, player: PlayerState, card: Card) -> bool:
    if card not in state.kingdom:
        return False
    state.kingdom.remove(card)
    player.hand.append(card)
    return True


def discard_from_hand(state: GameState, player: PlayerState, card: Card) -> bool:
    """Move a card from a hand to the discard pile."""
    if card not in player.hand:
        return False
    player.hand.remove(card)
    state.discard.append(card)
    return True


def play_to_territory(player: PlayerState, card: Card) -> bool:
    """Move a card from a hand into the same player's territory."""
    if card not in player.hand:
        return False
    player.hand.remove(card)
    player.territory.append(card)
    return True


def stage_from_hand(state: GameState, player: PlayerState, card: Card) -> bool:
    """Move a played card from a hand into the in-play zone while it resolves."""
    if card not in player.hand:
        return False
    player.hand.remove(card)
    state.in_play.append(card)
    return True


def settle_to_territory(state: GameState, player: PlayerState, card: Card) -> None:
    """Move a resolved card from the in-play zone into a territory."""
    state.in_play.remove(card)
    player.territory.append(card)


def settle_to_discard(state: GameState, card: Card) -> None:
    """Move a resolved card from the in-play zone to the discard pile."""
    state.in_play.remove(card)
    state.discard.append(card)


def place_on_bottom(state: GameState, player: PlayerState, card: Card) -> bool:
    """Move a card from a hand to the bottom of the deck."""
    if card not in player.hand:
        return False
    player.hand.remove(card)
    state.deck.insert(0, card)
    return True


def zone_cards(state: GameState) -> Iterator[Card]:
    """Every card held by any zone, shared or per-player."""
    yield from state.deck
    yield from state.discard
    yield from state.burned
    yield from state.kingdom
    yield from state.in_play
    for player in state.players:
        yield from player.hand
        yield from player.territory
