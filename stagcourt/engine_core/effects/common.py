"""
Helpers shared by the card sub-engines.

Every handler validates its whole payload with validate_selection and
friends before it touches a zone. Once mutation starts, the helpers
below take care of deck exhaustion and atonement, and
resolution_interrupted tells the caller whether it may continue.
"""

from __future__ import annotations

from ..action import ErrorCode, Rejection, reject
from ..cards import Card
from ..scoring import apply_atonement, trigger_deck_exhaustion
from ..state import GameState, PlayerState
from ..zones import burn_card, discard_from_hand, draw_card


def draw_into_hand(state: GameState, player: PlayerState, count: int) -> bool:
    """
    Draw cards one by one into a hand.

    Returns False when the deck ran out; the game has been scored.
    """
    for _ in range(count):
        card = draw_card(state)
        if card is None:
            trigger_deck_exhaustion(state)
            return False
        player.hand.append(card)
    return True


def burn_cards(state: GameState, count: int) -> bool:
    for _ in range(count):
        if not burn_card(state):
            trigger_deck_exhaustion(state)
            return False
    return True


def discard_with_atonement(state: GameState, player: PlayerState, card: Card) -> None:
    discard_from_hand(state, player, card)
    if card.is_stag:
        apply_atonement(state, player, card)


def discard_selection(state: GameState, player: PlayerState, cards: list[Card]) -> None:
    """Discard validated cards in order, stopping if the player is eliminated."""
    for card in cards:
        discard_with_atonement(state, player, card)
        if player.eliminated:
            break


def resolution_interrupted(state: GameState, owner_seat: int) -> bool:
    """True once the game is won or the player driving the resolution is gone."""
    return state.winner is not None or state.get_player_by_seat(owner_seat).eliminated


def require_card(card: Card | None, label: str = "A card") -> Rejection | None:
    if card is None:
        return reject(f"{label} is required")
    return None


def require_in_hand(player: PlayerState, card: Card) -> Rejection | None:
    if card not in player.hand:
        return reject(f"Card {card} is not in your hand", ErrorCode.CARD_NOT_OWNED)
    return None


def validate_selection(
    player: PlayerState,
    cards: list[Card] | None,
    expected: int,
    exclude: Card | None = None,
) -> Rejection | None:
    """
    Check a card selection: exact count, distinct, owned.

    `exclude` names a card that may not be part of the selection
    (the Stag whose cost is being paid).
    """
    if cards is None:
        return reject("A card selection is required")
    if len(cards) != expected:
        return reject(f"Must select exactly {expected} card(s), got {len(cards)}")
    if len(set(cards)) != len(cards):
        return reject("Duplicate cards in selection")
    if exclude is not None and exclude in cards:
        return reject(f"{exclude.display_name()} cannot pay for itself")
    for card in cards:
        rejection = require_in_hand(player, card)
        if rejection:
            return rejection
    return None
