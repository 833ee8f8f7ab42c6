"""
Pytest fixtures for Stagcourt tests.

make_state builds a hand-crafted GameState that still holds all 51
cards: whatever is not placed explicitly goes to the bottom of the
deck in catalog order, under the listed deck_top cards.
"""

import pytest

from ..config import RulesConfig
from ..engine_core.cards import ALL_CARDS, Card
from ..engine_core.setup import create_game
from ..engine_core.state import GameState, PlayerState, TurnPhase

NAMES = ["Ann", "Bo", "Cy", "Di", "Ed", "Flo"]


def build_state(
    hands: list[list[str]],
    territories: list[list[str]] | None = None,
    kingdom: list[str] = (),
    deck_top: list[str] = (),
    discard: list[str] = (),
    burned: list[str] = (),
    phase: TurnPhase = TurnPhase.KINGDOM_ACTION,
    current: int = 0,
    contributions: list[int] | None = None,
    rules: RulesConfig | None = None,
    deck_rest: bool = True,
) -> GameState:
    """
    Build a state from card ids.

    deck_top[0] is the next card drawn. With deck_rest=False the
    unplaced cards go to the burned pile instead, so the deck holds
    exactly deck_top.
    """
    territories = territories or [[] for _ in hands]
    contributions = contributions or [11 for _ in hands]

    players = []
    for seat, hand in enumerate(hands):
        players.append(PlayerState(
            player_id=f"p{seat + 1}",
            seat_index=seat,
            name=NAMES[seat],
            hand=[Card.parse(c) for c in hand],
            territory=[Card.parse(c) for c in territories[seat]],
            contributions_remaining=contributions[seat],
            ante=1,
        ))

    placed = {Card.parse(c) for c in [*kingdom, *deck_top, *discard, *burned]}
    for p in players:
        placed.update(p.hand)
        placed.update(p.territory)
    rest = [c for c in ALL_CARDS if c not in placed]

    top = [Card.parse(c) for c in deck_top]
    deck = list(reversed(top))
    burned_cards = [Card.parse(c) for c in burned]
    if deck_rest:
        deck = rest + deck
    else:
        burned_cards += rest

    return GameState(
        game_id="test_game",
        rules=rules or RulesConfig(),
        players=players,
        player_order=[p.seat_index for p in players],
        current_player_index=current,
        turn_phase=phase,
        deck=deck,
        discard=[Card.parse(c) for c in discard],
        burned=burned_cards,
        kingdom=[Card.parse(c) for c in kingdom],
    )


def card_ids(cards: list[Card]) -> list[str]:
    return [c.id for c in cards]


@pytest.fixture
def make_state():
    """Factory for hand-crafted states."""
    return build_state


@pytest.fixture
def new_game() -> GameState:
    """A freshly set-up, seeded 3-player game."""
    return create_game(["Ann", "Bo", "Cy"], seed=42, game_id="seeded")
