"""
Card Model - The fixed 51-card catalog and pure rule tables.

Cards are small frozen values compared and hashed directly.
The string form ("stag-7", "kingscommand-2") exists only at the
boundary; the engine never parses ids internally.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import random


class CardKind(str, Enum):
    """The six card types."""
    STAG = "stag"
    HUNT = "hunt"
    HEALING = "healing"
    MAGI = "magi"
    TITHE = "tithe"
    KINGS_COMMAND = "kingscommand"


# Highest value per kind; every kind starts at 1
KIND_MAX_VALUE: dict[CardKind, int] = {
    CardKind.STAG: 12,
    CardKind.HUNT: 12,
    CardKind.HEALING: 12,
    CardKind.MAGI: 6,
    CardKind.TITHE: 6,
    CardKind.KINGS_COMMAND: 3,
}

DISPLAY_NAMES: dict[CardKind, str] = {
    CardKind.STAG: "Stag",
    CardKind.HUNT: "Hunt",
    CardKind.HEALING: "Healing",
    CardKind.MAGI: "Magi",
    CardKind.TITHE: "Tithe",
    CardKind.KINGS_COMMAND: "King's Command",
}


@dataclass(frozen=True, order=True)
class Card:
    """A unique card identified by (kind, value)."""
    kind: CardKind
    value: int

    @property
    def id(self) -> str:
        return f"{self.kind.value}-{self.value}"

    @property
    def is_stag(self) -> bool:
        return self.kind == CardKind.STAG

    def display_name(self) -> str:
        """Name shown in the game log."""
        # Magi, Tithe and King's Command values are instance numbers, not strengths
        if self.kind in (CardKind.MAGI, CardKind.TITHE, CardKind.KINGS_COMMAND):
            return DISPLAY_NAMES[self.kind]
        return f"{DISPLAY_NAMES[self.kind]} {self.value}"

    def __str__(self) -> str:
        return self.id

    @classmethod
    def parse(cls, card_id: str) -> Card:
        """
        Parse a boundary card id such as "hunt-5".

        Raises ValueError for anything outside the catalog.
        """
        card = _BY_ID.get(card_id)
        if card is None:
            raise ValueError(f"Unknown card: {card_id}")
        return card


ALL_CARDS: tuple[Card, ...] = tuple(
    Card(kind=kind, value=value)
    for kind, max_value in KIND_MAX_VALUE.items()
    for value in range(1, max_value + 1)
)

_BY_ID: dict[str, Card] = {c.id: c for c in ALL_CARDS}


def new_deck(rng: random.Random) -> list[Card]:
    """Return the full catalog shuffled with the given generator."""
    deck = list(ALL_CARDS)
    rng.shuffle(deck)
    return deck


def stag_discard_cost(stag_value: int) -> int:
    """How many cards must be discarded from hand to play a Stag of this value."""
    if stag_value <= 3:
        return 1
    if stag_value <= 6:
        return 2
    if stag_value <= 9:
        return 4
    return 8


def stag_atonement_cost(stag_value: int) -> int:
    """Contribution owed when a Stag of this value is discarded from hand."""
    if stag_value <= 4:
        return 1
    if stag_value <= 8:
        return 2
    return 3


def count_kind(cards: list[Card], kind: CardKind) -> int:
    return sum(1 for c in cards if c.kind == kind)


def format_cards(cards: list[Card]) -> str:
    return ", ".join(c.display_name() for c in cards)
