"""
Game State - The single state object the engine operates on.

Design principles:
- One self-contained object per game, nothing shared between games
- Mutated only by the reducer, and only on a private clone
- Serializable: deep-copyable, including the seeded random generator
- Append-only log of human-readable entries
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import random
import time

from ..config import RulesConfig
from .cards import Card

if TYPE_CHECKING:
    from .pending import PendingAction


class TurnPhase(str, Enum):
    """Outer turn cycle."""
    REFRESH_KINGDOM = "refreshKingdom"
    KINGDOM_ACTION = "kingdomAction"
    TERRITORY_ACTION = "territoryAction"
    END_OF_TURN = "endOfTurn"


class WinReason(str, Enum):
    """How the game was won."""
    STAG_18 = "stag18"
    LAST_STANDING = "lastStanding"
    DECK_OUT = "deckOut"


@dataclass
class LogEntry:
    """A timestamped line of the in-game log."""
    message: str
    timestamp: float


@dataclass
class PlayerState:
    """
    State for a single seated player.

    The seat index is fixed for the whole game; turn rotation is
    driven by GameState.player_order instead.
    """
    player_id: str
    seat_index: int
    name: str

    hand: list[Card] = field(default_factory=list)
    territory: list[Card] = field(default_factory=list)
    # Territory Magi revealed alongside Healing; they count as Healing, not hand limit
    territory_magi_as_healing: list[Card] = field(default_factory=list)

    contributions_remaining: int = 0
    contributions_made: int = 0
    ante: int = 0

    eliminated: bool = False

    def has_in_hand(self, card: Card) -> bool:
        return card in self.hand

    def has_all_in_hand(self, cards: list[Card]) -> bool:
        return all(c in self.hand for c in cards)


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str
    rules: RulesConfig = field(default_factory=RulesConfig)

    # Players
    players: list[PlayerState] = field(default_factory=list)
    player_order: list[int] = field(default_factory=list)  # living seats, clockwise
    current_player_index: int = 0  # index into player_order

    # Turn structure
    turn_phase: TurnPhase = TurnPhase.REFRESH_KINGDOM
    turn_number: int = 1
    pending_action: PendingAction | None = None

    # Shared zones
    deck: list[Card] = field(default_factory=list)  # top of deck is the last element
    discard: list[Card] = field(default_factory=list)
    burned: list[Card] = field(default_factory=list)
    kingdom: list[Card] = field(default_factory=list)
    in_play: list[Card] = field(default_factory=list)  # cards mid-resolution

    # History
    log: list[LogEntry] = field(default_factory=list)

    # Outcome
    winner: str | None = None
    win_reason: WinReason | None = None

    # Random generator for determinism
    random_seed: int | None = None
    rng: random.Random = field(default_factory=random.Random, compare=False, repr=False)

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @property
    def current_seat(self) -> int | None:
        """Seat whose turn it is, or None when nobody is left."""
        if not self.player_order:
            return None
        return self.player_order[self.current_player_index % len(self.player_order)]

    @property
    def current_player(self) -> PlayerState:
        """Get the current player."""
        seat = self.current_seat
        if seat is None:
            raise ValueError("No living players")
        return self.get_player_by_seat(seat)

    @property
    def living_players(self) -> list[PlayerState]:
        return [p for p in self.players if not p.eliminated]

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def get_player_by_seat(self, seat: int) -> PlayerState:
        for p in self.players:
            if p.seat_index == seat:
                return p
        raise ValueError(f"No player at seat {seat}")

    def opponent_seats_in_order(self, seat: int) -> list[int]:
        """Living opponent seats clockwise, starting after the given seat."""
        order = self.player_order
        if seat not in order:
            return []
        start = order.index(seat)
        seats = []
        for offset in range(1, len(order)):
            other = order[(start + offset) % len(order)]
            if not self.get_player_by_seat(other).eliminated:
                seats.append(other)
        return seats

    def add_log(self, message: str) -> None:
        self.log.append(LogEntry(message=message, timestamp=time.time()))

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
