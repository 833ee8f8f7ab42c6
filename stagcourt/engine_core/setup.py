"""
Game Setup - Creates initial game state.

This module handles:
- Seating the players
- Shuffling the 51-card deck with a seed for determinism
- Paying the ante out of each player's starting contributions
- Dealing starting hands round-robin
- Refreshing the first Kingdom
"""

from __future__ import annotations
import logging
import random
import uuid

from ..config import RulesConfig
from .cards import ALL_CARDS, new_deck
from .state import GameState, PlayerState, TurnPhase
from .turn import auto_advance, start_turn
from .zones import draw_card

logger = logging.getLogger(__name__)


def create_game(
    player_names: list[str],
    seed: int | None = None,
    rules: RulesConfig | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Set up a new game.

    Args:
        player_names: Names in seating order; seat 0 plays first
        seed: Seed for deterministic shuffling
        rules: Rule constants (defaults if not provided)
        game_id: Identifier for the game (random if not provided)

    Returns:
        Initial GameState waiting on the first player's Kingdom action
    """
    rules = rules or RulesConfig()
    if not rules.min_players <= len(player_names) <= rules.max_players:
        raise ValueError(
            f"Stagcourt supports {rules.min_players}-{rules.max_players} players, "
            f"got {len(player_names)}"
        )

    if len(player_names) * rules.starting_hand_size + rules.kingdom_size + 1 > len(ALL_CARDS):
        raise ValueError("Not enough cards to deal the starting hands and the first Kingdom")

    rng = random.Random(seed)
    players = [
        PlayerState(
            player_id=f"p{seat + 1}",
            seat_index=seat,
            name=name,
            contributions_remaining=rules.starting_contributions - rules.ante,
            ante=rules.ante,
        )
        for seat, name in enumerate(player_names)
    ]

    state = GameState(
        game_id=game_id or uuid.uuid4().hex[:12],
        rules=rules,
        players=players,
        player_order=[p.seat_index for p in players],
        current_player_index=0,
        turn_phase=TurnPhase.REFRESH_KINGDOM,
        turn_number=0,
        deck=new_deck(rng),
        random_seed=seed,
        rng=rng,
    )

    for _ in range(rules.starting_hand_size):
        for player in players:
            player.hand.append(draw_card(state))

    state.add_log(
        f"Game started with {len(players)} players. "
        f"Each player antes {rules.ante} and is dealt {rules.starting_hand_size} cards."
    )
    logger.info("Game %s created for %d players (seed=%s)", state.game_id, len(players), seed)

    start_turn(state)
    auto_advance(state)
    return state
