"""
Simulation - Play whole games with bots.

Every seat is driven by the same policy. After each action the
engine invariants are checked, so a simulation doubles as a fuzz
test: a legal action that is rejected, a state that waits on nobody,
or a card that appears twice all raise SimulationError.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
import logging

from ..config import RulesConfig
from ..engine_core.cards import ALL_CARDS
from ..engine_core.reducer import apply_action
from ..engine_core.setup import create_game
from ..engine_core.state import GameState
from ..engine_core.view import awaiting_seat
from ..engine_core.zones import zone_cards
from .policy import BotPolicy, RandomPolicy

logger = logging.getLogger(__name__)


class SimulationError(RuntimeError):
    """The engine reached a state it should never reach."""


@dataclass
class SimulationResult:
    game_id: str
    winner: str | None
    win_reason: str | None
    steps: int
    turns: int
    final_state: GameState

    @property
    def finished(self) -> bool:
        return self.winner is not None


def check_invariants(state: GameState) -> None:
    """
    Raise SimulationError if the state breaks an engine invariant.

    Checks card conservation, that eliminated seats are out of the
    rotation, and that an unfinished game is waiting on a living seat.
    """
    counts = Counter(zone_cards(state))
    duplicated = sorted(str(c) for c, n in counts.items() if n > 1)
    missing = sorted(str(c) for c in ALL_CARDS if c not in counts)
    if duplicated or missing or len(counts) != len(ALL_CARDS):
        raise SimulationError(f"Card conservation broken: duplicated={duplicated} missing={missing}")

    for player in state.players:
        if player.eliminated and player.seat_index in state.player_order:
            raise SimulationError(f"Eliminated seat {player.seat_index} is still in the rotation")

    if state.is_over:
        return
    seat = awaiting_seat(state)
    if seat is None:
        raise SimulationError(f"Game waits on nobody in phase {state.turn_phase.value}")
    if state.get_player_by_seat(seat).eliminated:
        raise SimulationError(f"Game waits on eliminated seat {seat}")


def simulate_game(
    num_players: int = 3,
    seed: int | None = None,
    policy: BotPolicy | None = None,
    max_steps: int = 5000,
    rules: RulesConfig | None = None,
    check: bool = True,
) -> SimulationResult:
    """
    Play one game to the end, or until max_steps actions were applied.

    Args:
        num_players: Number of seats
        seed: Seed for the deck (the policy has its own)
        policy: Policy for every seat (random, seeded from seed, by default)
        max_steps: Safety cap on applied actions
        rules: Rule constants
        check: Verify invariants after every action
    """
    policy = policy or RandomPolicy(seed)
    names = [f"Bot {i + 1}" for i in range(num_players)]
    state = create_game(names, seed=seed, rules=rules)
    if check:
        check_invariants(state)

    steps = 0
    while not state.is_over and steps < max_steps:
        seat = awaiting_seat(state)
        if seat is None:
            raise SimulationError("No seat to act")
        player = state.get_player_by_seat(seat)

        decision = policy.choose_action(state, player.player_id)
        if decision is None:
            raise SimulationError(f"{player.player_id} is awaited but has no legal action")

        result = apply_action(state, decision.action)
        if not result.success:
            raise SimulationError(
                f"Legal action {decision.action.action_type.value} rejected: {result.error}"
            )
        state = result.new_state
        steps += 1
        if check:
            check_invariants(state)

    logger.info(
        "Game %s finished after %d steps: winner=%s (%s)",
        state.game_id, steps, state.winner,
        state.win_reason.value if state.win_reason else None,
    )
    return SimulationResult(
        game_id=state.game_id,
        winner=state.winner,
        win_reason=state.win_reason.value if state.win_reason else None,
        steps=steps,
        turns=state.turn_number,
        final_state=state,
    )
