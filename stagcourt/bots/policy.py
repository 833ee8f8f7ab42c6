"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game state and the legal actions of one seat and
returns a decision. The same interface drives simulated players and
the stall policy of the game service.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random
from typing import TYPE_CHECKING

from ..engine_core.action_generator import legal_actions

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.state import GameState


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation (for logs/debugging)
    - Confidence in the decision
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0
    evaluated_actions: int = 0


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects actions.
    """

    max_combinations: int = 32

    @abstractmethod
    def select_action(self, state: GameState, legal: list[Action]) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            state: Current game state
            legal: Legal actions of the deciding seat, never empty

        Returns:
            BotDecision with the selected action
        """

    def choose_action(self, state: GameState, player_id: str) -> BotDecision | None:
        """Decide for one player, or None if that player has nothing to do."""
        legal = legal_actions(state, player_id, self.max_combinations)
        if not legal:
            return None
        return self.select_action(state, legal)

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Used for:
    - Fuzzing the engine in simulations
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(self, state: GameState, legal: list[Action]) -> BotDecision:
        if not legal:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            confidence=1.0 / len(legal),
            evaluated_actions=len(legal),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first legal action.

    The first action is the passive default for every decision, which
    makes this the policy used to auto-pass for stalled seats.
    """

    def select_action(self, state: GameState, legal: list[Action]) -> BotDecision:
        if not legal:
            raise ValueError("No legal actions available")

        return BotDecision(
            action=legal[0],
            explanation="Selected first legal action",
            evaluated_actions=1,
        )


POLICIES: dict[str, type[BotPolicy]] = {
    "random": RandomPolicy,
    "first": FirstLegalPolicy,
}
