"""
Bots module - Automated players.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy / FirstLegalPolicy: Baseline policies
- simulate_game: Bot-vs-bot games with invariant checks
"""

from .policy import POLICIES, BotDecision, BotPolicy, FirstLegalPolicy, RandomPolicy
from .simulation import SimulationError, SimulationResult, check_invariants, simulate_game

__all__ = [
    "POLICIES",
    "BotDecision",
    "BotPolicy",
    "FirstLegalPolicy",
    "RandomPolicy",
    "SimulationError",
    "SimulationResult",
    "check_invariants",
    "simulate_game",
]
