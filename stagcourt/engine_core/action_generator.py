"""
Action Generator - Generates legal actions from a game state.

The action generator is used by:
1. Bots to enumerate possible moves
2. The stall policy, which applies the first action on the list
3. Tests, to check that every listed action is accepted

Design: Generates Action objects, not just action types.
The first action for any decision is always the passive default
(draw a card, accept the Hunt, decline the Tithe, take no Stags,
discard the first cards in hand).
"""

from __future__ import annotations
from dataclasses import dataclass
from itertools import combinations, islice
from typing import Iterable, cast

from .action import Action, ActionType
from .cards import Card, CardKind, stag_discard_cost
from .pending import (
    DiscardForCost,
    DiscardToHandLimit,
    HuntDiscard,
    KingCommandCollect,
    MagiPlaceCards,
    TitheDiscard,
)
from .state import GameState, PlayerState
from .view import available_actions


def _subsets(cards: list[Card], size: int, limit: int) -> list[list[Card]]:
    return [list(combo) for combo in islice(combinations(cards, size), limit)]


@dataclass
class ActionGenerator:
    """
    Generates legal actions for one player.

    max_combinations caps how many card subsets are listed for any
    single selection.
    """
    max_combinations: int = 32

    def generate(self, state: GameState, player_id: str) -> list[Action]:
        """
        Generate all legal actions for the player.

        Returns a list of fully-specified Action objects.
        """
        player = state.get_player(player_id)
        actions: list[Action] = []
        for action_type in available_actions(state, player_id):
            actions.extend(self._generate_for_type(state, player, action_type))
        return actions

    def _generate_for_type(self, state: GameState, player: PlayerState, action_type: ActionType) -> Iterable[Action]:
        pid = player.player_id
        pending = state.pending_action

        if action_type == ActionType.DRAW_CARD:
            return [Action.draw_card(pid)]
        if action_type == ActionType.DRAFT_KINGDOM:
            return [Action.draft_kingdom(pid, c) for c in state.kingdom]
        if action_type == ActionType.PLAY_STAG:
            return self._generate_stag_actions(player)
        if action_type == ActionType.PLAY_TERRITORY:
            return [Action.play_territory(pid, c) for c in player.hand if not c.is_stag]
        if action_type == ActionType.NO_TERRITORY:
            return [Action.no_territory(pid)]
        if action_type == ActionType.DRAFT_KINGDOM_PICK:
            return [Action.draft_kingdom_pick(pid, c) for c in state.kingdom]
        if action_type == ActionType.STAG_KINGDOM_PICK:
            return [Action.stag_kingdom_pick(pid, c) for c in state.kingdom]
        if action_type == ActionType.HUNT_RESPONSE:
            return self._generate_hunt_responses(player)
        if action_type == ActionType.MAGI_CHOICE:
            return self._generate_magi_splits(state, pid)
        if action_type == ActionType.TITHE_CONTRIBUTE:
            actions = [Action.tithe_contribute(pid, False)]
            if player.contributions_remaining >= 1:
                actions.append(Action.tithe_contribute(pid, True))
            return actions
        if action_type == ActionType.KING_COMMAND_RESPONSE:
            stags = [c for c in player.hand if c.is_stag]
            if not stags:
                return [Action.king_command_response(pid, None)]
            return [Action.king_command_response(pid, s) for s in stags]
        if action_type == ActionType.KING_COMMAND_COLLECT:
            collect = cast(KingCommandCollect, pending)
            return self._generate_collections(pid, collect.discarded_stags)

        # Card selections
        count = self._selection_size(state, player)
        return [
            Action.select_cards(action_type, pid, cards)
            for cards in _subsets(self._selectable(state, player), count, self.max_combinations)
        ]

    def _selection_size(self, state: GameState, player: PlayerState) -> int:
        pending = state.pending_action
        if isinstance(pending, HuntDiscard):
            return min(pending.discards_per_player, len(player.hand))
        if isinstance(pending, TitheDiscard):
            return min(state.rules.tithe_cycle_size, len(player.hand))
        if isinstance(pending, MagiPlaceCards):
            return pending.place_bottom_count
        if isinstance(pending, (DiscardToHandLimit, DiscardForCost)):
            return pending.must_discard
        raise ValueError(f"No card selection for {pending!r}")

    def _selectable(self, state: GameState, player: PlayerState) -> list[Card]:
        pending = state.pending_action
        if isinstance(pending, DiscardForCost):
            return [c for c in player.hand if c != pending.stag_card]
        return list(player.hand)

    def _generate_stag_actions(self, player: PlayerState) -> list[Action]:
        pid = player.player_id
        actions = []
        for stag in player.hand:
            if not stag.is_stag:
                continue
            cost = stag_discard_cost(stag.value)
            others = [c for c in player.hand if c != stag]
            if len(others) < cost:
                continue
            # Announce now, choose the discards afterwards
            actions.append(Action.play_stag(pid, stag))
            for discards in _subsets(others, cost, self.max_combinations):
                actions.append(Action.play_stag(pid, stag, discards))
        return actions

    def _generate_hunt_responses(self, player: PlayerState) -> list[Action]:
        pid = player.player_id
        actions = [Action.hunt_response(pid)]
        healings = [c for c in player.hand if c.kind == CardKind.HEALING]
        magis = [c for c in player.hand if c.kind == CardKind.MAGI]
        for healing in healings:
            actions.append(Action.hunt_response(pid, healing))
            for magi in magis:
                actions.append(Action.hunt_response(pid, healing, magi))
        return actions

    def _generate_magi_splits(self, state: GameState, pid: str) -> list[Action]:
        points = state.rules.magi_effect_points
        actions = []
        for top in range(points, -1, -1):
            for bottom in range(points - top, -1, -1):
                actions.append(Action.magi_choice(pid, top, bottom, points - top - bottom))
        return actions

    def _generate_collections(self, pid: str, stags: list[Card]) -> list[Action]:
        actions = []
        for size in range(len(stags) + 1):
            for subset in _subsets(stags, size, self.max_combinations):
                actions.append(Action.king_command_collect(pid, subset))
        return actions[:self.max_combinations]


def legal_actions(state: GameState, player_id: str, max_combinations: int = 32) -> list[Action]:
    """Convenience function: all legal actions for one player."""
    return ActionGenerator(max_combinations=max_combinations).generate(state, player_id)


def is_legal(state: GameState, action: Action, max_combinations: int = 32) -> bool:
    """
    Check whether an action matches one of the generated legal actions.

    Only reliable for selections within the combination cap.
    """
    return action in legal_actions(state, action.player_id, max_combinations)
