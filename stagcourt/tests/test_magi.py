"""
Tests for the Magi resolution.
"""

import pytest

from ..engine_core.action import Action, ActionType
from ..engine_core.cards import Card
from ..engine_core.pending import MagiChoice, MagiPlaceCards
from ..engine_core.reducer import apply_action
from ..engine_core.state import TurnPhase, WinReason

C = Card.parse

DECK = ["hunt-7", "hunt-8", "hunt-9", "hunt-10"]
KINGDOM = ["stag-1", "stag-2", "stag-3"]


@pytest.fixture
def magi_state(make_state):
    """Ann holds a Magi; the deck is exactly DECK, top first."""
    state = make_state(
        [["magi-1", "hunt-1", "hunt-2"], ["hunt-3"]],
        kingdom=KINGDOM,
        deck_top=DECK,
        phase=TurnPhase.TERRITORY_ACTION,
        deck_rest=False,
    )
    return apply_action(state, Action.play_territory("p1", C("magi-1"))).new_state


class TestMagiChoice:
    """Tests for splitting the points."""

    def test_play_prompts_for_split(self, magi_state):
        assert magi_state.pending_action == MagiChoice(player_seat=0, magi_card=C("magi-1"))
        assert magi_state.in_play == [C("magi-1")]

    def test_split_draws_top_then_bottom(self, magi_state):
        result = apply_action(magi_state, Action.magi_choice("p1", 2, 1, 3))

        assert result.success
        state = result.new_state
        ann = state.get_player("p1")
        assert sorted(ann.hand) == sorted(C(c) for c in ["hunt-1", "hunt-2", "hunt-7", "hunt-8", "hunt-10"])
        assert state.deck == [C("hunt-9")]
        assert state.pending_action == MagiPlaceCards(player_seat=0, magi_card=C("magi-1"), place_bottom_count=3)

    @pytest.mark.parametrize("split", [(2, 2, 1), (6, 1, 0), (7, -1, 0)])
    def test_points_must_total_six(self, magi_state, split):
        result = apply_action(magi_state, Action.magi_choice("p1", *split))
        assert not result.success

    def test_nothing_to_place_finishes(self, make_state):
        state = make_state(
            [["magi-1"], ["hunt-3"]],
            kingdom=KINGDOM,
            phase=TurnPhase.TERRITORY_ACTION,
        )
        state = apply_action(state, Action.play_territory("p1", C("magi-1"))).new_state

        result = apply_action(state, Action.magi_choice("p1", 0, 0, 6))

        assert result.success
        assert result.new_state.get_player("p1").territory == [C("magi-1")]
        assert result.new_state.current_seat == 1

    def test_drawing_past_the_deck_ends_game(self, magi_state):
        result = apply_action(magi_state, Action.magi_choice("p1", 6, 0, 0))
        assert result.success
        assert result.new_state.win_reason == WinReason.DECK_OUT


class TestMagiPlaceCards:
    """Tests for putting cards on the bottom of the deck."""

    def test_place_then_settle(self, magi_state):
        state = apply_action(magi_state, Action.magi_choice("p1", 2, 1, 3)).new_state
        placed = [C("hunt-1"), C("hunt-2"), C("hunt-7")]

        result = apply_action(state, Action.select_cards(ActionType.MAGI_PLACE_CARDS, "p1", placed))

        assert result.success
        state = result.new_state
        ann = state.get_player("p1")
        assert sorted(ann.hand) == sorted([C("hunt-8"), C("hunt-10")])
        assert ann.territory == [C("magi-1")]
        # Placed under the remaining card; the top is unchanged
        assert sorted(state.deck[:3]) == sorted(placed)
        assert state.deck[-1] == C("hunt-9")
        assert "Magi enters Ann's territory (+1 hand limit)." in result.state_changes

    def test_wrong_count_rejected(self, magi_state):
        state = apply_action(magi_state, Action.magi_choice("p1", 2, 1, 3)).new_state
        result = apply_action(state, Action.select_cards(ActionType.MAGI_PLACE_CARDS, "p1", [C("hunt-1")]))
        assert not result.success
