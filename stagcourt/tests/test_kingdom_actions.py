"""
Tests for Kingdom and territory actions.

Tests:
- Drawing a card
- Drafting the Kingdom around the table
- Placing a Stag, paying its cost and the Kingdom draft that follows
- Healing and the no-territory reveal
"""

from ..engine_core.action import Action, ActionType, ErrorCode
from ..engine_core.cards import Card
from ..engine_core.pending import DiscardForCost, DraftKingdom, StagKingdomDraft, StagKingdomPickSelf
from ..engine_core.reducer import apply_action
from ..engine_core.state import TurnPhase, WinReason

C = Card.parse

KINGDOM = ["magi-1", "magi-2", "magi-3"]


class TestDrawCard:
    """Tests for the draw Kingdom action."""

    def test_draw_adds_card_and_kingdom_card(self, make_state):
        state = make_state([["hunt-1"], ["hunt-2"]], kingdom=KINGDOM, deck_top=["stag-5", "healing-2"])

        result = apply_action(state, Action.draw_card("p1"))

        assert result.success
        new = result.new_state
        assert C("stag-5") in new.get_player("p1").hand
        assert new.kingdom[-1] == C("healing-2")
        assert new.turn_phase == TurnPhase.TERRITORY_ACTION
        assert "Ann drew a card." in result.state_changes

    def test_draw_exhaustion_ends_game(self, make_state):
        state = make_state([["hunt-1"], ["hunt-2"]], deck_rest=False)
        result = apply_action(state, Action.draw_card("p1"))
        assert result.success
        assert result.new_state.win_reason == WinReason.DECK_OUT


class TestDraftKingdom:
    """Tests for drafting the Kingdom."""

    def test_opponents_pick_in_order(self, make_state):
        state = make_state([["hunt-1"], ["hunt-2"], ["hunt-3"]], kingdom=["hunt-5", "healing-3", "magi-1"])

        result = apply_action(state, Action.draft_kingdom("p1", C("hunt-5")))
        assert result.success
        state = result.new_state
        assert state.pending_action == DraftKingdom(drafter_seat=0, current_drafter_seat=1, remaining_drafter_seats=[2])
        assert C("hunt-5") in state.get_player("p1").hand

        result = apply_action(state, Action.draft_kingdom_pick("p2", C("healing-3")))
        assert result.success
        state = result.new_state
        assert state.pending_action.responder_seat == 2

        result = apply_action(state, Action.draft_kingdom_pick("p3", C("magi-1")))
        assert result.success
        state = result.new_state
        assert state.pending_action is None
        assert state.kingdom == []
        assert state.turn_phase == TurnPhase.TERRITORY_ACTION
        assert state.current_seat == 0

    def test_leftovers_are_discarded(self, make_state):
        state = make_state([["hunt-1"], ["hunt-2"]], kingdom=["hunt-5", "healing-3", "magi-1"])
        state = apply_action(state, Action.draft_kingdom("p1", C("hunt-5"))).new_state

        result = apply_action(state, Action.draft_kingdom_pick("p2", C("magi-1")))

        assert result.success
        assert result.new_state.kingdom == []
        assert C("healing-3") in result.new_state.discard
        assert result.new_state.turn_phase == TurnPhase.TERRITORY_ACTION

    def test_card_must_be_in_kingdom(self, make_state):
        state = make_state([["hunt-1"], ["hunt-2"]], kingdom=KINGDOM)
        result = apply_action(state, Action.draft_kingdom("p1", C("hunt-9")))
        assert not result.success
        assert result.error_code == ErrorCode.CARD_NOT_OWNED

    def test_wrong_picker_rejected(self, make_state):
        state = make_state([["hunt-1"], ["hunt-2"], ["hunt-3"]], kingdom=KINGDOM)
        state = apply_action(state, Action.draft_kingdom("p1", C("magi-1"))).new_state

        result = apply_action(state, Action.draft_kingdom_pick("p3", C("magi-2")))

        assert not result.success
        assert result.error_code == ErrorCode.NOT_YOUR_TURN


class TestPlayStag:
    """Tests for placing a Stag as the Kingdom action."""

    HAND = ["stag-5", "hunt-1", "hunt-2", "healing-4"]

    def test_stag_with_discards(self, make_state):
        state = make_state([self.HAND, ["hunt-3"]], kingdom=KINGDOM)

        result = apply_action(state, Action.play_stag("p1", C("stag-5"), [C("hunt-1"), C("hunt-2")]))

        assert result.success
        state = result.new_state
        ann = state.get_player("p1")
        assert ann.territory == [C("stag-5")]
        assert ann.hand == [C("healing-4")]
        assert state.discard == [C("hunt-1"), C("hunt-2")]
        assert state.pending_action == StagKingdomDraft(
            stag_player_seat=0, current_drafter_seat=1, remaining_drafter_seats=[],
        )

    def test_kingdom_draft_after_stag(self, make_state):
        """Opponents pick first, the Stag player last, then the turn ends."""
        state = make_state([self.HAND, ["hunt-3"]], kingdom=KINGDOM)
        state = apply_action(state, Action.play_stag("p1", C("stag-5"), [C("hunt-1"), C("hunt-2")])).new_state

        state = apply_action(state, Action.stag_kingdom_pick("p2", C("magi-1"))).new_state
        assert state.pending_action == StagKingdomPickSelf(stag_player_seat=0)

        result = apply_action(state, Action.stag_kingdom_pick("p1", C("magi-2")))
        assert result.success
        state = result.new_state
        assert C("magi-2") in state.get_player("p1").hand
        assert C("magi-3") in state.discard
        # Territory action skipped; Bo's turn has begun
        assert state.current_seat == 1
        assert state.turn_phase == TurnPhase.KINGDOM_ACTION
        assert len(state.kingdom) == 3

    def test_stag_then_discard_for_cost(self, make_state):
        state = make_state([self.HAND, ["hunt-3"]], kingdom=KINGDOM)

        result = apply_action(state, Action.play_stag("p1", C("stag-5")))
        assert result.success
        state = result.new_state
        assert state.pending_action == DiscardForCost(player_seat=0, stag_card=C("stag-5"), must_discard=2)

        bad = apply_action(
            state, Action.select_cards(ActionType.DISCARD_FOR_COST, "p1", [C("stag-5"), C("hunt-1")])
        )
        assert not bad.success
        assert "cannot pay for itself" in bad.error

        result = apply_action(
            state, Action.select_cards(ActionType.DISCARD_FOR_COST, "p1", [C("hunt-1"), C("healing-4")])
        )
        assert result.success
        assert result.new_state.get_player("p1").territory == [C("stag-5")]
        assert isinstance(result.new_state.pending_action, StagKingdomDraft)

    def test_not_enough_cards_for_cost(self, make_state):
        state = make_state([["stag-10", "hunt-1", "hunt-2", "hunt-3"], ["hunt-4"]], kingdom=KINGDOM)
        result = apply_action(state, Action.play_stag("p1", C("stag-10")))
        assert not result.success
        assert result.error_code == ErrorCode.MALFORMED_PAYLOAD

    def test_wrong_discard_count(self, make_state):
        state = make_state([self.HAND, ["hunt-3"]], kingdom=KINGDOM)
        result = apply_action(state, Action.play_stag("p1", C("stag-5"), [C("hunt-1")]))
        assert not result.success
        assert "exactly 2" in result.error

    def test_discarded_stag_atones(self, make_state):
        state = make_state([["stag-2", "stag-9", "hunt-1"], ["hunt-3"]], kingdom=KINGDOM)

        result = apply_action(state, Action.play_stag("p1", C("stag-2"), [C("stag-9")]))

        assert result.success
        ann = result.new_state.get_player("p1")
        assert ann.contributions_remaining == 8
        assert ann.contributions_made == 3

    def test_stag_eighteen_wins_immediately(self, make_state):
        state = make_state(
            [["stag-6", "hunt-1", "hunt-2", "hunt-3"], ["hunt-4"]],
            territories=[["stag-12"], []],
            kingdom=KINGDOM,
        )

        result = apply_action(state, Action.play_stag("p1", C("stag-6"), [C("hunt-1"), C("hunt-2")]))

        assert result.success
        state = result.new_state
        assert state.winner == "p1"
        assert state.win_reason == WinReason.STAG_18
        assert state.pending_action is None
        assert state.kingdom == [C(c) for c in KINGDOM]

    def test_eliminated_by_own_cost_forfeits_turn(self, make_state):
        state = make_state(
            [["stag-1", "stag-12", "hunt-1"], ["hunt-3"], ["hunt-4"]],
            kingdom=KINGDOM,
            contributions=[2, 11, 11],
        )

        result = apply_action(state, Action.play_stag("p1", C("stag-1"), [C("stag-12")]))

        assert result.success
        state = result.new_state
        assert state.get_player("p1").eliminated
        assert state.get_player("p1").territory == []
        assert C("stag-1") in state.discard
        assert state.current_seat == 1
        assert state.turn_phase == TurnPhase.KINGDOM_ACTION
        assert state.winner is None


class TestTerritoryActions:
    """Tests for Healing and the no-territory reveal."""

    def test_healing_enters_territory(self, make_state):
        state = make_state(
            [["healing-7", "hunt-1"], ["hunt-3"]],
            kingdom=KINGDOM,
            phase=TurnPhase.TERRITORY_ACTION,
        )
        result = apply_action(state, Action.play_territory("p1", C("healing-7")))
        assert result.success
        assert result.new_state.get_player("p1").territory == [C("healing-7")]
        assert result.new_state.current_seat == 1

    def test_stag_is_not_a_territory_play(self, make_state):
        state = make_state([["stag-7", "hunt-1"], ["hunt-3"]], phase=TurnPhase.TERRITORY_ACTION)
        result = apply_action(state, Action.play_territory("p1", C("stag-7")))
        assert not result.success

    def test_no_territory_requires_stag_only_hand(self, make_state):
        state = make_state([["stag-7", "hunt-1"], ["hunt-3"]], phase=TurnPhase.TERRITORY_ACTION)
        result = apply_action(state, Action.no_territory("p1"))
        assert not result.success

    def test_no_territory_burns_and_draws(self, make_state):
        state = make_state(
            [["stag-7", "stag-8"], ["hunt-3"]],
            kingdom=KINGDOM,
            deck_top=["hunt-9", "hunt-10", "hunt-11", "hunt-12"],
            phase=TurnPhase.TERRITORY_ACTION,
        )

        result = apply_action(state, Action.no_territory("p1"))

        assert result.success
        ann = result.new_state.get_player("p1")
        assert C("hunt-9") in result.new_state.burned
        assert sorted(ann.hand) == sorted(C(c) for c in ["stag-7", "stag-8", "hunt-10", "hunt-11", "hunt-12"])
        assert "Ann reveals their hand: Stag 7, Stag 8." in result.state_changes
