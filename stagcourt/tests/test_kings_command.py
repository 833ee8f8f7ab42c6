"""
Tests for the King's Command resolution.
"""

from ..engine_core.action import Action, ErrorCode
from ..engine_core.cards import Card
from ..engine_core.pending import KingCommandCollect, KingCommandResponse
from ..engine_core.reducer import apply_action
from ..engine_core.state import TurnPhase, WinReason

C = Card.parse

KINGDOM = ["magi-1", "magi-2", "magi-3"]


def command_state(make_state, opponent_hands, **kwargs):
    return make_state(
        [["kingscommand-1", "hunt-1"], *opponent_hands],
        kingdom=KINGDOM,
        phase=TurnPhase.TERRITORY_ACTION,
        **kwargs,
    )


class TestKingsCommandResponse:
    """Tests for opponents surrendering Stags."""

    def test_card_enters_territory_at_once(self, make_state):
        state = command_state(make_state, [["stag-3", "hunt-2"], ["hunt-3"]])

        result = apply_action(state, Action.play_territory("p1", C("kingscommand-1")))

        assert result.success
        state = result.new_state
        assert state.get_player("p1").territory == [C("kingscommand-1")]
        assert state.in_play == []
        assert isinstance(state.pending_action, KingCommandResponse)
        assert state.pending_action.responding_seat == 1
        assert "Ann plays King's Command!" in result.state_changes

    def test_must_discard_a_stag_when_holding_one(self, make_state):
        state = command_state(make_state, [["stag-3", "hunt-2"], ["hunt-3"]])
        state = apply_action(state, Action.play_territory("p1", C("kingscommand-1"))).new_state

        result = apply_action(state, Action.king_command_response("p2", None))

        assert not result.success
        assert result.error_code == ErrorCode.MALFORMED_PAYLOAD

    def test_discard_pays_atonement(self, make_state):
        state = command_state(make_state, [["stag-3", "hunt-2"], ["hunt-3"]])
        state = apply_action(state, Action.play_territory("p1", C("kingscommand-1"))).new_state

        result = apply_action(state, Action.king_command_response("p2", C("stag-3")))

        assert result.success
        state = result.new_state
        bo = state.get_player("p2")
        assert bo.hand == [C("hunt-2")]
        assert bo.contributions_remaining == 10
        assert C("stag-3") in state.discard
        assert state.pending_action.responding_seat == 2
        assert state.pending_action.discarded_stags == [C("stag-3")]

    def test_stag_must_be_owned(self, make_state):
        state = command_state(make_state, [["stag-3", "hunt-2"], ["hunt-3"]])
        state = apply_action(state, Action.play_territory("p1", C("kingscommand-1"))).new_state

        result = apply_action(state, Action.king_command_response("p2", C("stag-4")))

        assert not result.success
        assert result.error_code == ErrorCode.CARD_NOT_OWNED

    def test_no_stags_anywhere_ends_resolution(self, make_state):
        state = command_state(make_state, [["hunt-2"], []])
        state = apply_action(state, Action.play_territory("p1", C("kingscommand-1"))).new_state

        result = apply_action(state, Action.king_command_response("p2", None))

        assert result.success
        assert "Bo reveals no Stags." in result.state_changes
        assert "Cy has an empty hand and reveals no Stags." in result.state_changes
        assert result.new_state.pending_action is None
        assert result.new_state.current_seat == 1

    def test_surrender_can_eliminate_last_opponent(self, make_state):
        state = command_state(make_state, [["stag-9"]], contributions=[11, 2])
        state = apply_action(state, Action.play_territory("p1", C("kingscommand-1"))).new_state

        result = apply_action(state, Action.king_command_response("p2", C("stag-9")))

        assert result.success
        assert result.new_state.winner == "p1"
        assert result.new_state.win_reason == WinReason.LAST_STANDING
        assert result.new_state.pending_action is None


class TestKingsCommandCollect:
    """Tests for taking surrendered Stags."""

    def surrender_both(self, make_state):
        state = command_state(make_state, [["stag-3", "hunt-2"], ["stag-8"]])
        state = apply_action(state, Action.play_territory("p1", C("kingscommand-1"))).new_state
        state = apply_action(state, Action.king_command_response("p2", C("stag-3"))).new_state
        return apply_action(state, Action.king_command_response("p3", C("stag-8"))).new_state

    def test_collect_prompt(self, make_state):
        state = self.surrender_both(make_state)
        assert state.pending_action == KingCommandCollect(
            command_player_seat=0, discarded_stags=[C("stag-3"), C("stag-8")],
        )

    def test_take_a_subset(self, make_state):
        state = self.surrender_both(make_state)

        result = apply_action(state, Action.king_command_collect("p1", [C("stag-8")]))

        assert result.success
        state = result.new_state
        assert C("stag-8") in state.get_player("p1").hand
        assert C("stag-8") not in state.discard
        assert C("stag-3") in state.discard
        assert "Ann takes Stag 8 from King's Command." in result.state_changes

    def test_take_nothing(self, make_state):
        state = self.surrender_both(make_state)
        result = apply_action(state, Action.king_command_collect("p1", []))
        assert result.success
        assert "Ann takes no Stags from King's Command." in result.state_changes

    def test_only_surrendered_stags(self, make_state):
        state = self.surrender_both(make_state)
        result = apply_action(state, Action.king_command_collect("p1", [C("stag-5")]))
        assert not result.success
        assert result.error_code == ErrorCode.CARD_NOT_OWNED

    def test_duplicates_rejected(self, make_state):
        state = self.surrender_both(make_state)
        result = apply_action(state, Action.king_command_collect("p1", [C("stag-3"), C("stag-3")]))
        assert not result.success
