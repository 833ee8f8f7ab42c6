"""
Tests for the request schemas and the in-process game service.

Tests:
- Raw camelCase requests parse into engine actions
- Malformed requests are rejected before the engine sees them
- Unknown games come back as GAME_NOT_FOUND
- Stalled seats are auto-passed after the timeout
"""

import threading

import pytest
from pydantic import ValidationError

from ..api.schemas import ActionResponse, PlayerViewModel, parse_action_request
from ..api.service import GameNotFoundError, GameService
from ..config import ServiceConfig
from ..engine_core.action import Action, ActionType
from ..engine_core.cards import Card

C = Card.parse


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class TestParseActionRequest:
    """Tests for turning raw dicts into actions."""

    def test_draw_card(self):
        action = parse_action_request({"action": "drawCard", "playerId": "p1"})
        assert action == Action.draw_card("p1")

    def test_play_stag_with_discards(self):
        action = parse_action_request({
            "action": "playStag",
            "playerId": "p1",
            "cardId": "stag-5",
            "discardIds": ["hunt-1", "hunt-2"],
        })
        assert action == Action.play_stag("p1", C("stag-5"), [C("hunt-1"), C("hunt-2")])

    def test_play_stag_without_discards(self):
        action = parse_action_request({"action": "playStag", "playerId": "p1", "cardId": "stag-5"})
        assert action.payload.discard_ids is None

    def test_hunt_response_nulls_accept(self):
        action = parse_action_request({
            "action": "huntResponse", "playerId": "p2", "healingId": None, "magiId": None,
        })
        assert action == Action.hunt_response("p2")

    @pytest.mark.parametrize("name", [
        "huntDiscard", "magiPlaceCards", "titheDiscard", "discardToHandLimit", "discardForCost",
    ])
    def test_card_selections(self, name):
        action = parse_action_request({"action": name, "playerId": "p1", "cardIds": ["hunt-3"]})
        assert action.action_type == ActionType(name)
        assert action.payload.card_ids == [C("hunt-3")]

    def test_kingdom_picks(self):
        draft = parse_action_request({"action": "draftKingdomPick", "playerId": "p2", "cardId": "magi-1"})
        stag = parse_action_request({"action": "stagKingdomPick", "playerId": "p2", "cardId": "magi-1"})
        assert draft.action_type == ActionType.DRAFT_KINGDOM_PICK
        assert stag.action_type == ActionType.STAG_KINGDOM_PICK

    def test_magi_and_tithe(self):
        magi = parse_action_request({
            "action": "magiChoice", "playerId": "p1", "drawTop": 3, "drawBottom": 1, "placeBottom": 2,
        })
        tithe = parse_action_request({"action": "titheContribute", "playerId": "p1", "contribute": True})
        assert magi == Action.magi_choice("p1", 3, 1, 2)
        assert tithe == Action.tithe_contribute("p1", True)

    def test_kings_command(self):
        response = parse_action_request({"action": "kingCommandResponse", "playerId": "p2", "stagId": "stag-3"})
        collect = parse_action_request({"action": "kingCommandCollect", "playerId": "p1"})
        assert response == Action.king_command_response("p2", C("stag-3"))
        assert collect == Action.king_command_collect("p1", [])

    @pytest.mark.parametrize("data", [
        {"action": "fly", "playerId": "p1"},
        {"action": "drawCard"},
        {"action": "draftKingdom", "playerId": "p1", "cardId": "stag-13"},
        {"action": "draftKingdom", "playerId": "p1", "cardId": "dragon-1"},
        {"action": "draftKingdom", "playerId": "p1", "cardId": "hunt-05"},
        {"action": "drawCard", "playerId": "p1", "extra": 1},
        {"action": "magiChoice", "playerId": "p1", "drawTop": -1, "drawBottom": 7},
    ])
    def test_malformed_requests(self, data):
        with pytest.raises(ValidationError):
            parse_action_request(data)


class TestGameService:
    """Tests for hosting games in memory."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def service(self, clock):
        return GameService(config=ServiceConfig(stall_timeout_seconds=60), clock=clock)

    def test_create_game(self, service):
        created = service.create_game(["Ann", "Bo", "Cy"], seed=3, game_id="g1")
        assert created.game_id == "g1"
        assert created.player_ids == ["p1", "p2", "p3"]
        assert service.list_games() == ["g1"]
        assert created.model_dump(by_alias=True)["playerIds"] == ["p1", "p2", "p3"]

    def test_bad_player_count(self, service):
        with pytest.raises(ValueError):
            service.create_game(["Solo"])

    def test_submit_action(self, service):
        service.create_game(["Ann", "Bo"], seed=3, game_id="g1")

        response = service.submit_action("g1", {"action": "drawCard", "playerId": "p1"})

        assert isinstance(response, ActionResponse)
        assert response.success
        assert "Ann drew a card." in response.changes
        assert response.view.player_id == "p1"
        assert response.view.turn_phase == "territoryAction"
        assert service.get_state("g1").turn_phase.value == "territoryAction"

    def test_concurrent_submits_apply_once(self, service):
        service.create_game(["Ann", "Bo"], seed=3, game_id="g1")
        barrier = threading.Barrier(8)
        results = []

        def submit():
            barrier.wait()
            results.append(service.submit_action("g1", {"action": "drawCard", "playerId": "p1"}))

        threads = [threading.Thread(target=submit) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(r.success for r in results) == 1
        assert sorted(r.error_code for r in results if not r.success) == ["PHASE_MISMATCH"] * 7
        state = service.get_state("g1")
        assert state.turn_phase.value == "territoryAction"
        assert len(state.get_player("p1").hand) == 6

    def test_engine_rejection(self, service):
        service.create_game(["Ann", "Bo"], seed=3, game_id="g1")
        response = service.submit_action("g1", {"action": "drawCard", "playerId": "p2"})
        assert not response.success
        assert response.error_code == "NOT_YOUR_TURN"
        assert response.view is None

    def test_malformed_payload(self, service):
        service.create_game(["Ann", "Bo"], seed=3, game_id="g1")
        response = service.submit_action("g1", {"action": "drawCard"})
        assert not response.success
        assert response.error_code == "MALFORMED_PAYLOAD"

    def test_unknown_game(self, service):
        response = service.submit_action("nope", {"action": "drawCard", "playerId": "p1"})
        assert response.error_code == "GAME_NOT_FOUND"
        assert service.submit("nope", Action.draw_card("p1")).error_code == "GAME_NOT_FOUND"
        with pytest.raises(GameNotFoundError):
            service.get_view("nope", "p1")

    def test_get_view(self, service):
        service.create_game(["Ann", "Bo"], seed=3, game_id="g1")

        view = service.get_view("g1", "p2")

        assert isinstance(view, PlayerViewModel)
        assert len(view.hand) == 5
        assert view.available_actions == []
        dumped = view.model_dump(by_alias=True)
        assert dumped["awaitingSeat"] == 0
        assert dumped["players"][0]["handCount"] == 5

    def test_remove_game(self, service):
        service.create_game(["Ann", "Bo"], seed=3, game_id="g1")
        assert service.remove_game("g1")
        assert not service.remove_game("g1")
        assert service.list_games() == []

    def test_stall_waits_for_timeout(self, service, clock):
        service.create_game(["Ann", "Bo"], seed=3, game_id="g1")
        clock.now = 59
        assert service.resolve_stalled("g1") is None

    def test_stalled_seat_is_auto_passed(self, service, clock):
        service.create_game(["Ann", "Bo"], seed=3, game_id="g1")
        clock.now = 61

        response = service.resolve_stalled("g1")

        assert response.success
        # The passive default for a Kingdom action is drawing a card
        assert "Ann drew a card." in response.changes
        assert service.resolve_stalled("g1") is None
