"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new state, or a rejection
- Validates seat, phase and pending action before dispatching
- Works on a clone, so a rejected action leaves the input untouched
- Delegates card effects to the sub-engines in engine_core.effects
"""

from __future__ import annotations
from typing import Callable
import logging

from .effects.discards import handle_discard_to_hand_limit
from .effects.hunt import handle_hunt_discard, handle_hunt_response
from .effects.kingdom import (
    handle_discard_for_cost,
    handle_draft_kingdom,
    handle_draft_kingdom_pick,
    handle_draw_card,
    handle_play_stag,
    handle_stag_kingdom_pick,
)
from .effects.kings_command import handle_king_command_collect, handle_king_command_response
from .effects.magi import handle_magi_choice, handle_magi_place_cards
from .effects.territory import handle_no_territory, handle_play_territory
from .effects.tithe import handle_tithe_contribute, handle_tithe_discard
from .action import (
    KINGDOM_ACTIONS,
    TERRITORY_ACTIONS,
    Action,
    ActionPayload,
    ActionResult,
    ActionType,
    ErrorCode,
    Rejection,
    reject,
)
from .pending import (
    DiscardForCost,
    DiscardToHandLimit,
    DraftKingdom,
    HuntDiscard,
    HuntResponse,
    KingCommandCollect,
    KingCommandResponse,
    MagiChoice,
    MagiPlaceCards,
    StagKingdomDraft,
    StagKingdomPickSelf,
    TitheContribute,
    TitheDiscard,
)
from .state import GameState, PlayerState, TurnPhase
from .turn import auto_advance

logger = logging.getLogger(__name__)

Handler = Callable[[GameState, PlayerState, ActionPayload], "Rejection | None"]


# Turn-phase actions, taken by the current player when nothing is pending
PHASE_HANDLERS: dict[ActionType, Handler] = {
    ActionType.DRAW_CARD: handle_draw_card,
    ActionType.DRAFT_KINGDOM: handle_draft_kingdom,
    ActionType.PLAY_STAG: handle_play_stag,
    ActionType.PLAY_TERRITORY: handle_play_territory,
    ActionType.NO_TERRITORY: handle_no_territory,
}

# One handler per pending-action variant
PENDING_HANDLERS: dict[type, Handler] = {
    DraftKingdom: handle_draft_kingdom_pick,
    HuntResponse: handle_hunt_response,
    HuntDiscard: handle_hunt_discard,
    MagiChoice: handle_magi_choice,
    MagiPlaceCards: handle_magi_place_cards,
    TitheDiscard: handle_tithe_discard,
    TitheContribute: handle_tithe_contribute,
    KingCommandResponse: handle_king_command_response,
    KingCommandCollect: handle_king_command_collect,
    DiscardToHandLimit: handle_discard_to_hand_limit,
    DiscardForCost: handle_discard_for_cost,
    StagKingdomDraft: handle_stag_kingdom_pick,
    StagKingdomPickSelf: handle_stag_kingdom_pick,
}


class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState, rules included.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state or the rejection.
        The state passed in is never modified.
        """
        rejection = self._validate_action(state, action)
        if rejection:
            return self._reject(state, action, rejection)

        new_state = state.clone()
        player = new_state.get_player(action.player_id)
        handler = self._get_handler(new_state, action)

        rejection = handler(new_state, player, action.payload)
        if rejection:
            return self._reject(state, action, rejection)

        if new_state.winner:
            new_state.pending_action = None
        auto_advance(new_state)

        changes = [entry.message for entry in new_state.log[len(state.log):]]
        return ActionResult.success_with_state(new_state, changes)

    def _validate_action(self, state: GameState, action: Action) -> Rejection | None:
        """
        Check that the acting seat may take this action right now.

        Payload contents are checked by the handlers.
        """
        if state.is_over:
            return reject("The game is over", ErrorCode.GAME_OVER)

        player = state.get_player(action.player_id)
        if player is None:
            return reject(f"Unknown player: {action.player_id}", ErrorCode.UNKNOWN_PLAYER)
        if player.eliminated:
            return reject(f"{player.name} has been eliminated", ErrorCode.PLAYER_ELIMINATED)

        pending = state.pending_action
        if pending is not None:
            if action.action_type != pending.action:
                return reject(
                    f"Waiting for {pending.action.value}, not {action.action_type.value}",
                    ErrorCode.PHASE_MISMATCH,
                )
            if player.seat_index != pending.responder_seat:
                return reject("Not your turn to respond", ErrorCode.NOT_YOUR_TURN)
            return None

        if state.turn_phase == TurnPhase.KINGDOM_ACTION:
            allowed = KINGDOM_ACTIONS
        elif state.turn_phase == TurnPhase.TERRITORY_ACTION:
            allowed = TERRITORY_ACTIONS
        else:
            allowed = frozenset()
        if action.action_type not in allowed:
            return reject(
                f"{action.action_type.value} is not allowed during {state.turn_phase.value}",
                ErrorCode.PHASE_MISMATCH,
            )
        if player.seat_index != state.current_seat:
            return reject(f"Not {player.name}'s turn", ErrorCode.NOT_YOUR_TURN)
        return None

    def _get_handler(self, state: GameState, action: Action) -> Handler:
        """Get the handler for a validated action; a missing one is a bug."""
        if state.pending_action is not None:
            return PENDING_HANDLERS[type(state.pending_action)]
        return PHASE_HANDLERS[action.action_type]

    def _reject(self, state: GameState, action: Action, rejection: Rejection) -> ActionResult:
        logger.info(
            "Game %s: rejected %s from %s: %s",
            state.game_id, action.action_type.value, action.player_id, rejection.reason,
        )
        return ActionResult.failure(rejection.reason, error_code=rejection.code)


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
