"""
Turn Phase Controller - The outer turn cycle.

refreshKingdom -> kingdomAction -> territoryAction -> endOfTurn -> next seat

refreshKingdom and endOfTurn need no input unless the active player is
over their hand limit; auto_advance walks through them after every
action. It is a bounded loop, so it terminates even when no living
player is left.
"""

from __future__ import annotations

from .pending import DiscardToHandLimit
from .scoring import hand_limit, trigger_deck_exhaustion
from .state import GameState, TurnPhase
from .zones import burn_card, deal_to_kingdom, discard_kingdom


def refresh_kingdom(state: GameState) -> bool:
    """
    Top the Kingdom back up at the start of a turn.

    Returns False if the game ended from deck exhaustion.
    """
    size = state.rules.kingdom_size
    if len(state.kingdom) >= size:
        return True
    discard_kingdom(state)
    if not burn_card(state):
        trigger_deck_exhaustion(state)
        return False
    for _ in range(size):
        if not deal_to_kingdom(state):
            trigger_deck_exhaustion(state)
            return False
    return True


def start_turn(state: GameState) -> None:
    """Begin the turn of whoever player_order[current_player_index] now points at."""
    state.turn_phase = TurnPhase.REFRESH_KINGDOM
    state.pending_action = None
    state.turn_number += 1
    if state.player_order:
        state.add_log(f"--- {state.current_player.name}'s turn ---")


def advance_turn(state: GameState) -> None:
    """Pass the turn to the next living seat."""
    if not state.player_order:
        return
    state.current_player_index = (state.current_player_index + 1) % len(state.player_order)
    start_turn(state)


def finish_resolution(state: GameState) -> None:
    """Close an interactive resolution and move to the end of the turn."""
    state.pending_action = None
    state.turn_phase = TurnPhase.END_OF_TURN


def auto_advance(state: GameState) -> None:
    """
    Advance through phases that need no player input.

    Stops at the first phase that waits on a player, on a pending
    action, or once the game has a winner.
    """
    for _ in range(len(state.players) + 1):
        if state.winner or state.pending_action is not None:
            return
        if not state.player_order:
            return

        state.current_player_index %= len(state.player_order)
        player = state.current_player

        if player.eliminated:
            advance_turn(state)
            continue

        if state.turn_phase == TurnPhase.REFRESH_KINGDOM:
            if refresh_kingdom(state):
                state.turn_phase = TurnPhase.KINGDOM_ACTION
            return

        if state.turn_phase in (TurnPhase.KINGDOM_ACTION, TurnPhase.TERRITORY_ACTION):
            return

        # End of turn
        limit = hand_limit(state, player)
        if len(player.hand) > limit:
            state.pending_action = DiscardToHandLimit(
                player_seat=player.seat_index,
                must_discard=len(player.hand) - limit,
            )
            return
        advance_turn(state)
