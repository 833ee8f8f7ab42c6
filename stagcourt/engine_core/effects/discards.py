"""
Forced discards at the end of a turn.
"""

from __future__ import annotations
from typing import cast

from ..action import ActionPayload, Rejection
from ..pending import DiscardToHandLimit
from ..state import GameState, PlayerState
from .common import discard_selection, validate_selection


def handle_discard_to_hand_limit(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    """Discard down to the hand limit; the turn then passes on."""
    pending = cast(DiscardToHandLimit, state.pending_action)

    rejection = validate_selection(player, payload.card_ids, pending.must_discard)
    if rejection:
        return rejection

    state.pending_action = None
    state.add_log(f"{player.name} discards {pending.must_discard} card(s) down to the hand limit.")
    discard_selection(state, player, payload.card_ids)
    return None
