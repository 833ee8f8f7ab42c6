"""
Card sub-engines.

Each handler takes (state, player, payload), validates the payload
completely, then mutates the state and leaves either a new pending
action or a finished resolution behind.
"""

from .discards import handle_discard_to_hand_limit
from .hunt import handle_hunt_discard, handle_hunt_response
from .kingdom import (
    handle_discard_for_cost,
    handle_draft_kingdom,
    handle_draft_kingdom_pick,
    handle_draw_card,
    handle_play_stag,
    handle_stag_kingdom_pick,
)
from .kings_command import handle_king_command_collect, handle_king_command_response
from .magi import handle_magi_choice, handle_magi_place_cards
from .territory import handle_no_territory, handle_play_territory
from .tithe import handle_tithe_contribute, handle_tithe_discard

__all__ = [
    "handle_discard_to_hand_limit",
    "handle_hunt_discard",
    "handle_hunt_response",
    "handle_discard_for_cost",
    "handle_draft_kingdom",
    "handle_draft_kingdom_pick",
    "handle_draw_card",
    "handle_play_stag",
    "handle_stag_kingdom_pick",
    "handle_king_command_collect",
    "handle_king_command_response",
    "handle_magi_choice",
    "handle_magi_place_cards",
    "handle_no_territory",
    "handle_play_territory",
    "handle_tithe_contribute",
    "handle_tithe_discard",
]
