"""
King's Command - Opponents surrender a Stag each; the commander may keep them.

The card enters the commander's territory at once. Each living
opponent in turn discards a Stag (paying atonement) or shows a hand
without Stags. The commander then takes any subset of the discarded
Stags from the discard pile into hand.
"""

from __future__ import annotations
from typing import cast

from ..action import ActionPayload, ErrorCode, Rejection, reject
from ..cards import Card, format_cards
from ..pending import KingCommandCollect, KingCommandResponse
from ..state import GameState, PlayerState
from ..turn import finish_resolution
from ..zones import play_to_territory
from .common import discard_with_atonement, require_in_hand


def start_kings_command(state: GameState, player: PlayerState, card: Card) -> Rejection | None:
    play_to_territory(player, card)
    state.add_log(f"{player.name} plays {card.display_name()}!")

    pending = KingCommandResponse(
        command_player_seat=player.seat_index,
        responding_seat=-1,
        remaining_responder_seats=state.opponent_seats_in_order(player.seat_index),
    )
    _next_responder(state, pending)
    return None


def handle_king_command_response(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    pending = cast(KingCommandResponse, state.pending_action)

    stag = payload.stag_id
    if stag is None:
        if any(c.is_stag for c in player.hand):
            return reject("You have Stags in your hand and must discard one")
        state.add_log(f"{player.name} reveals no Stags.")
    else:
        if not stag.is_stag:
            return reject("Not a Stag card")
        rejection = require_in_hand(player, stag)
        if rejection:
            return rejection

        state.add_log(f"{player.name} discards {stag.display_name()} to King's Command.")
        discard_with_atonement(state, player, stag)
        pending.discarded_stags.append(stag)
        if state.winner:
            state.pending_action = None
            return None

    _next_responder(state, pending)
    return None


def handle_king_command_collect(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    pending = cast(KingCommandCollect, state.pending_action)

    stags = payload.stag_ids if payload.stag_ids is not None else []
    if len(set(stags)) != len(stags):
        return reject("Duplicate cards in selection")
    for stag in stags:
        if stag not in pending.discarded_stags or stag not in state.discard:
            return reject(f"Stag {stag} is not available to collect", ErrorCode.CARD_NOT_OWNED)

    if stags:
        for stag in stags:
            state.discard.remove(stag)
            player.hand.append(stag)
        state.add_log(f"{player.name} takes {format_cards(stags)} from King's Command.")
    else:
        state.add_log(f"{player.name} takes no Stags from King's Command.")

    finish_resolution(state)
    return None


def _next_responder(state: GameState, pending: KingCommandResponse) -> None:
    while pending.remaining_responder_seats:
        seat = pending.remaining_responder_seats.pop(0)
        responder = state.get_player_by_seat(seat)
        if responder.eliminated:
            continue
        if not responder.hand:
            state.add_log(f"{responder.name} has an empty hand and reveals no Stags.")
            continue
        pending.responding_seat = seat
        state.pending_action = pending
        return

    if not pending.discarded_stags:
        finish_resolution(state)
        return

    state.pending_action = KingCommandCollect(
        command_player_seat=pending.command_player_seat,
        discarded_stags=list(pending.discarded_stags),
    )
