"""
Kingdom actions - Draw a card, draft the Kingdom, or place a Stag.

Drafting hands the Kingdom around the table: the active player picks
first, then each living opponent clockwise, and whatever is left is
discarded. Placing a Stag reverses that order after the Stag is
down: opponents pick first and the Stag player picks last, and the
turn then skips its territory action.
"""

from __future__ import annotations
from typing import cast

from ..action import ActionPayload, ErrorCode, Rejection, reject
from ..cards import Card, stag_discard_cost
from ..pending import (
    DiscardForCost,
    DraftKingdom,
    StagKingdomDraft,
    StagKingdomPickSelf,
)
from ..scoring import check_stag_win, stag_points, trigger_deck_exhaustion
from ..state import GameState, PlayerState, TurnPhase
from ..turn import finish_resolution
from ..zones import (
    deal_to_kingdom,
    discard_kingdom,
    draw_card,
    play_to_territory,
    take_from_kingdom,
)
from .common import (
    discard_selection,
    require_card,
    require_in_hand,
    resolution_interrupted,
    validate_selection,
)


def handle_draw_card(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    """Draw 1 card, then deal 1 card face-up to the Kingdom."""
    card = draw_card(state)
    if card is None:
        trigger_deck_exhaustion(state)
        return None
    player.hand.append(card)
    state.add_log(f"{player.name} drew a card.")

    if not deal_to_kingdom(state):
        trigger_deck_exhaustion(state)
        return None

    state.turn_phase = TurnPhase.TERRITORY_ACTION
    return None


def _require_kingdom_card(state: GameState, card: Card | None) -> Rejection | None:
    rejection = require_card(card, "A Kingdom card")
    if rejection:
        return rejection
    if card not in state.kingdom:
        return reject(f"Card {card} is not in the Kingdom", ErrorCode.CARD_NOT_OWNED)
    return None


# ============================================================
# Draft Kingdom
# ============================================================

def handle_draft_kingdom(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    rejection = _require_kingdom_card(state, payload.card_id)
    if rejection:
        return rejection

    take_from_kingdom(state, player, payload.card_id)
    state.add_log(f"{player.name} drafts {payload.card_id.display_name()} from the Kingdom.")

    _continue_draft(state, player.seat_index, state.opponent_seats_in_order(player.seat_index))
    return None


def handle_draft_kingdom_pick(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    pending = cast(DraftKingdom, state.pending_action)

    rejection = _require_kingdom_card(state, payload.card_id)
    if rejection:
        return rejection

    take_from_kingdom(state, player, payload.card_id)
    state.add_log(f"{player.name} picks {payload.card_id.display_name()} from the Kingdom.")

    _continue_draft(state, pending.drafter_seat, pending.remaining_drafter_seats)
    return None


def _continue_draft(state: GameState, drafter_seat: int, queue: list[int]) -> None:
    seats = [s for s in queue if not state.get_player_by_seat(s).eliminated]
    if state.kingdom and seats:
        state.pending_action = DraftKingdom(
            drafter_seat=drafter_seat,
            current_drafter_seat=seats[0],
            remaining_drafter_seats=seats[1:],
        )
        return

    if state.kingdom:
        state.add_log("The rest of the Kingdom is discarded.")
    discard_kingdom(state)
    state.pending_action = None
    state.turn_phase = TurnPhase.TERRITORY_ACTION


# ============================================================
# Play Stag
# ============================================================

def handle_play_stag(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    """
    Kingdom Action: place a Stag into territory.

    With discard_ids the cost is paid immediately; without them a
    discardForCost pending action asks for the cards.
    """
    stag = payload.card_id
    rejection = require_card(stag, "A Stag")
    if rejection:
        return rejection
    if not stag.is_stag:
        return reject("Not a Stag card")
    rejection = require_in_hand(player, stag)
    if rejection:
        return rejection

    cost = stag_discard_cost(stag.value)
    if len(player.hand) - 1 < cost:
        return reject(f"{stag.display_name()} needs {cost} other card(s) in hand to discard")

    if payload.discard_ids is None:
        state.add_log(f"{player.name} plays {stag.display_name()} and must discard {cost} card(s).")
        state.pending_action = DiscardForCost(
            player_seat=player.seat_index,
            stag_card=stag,
            must_discard=cost,
        )
        return None

    rejection = validate_selection(player, payload.discard_ids, cost, exclude=stag)
    if rejection:
        return rejection

    state.add_log(f"{player.name} plays {stag.display_name()}.")
    _pay_cost_and_place(state, player, stag, payload.discard_ids)
    return None


def handle_discard_for_cost(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    pending = cast(DiscardForCost, state.pending_action)

    rejection = validate_selection(player, payload.card_ids, pending.must_discard, exclude=pending.stag_card)
    if rejection:
        return rejection

    state.pending_action = None
    _pay_cost_and_place(state, player, pending.stag_card, payload.card_ids)
    return None


def _pay_cost_and_place(state: GameState, player: PlayerState, stag: Card, discards: list[Card]) -> None:
    discard_selection(state, player, discards)
    if resolution_interrupted(state, player.seat_index):
        return
    state.add_log(f"{player.name} discards {len(discards)} card(s) to place {stag.display_name()}.")

    play_to_territory(player, stag)
    state.add_log(
        f"{stag.display_name()} enters {player.name}'s territory "
        f"({stag_points(player)} Stag Points)."
    )
    check_stag_win(state, player)
    if state.winner:
        return

    _continue_stag_draft(state, player.seat_index, state.opponent_seats_in_order(player.seat_index))


def handle_stag_kingdom_pick(state: GameState, player: PlayerState, payload: ActionPayload) -> Rejection | None:
    pending = cast("StagKingdomDraft | StagKingdomPickSelf", state.pending_action)

    rejection = _require_kingdom_card(state, payload.card_id)
    if rejection:
        return rejection

    take_from_kingdom(state, player, payload.card_id)
    state.add_log(f"{player.name} picks {payload.card_id.display_name()} from the Kingdom.")

    if isinstance(pending, StagKingdomPickSelf):
        _close_stag_draft(state)
    else:
        _continue_stag_draft(state, pending.stag_player_seat, pending.remaining_drafter_seats)
    return None


def _continue_stag_draft(state: GameState, stag_seat: int, queue: list[int]) -> None:
    if not state.kingdom:
        _close_stag_draft(state)
        return

    seats = [s for s in queue if not state.get_player_by_seat(s).eliminated]
    if seats:
        state.pending_action = StagKingdomDraft(
            stag_player_seat=stag_seat,
            current_drafter_seat=seats[0],
            remaining_drafter_seats=seats[1:],
        )
    else:
        state.pending_action = StagKingdomPickSelf(stag_player_seat=stag_seat)


def _close_stag_draft(state: GameState) -> None:
    if state.kingdom:
        state.add_log("The rest of the Kingdom is discarded.")
    discard_kingdom(state)
    finish_resolution(state)
