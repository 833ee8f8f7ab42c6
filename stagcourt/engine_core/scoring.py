"""
Win/Elimination Evaluator - Atonement, elimination and the three win checks.

Win checks are idempotent and do nothing once a winner is set:
- Stag-18: checked right after a Stag enters a territory
- Last standing: checked after every elimination
- Deck exhaustion: triggered by a zone operation the deck cannot satisfy
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .cards import Card, CardKind, count_kind, stag_atonement_cost
from .state import GameState, PlayerState, WinReason

logger = logging.getLogger(__name__)


def territory_healing_value(player: PlayerState) -> int:
    """Healing in territory: +1 per Healing card, +1 per Magi revealed as Healing."""
    return count_kind(player.territory, CardKind.HEALING) + len(player.territory_magi_as_healing)


def hand_limit(state: GameState, player: PlayerState) -> int:
    """Base limit, +1 per territory Magi that is not counted as Healing."""
    magi = [
        c for c in player.territory
        if c.kind == CardKind.MAGI and c not in player.territory_magi_as_healing
    ]
    return state.rules.base_hand_limit + len(magi)


def stag_points(player: PlayerState) -> int:
    return sum(c.value for c in player.territory if c.kind == CardKind.STAG)


def crown_score(player: PlayerState) -> int:
    """Deck-out score: Stags + 3x Tithes + contributions made + ante + King's Commands."""
    territory = player.territory
    return (
        count_kind(territory, CardKind.STAG)
        + 3 * count_kind(territory, CardKind.TITHE)
        + player.contributions_made
        + player.ante
        + count_kind(territory, CardKind.KINGS_COMMAND)
    )


def apply_atonement(state: GameState, player: PlayerState, stag: Card) -> None:
    """
    Charge the atonement owed for a Stag that just left the player's hand.

    Territory Healing at least equal to the Stag's value waives the cost.
    A player who cannot pay is eliminated; that is a legal outcome,
    not a failure of the action that caused it.
    """
    healing = territory_healing_value(player)
    if healing >= stag.value:
        state.add_log(
            f"{player.name} discards {stag.display_name()}; "
            f"Healing ({healing}) covers atonement."
        )
        return

    cost = stag_atonement_cost(stag.value)
    if player.contributions_remaining >= cost:
        player.contributions_remaining -= cost
        player.contributions_made += cost
        state.add_log(f"{player.name} atones {cost} for discarding {stag.display_name()}.")
        return

    state.add_log(f"{player.name} cannot atone for {stag.display_name()} and is eliminated!")
    eliminate_player(state, player)


def eliminate_player(state: GameState, player: PlayerState) -> None:
    """
    Remove a player from the game.

    The seat leaves the turn rotation, the hand is discarded and
    last-standing is checked. If it was this player's turn, the turn
    is forfeited: cards mid-resolution are discarded and play passes
    to the next living seat.
    """
    if player.eliminated:
        return

    was_current = state.current_seat == player.seat_index
    player.eliminated = True

    if player.seat_index in state.player_order:
        removed_index = state.player_order.index(player.seat_index)
        state.player_order.remove(player.seat_index)
        if removed_index < state.current_player_index:
            state.current_player_index -= 1
        if state.player_order:
            state.current_player_index %= len(state.player_order)
        else:
            state.current_player_index = 0

    state.discard.extend(player.hand)
    player.hand = []
    logger.info("Game %s: %s eliminated", state.game_id, player.player_id)

    check_last_standing(state)

    if was_current and state.winner is None:
        _forfeit_turn(state, player)


def _forfeit_turn(state: GameState, player: PlayerState) -> None:
    from .turn import start_turn

    state.discard.extend(state.in_play)
    state.in_play = []
    state.pending_action = None
    state.add_log(f"{player.name}'s turn ends.")
    start_turn(state)


def check_stag_win(state: GameState, player: PlayerState) -> None:
    """Call after placing a Stag in a territory."""
    if state.winner:
        return
    points = stag_points(player)
    if points >= state.rules.stag_points_to_win:
        _declare_winner(state, player, WinReason.STAG_18)
        state.add_log(f"{player.name} has {points} Stag Points and wins the game!")


def check_last_standing(state: GameState) -> None:
    """Check if only one player remains."""
    if state.winner:
        return
    alive = state.living_players
    if len(alive) == 1:
        _declare_winner(state, alive[0], WinReason.LAST_STANDING)
        state.add_log(f"{alive[0].name} is the last player standing and wins the game!")


@dataclass
class FinalScore:
    player: PlayerState
    score: int
    tiebreak: tuple[int, int, int, int]  # Magi, Healing, Hunt, King's Command


def final_scores(state: GameState) -> list[FinalScore]:
    """Deck-out scores of living players, best first."""
    scores = []
    for p in state.living_players:
        territory = p.territory
        tiebreak = (
            count_kind(territory, CardKind.MAGI),
            count_kind(territory, CardKind.HEALING),
            count_kind(territory, CardKind.HUNT),
            count_kind(territory, CardKind.KINGS_COMMAND),
        )
        scores.append(FinalScore(player=p, score=crown_score(p), tiebreak=tiebreak))

    # Stable: remaining ties keep seating order
    scores.sort(key=lambda s: (-s.score, tuple(-t for t in s.tiebreak)))
    return scores


def trigger_deck_exhaustion(state: GameState) -> None:
    """Score every living player and end the game."""
    if state.winner:
        return
    state.add_log("The deck has run out! Scoring final results...")

    scores = final_scores(state)
    for entry in scores:
        p = entry.player
        tithes = count_kind(p.territory, CardKind.TITHE)
        state.add_log(
            f"{p.name}: {count_kind(p.territory, CardKind.STAG)} Stags"
            f" + {3 * tithes} Tithe({tithes}x3)"
            f" + {p.contributions_made + p.ante} contributions(incl ante)"
            f" + {count_kind(p.territory, CardKind.KINGS_COMMAND)} KC = {entry.score}"
        )

    if scores:
        _declare_winner(state, scores[0].player, WinReason.DECK_OUT)
        state.add_log(f"{scores[0].player.name} wins!")


def _declare_winner(state: GameState, player: PlayerState, reason: WinReason) -> None:
    state.winner = player.player_id
    state.win_reason = reason
    logger.info("Game %s won by %s (%s)", state.game_id, player.player_id, reason.value)
