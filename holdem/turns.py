from __future__ import annotations

from typing import List, Optional

from .models import Player
from .state import GameState


def can_act(player: Player) -> bool:
    return not player.folded and not player.is_all_in and player.stack > 0


def _seats_after(state: GameState, seat: int) -> List[int]:
    seats = state.seats
    return [s for s in seats if s > seat] + [s for s in seats if s <= seat]


def next_seat(state: GameState, from_seat: Optional[int] = None) -> int:
    """First seat clockwise from `from_seat` (default: seat to act) whose player can still act.

    Returns the starting seat unchanged when nobody can act.
    """
    start = state.seat_to_act if from_seat is None else from_seat
    for seat in _seats_after(state, start):
        if can_act(state.player_by_seat(seat)):
            return seat
    return start


def actionable_players(state: GameState) -> List[Player]:
    return [player for player in state.players if can_act(player)]


def should_close_round(state: GameState) -> bool:
    round_state = state.round
    active = actionable_players(state)
    if not active:
        return True
    for player in active:
        if not round_state.has_acted(player.id):
            return False
        if round_state.contribution(player.id) != round_state.current_bet:
            return False
    return True


def betting_exhausted(state: GameState) -> bool:
    """True when no further betting can change the hand: run the board out."""
    active = actionable_players(state)
    if not active:
        return True
    if len(active) == 1:
        return state.round.contribution(active[0].id) >= state.round.current_bet
    return False


def next_funded_seat(state: GameState, seat: int) -> int:
    """Next seat clockwise holding chips, ignoring fold flags left over from the last hand."""
    for candidate in _seats_after(state, seat):
        if state.player_by_seat(candidate).stack > 0:
            return candidate
    return seat
