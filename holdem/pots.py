from __future__ import annotations

import logging
from typing import Collection, Dict, List, Mapping, Optional

from .models import PlayerId, Pot
from .state import GameState

LOGGER = logging.getLogger("holdem.pots")

# Pots are never stored incrementally: every call rebuilds them from the
# cumulative per-player contributions for the hand.


def apply_contribution(state: GameState, player_id: PlayerId, amount: int) -> None:
    if amount < 0:
        raise ValueError(f"Contribution cannot be negative: {amount}")
    state.total_contributions[player_id] = state.total_contributions.get(player_id, 0) + amount


def build_pots(state: GameState, eligible_players: Optional[Collection[PlayerId]] = None) -> List[Pot]:
    """One pot per distinct contribution level, smallest level first.

    Slices nobody eligible paid into are dead money and roll into the
    previous pot.
    """
    if eligible_players is None:
        eligible_players = [player.id for player in state.contesting_players()]
    eligible = set(eligible_players)

    contributions = {pid: amount for pid, amount in state.total_contributions.items() if amount > 0}
    pots: List[Pot] = []
    previous_level = 0
    for level in sorted(set(contributions.values())):
        contributors = [pid for pid, amount in contributions.items() if amount >= level]
        amount = (level - previous_level) * len(contributors)
        winners = frozenset(pid for pid in contributors if pid in eligible)
        if winners:
            pots.append(Pot(amount, winners))
        elif pots:
            last = pots[-1]
            pots[-1] = Pot(last.amount + amount, last.eligible_players)
        else:
            LOGGER.warning("Dropping %s chips of dead money with no earlier pot", amount)
        previous_level = level

    state.pots = list(pots)
    return pots


def split_pot(amount: int, winner_seats: Mapping[PlayerId, int]) -> Dict[PlayerId, int]:
    """Even split; odd chips go one at a time to the lowest seats."""
    ordered = sorted(winner_seats, key=lambda pid: winner_seats[pid])
    share, remainder = divmod(amount, len(ordered))
    return {pid: share + (1 if idx < remainder else 0) for idx, pid in enumerate(ordered)}


def settle(
    state: GameState,
    hand_ranks: Mapping[PlayerId, int],
    eligible_players: Collection[PlayerId],
) -> Dict[PlayerId, int]:
    """Pay every pot to its best-ranked contenders.

    Raises ValueError, before any stack changes, when a pot has no contender
    in `hand_ranks`.
    """
    pots = build_pots(state, eligible_players)
    for pot in pots:
        if not any(pid in hand_ranks for pid in pot.eligible_players):
            raise ValueError(f"No hand rank for any contender of the {pot.amount} pot")

    payouts: Dict[PlayerId, int] = {pid: 0 for pid in eligible_players}
    for pot in pots:
        contenders = [pid for pid in pot.eligible_players if pid in hand_ranks]
        best = min(hand_ranks[pid] for pid in contenders)
        winners = {pid: state.player_by_id(pid).seat for pid in contenders if hand_ranks[pid] == best}
        for pid, share in split_pot(pot.amount, winners).items():
            payouts[pid] = payouts.get(pid, 0) + share

    for pid, amount in payouts.items():
        state.player_by_id(pid).receive_payout(amount)
    return payouts


def clear_contributions(state: GameState) -> None:
    for pid in state.total_contributions:
        state.total_contributions[pid] = 0
