import pytest

from holdem.models import Pot
from holdem.pots import apply_contribution, build_pots, settle, split_pot

from .helpers import create_state


def with_contributions(amounts, stacks=None, folded=()):
    _, state = create_state(stacks or [1_000] * len(amounts))
    for player, amount in zip(state.players, amounts):
        state.total_contributions[player.id] = amount
        if player.id in folded:
            player.fold()
    return state


def test_side_pots_from_uneven_all_ins():
    state = with_contributions([100, 50, 100])
    pots = build_pots(state)
    assert pots == [
        Pot(150, frozenset({"A", "B", "C"})),
        Pot(100, frozenset({"A", "C"})),
    ]
    assert sum(pot.amount for pot in pots) == 250
    assert state.pots == pots


def test_exact_tie_contributions_share_one_tier():
    state = with_contributions([100, 100, 40])
    assert build_pots(state) == [
        Pot(120, frozenset({"A", "B", "C"})),
        Pot(120, frozenset({"A", "B"})),
    ]


def test_multiway_tiers_sum_to_total_contributed():
    state = with_contributions([30, 60, 60, 90])
    pots = build_pots(state)
    assert [pot.amount for pot in pots] == [120, 90, 30]
    assert [len(pot.eligible_players) for pot in pots] == [4, 3, 1]
    assert sum(pot.amount for pot in pots) == 240


def test_folded_top_contributor_is_dead_money():
    state = with_contributions([100, 50, 50], folded={"A"})
    assert build_pots(state) == [Pot(200, frozenset({"B", "C"}))]


def test_dead_money_without_earlier_pot_is_dropped():
    state = with_contributions([20, 10, 0])
    assert build_pots(state, eligible_players=[]) == []


def test_build_pots_is_idempotent():
    state = with_contributions([25, 80, 80])
    assert build_pots(state) == build_pots(state)
    assert state.total_contributions == {"A": 25, "B": 80, "C": 80}


def test_apply_contribution_accumulates_and_rejects_negative():
    state = with_contributions([0, 0, 0])
    apply_contribution(state, "A", 20)
    apply_contribution(state, "A", 30)
    assert state.total_contributions["A"] == 50
    with pytest.raises(ValueError):
        apply_contribution(state, "A", -1)


def test_split_pot_gives_odd_chips_to_lowest_seats():
    assert split_pot(101, {"A": 2, "B": 0, "C": 1}) == {"B": 34, "C": 34, "A": 33}
    assert split_pot(90, {"A": 0, "B": 1}) == {"A": 45, "B": 45}


def test_settle_pays_each_pot_to_best_ranked_contender():
    state = with_contributions([100, 50, 100], stacks=[0, 0, 100])
    payouts = settle(state, {"A": 5, "B": 1, "C": 9}, ["A", "B", "C"])
    assert payouts == {"A": 100, "B": 150, "C": 0}
    assert [player.stack for player in state.players] == [100, 150, 100]


def test_settle_splits_ties_with_remainder_to_lowest_seat():
    state = with_contributions([25, 25, 25], stacks=[0, 0, 0])
    payouts = settle(state, {"A": 3, "B": 3, "C": 7}, ["A", "B", "C"])
    assert payouts == {"A": 38, "B": 37, "C": 0}
    assert sum(payouts.values()) == 75


def test_settle_ignores_players_without_rank():
    state = with_contributions([40, 40, 40], stacks=[0, 0, 0])
    payouts = settle(state, {"C": 9}, ["A", "B", "C"])
    assert payouts == {"A": 0, "B": 0, "C": 120}


def test_settle_rejects_pot_without_ranked_contender():
    state = with_contributions([40, 40, 40], stacks=[0, 0, 0])
    with pytest.raises(ValueError, match="No hand rank"):
        settle(state, {}, ["A", "B", "C"])
    assert [player.stack for player in state.players] == [0, 0, 0]
    assert state.total_contributions == {"A": 40, "B": 40, "C": 40}
