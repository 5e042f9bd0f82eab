from holdem import phases
from holdem.models import Phase, PlayerAction
from holdem.turns import betting_exhausted, next_funded_seat, next_seat, should_close_round

from .helpers import act, create_state, start

BOARD_ORDER = [
    "As", "Ks",  # A
    "Qd", "Jd",  # B
    "Tc", "9c",  # C
    "2h",        # burn
    "3h", "4h", "5h",
    "6d",        # burn
    "7d",
    "8s",        # burn
    "9s",
]


def test_next_seat_skips_folded_and_all_in_players():
    _, state = start((1_000, 1_000, 1_000, 1_000))
    assert state.seat_to_act == 3
    state.player_by_seat(0).fold()
    state.player_by_seat(1).stack = 0
    assert next_seat(state) == 2


def test_next_seat_wraps_around_the_table():
    _, state = start((1_000, 1_000, 1_000, 1_000))
    assert next_seat(state, 3) == 0
    assert next_seat(state, 0) == 1


def test_next_seat_returns_start_when_nobody_can_act():
    _, state = start()
    for player in state.players:
        player.stack = 0
    assert next_seat(state, 1) == 1


def test_next_funded_seat_ignores_fold_flags():
    _, state = create_state((1_000, 0, 1_000))
    state.player_by_seat(2).fold()
    assert next_funded_seat(state, 0) == 2
    assert next_funded_seat(state, 2) == 0


def test_round_stays_open_until_big_blind_acts():
    engine, state = start()
    act(engine, state, PlayerAction.call("A"))
    act(engine, state, PlayerAction.call("B"))
    assert not should_close_round(state)
    assert state.seat_to_act == 2

    state.round.mark_acted("C")
    assert should_close_round(state)


def test_big_blind_check_closes_preflop():
    engine, state = start()
    act(engine, state, PlayerAction.call("A"))
    act(engine, state, PlayerAction.call("B"))
    act(engine, state, PlayerAction.check("C"))
    assert state.phase == Phase.FLOP
    assert len(state.community_cards) == 3
    assert state.round.current_bet == 0
    assert state.seat_to_act == 1


def test_unmatched_contribution_keeps_round_open():
    engine, state = start()
    act(engine, state, PlayerAction.raise_to("A", 60))
    state.round.mark_acted("B")
    state.round.mark_acted("C")
    assert not should_close_round(state)


def test_round_closes_when_nobody_can_act():
    _, state = start()
    for player in state.players:
        player.stack = 0
    assert should_close_round(state)
    assert betting_exhausted(state)


def test_start_hand_deals_two_cards_per_seat_in_order():
    engine, state = create_state(top=BOARD_ORDER)
    engine.start_hand(state)
    assert state.phase == Phase.PRE_FLOP
    assert state.community_cards == []
    assert [card.label for card in state.player_by_id("A").hole_cards] == ["As", "Ks"]
    assert [card.label for card in state.player_by_id("B").hole_cards] == ["Qd", "Jd"]
    assert [card.label for card in state.player_by_id("C").hole_cards] == ["Tc", "9c"]
    assert state.deck.position == 6


def test_start_hand_sits_out_empty_stacks():
    engine, state = create_state((1_000, 0, 1_000, 1_000))
    engine.start_hand(state)
    sitting_out = state.player_by_id("B")
    assert sitting_out.folded
    assert sitting_out.hole_cards == []
    assert "B" not in state.round.contesting
    assert state.deck.position == 6


def test_advance_phase_burns_and_reveals():
    engine, state = create_state(top=BOARD_ORDER)
    engine.start_hand(state)

    assert phases.advance_phase(state) == Phase.FLOP
    assert [card.label for card in state.community_cards] == ["3h", "4h", "5h"]
    assert state.deck.position == 10

    assert phases.advance_phase(state) == Phase.TURN
    assert state.community_cards[-1].label == "7d"
    assert state.deck.position == 12

    assert phases.advance_phase(state) == Phase.RIVER
    assert state.community_cards[-1].label == "9s"
    assert state.deck.position == 14

    assert phases.advance_phase(state) == Phase.SHOWDOWN
    assert len(state.community_cards) == 5
    assert state.deck.position == 14

    assert phases.advance_phase(state) == Phase.COMPLETE


def test_advance_phase_keeps_all_in_players_in_ledger():
    engine, state = start()
    state.player_by_id("B").stack = 0
    state.player_by_id("C").fold()
    phases.advance_phase(state)
    assert state.round.contesting == {"A", "B"}
    assert state.round.current_bet == 0
    assert state.round.acted == set()
