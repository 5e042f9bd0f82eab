from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from . import phases, pots, turns
from .cards import Card
from .deck import Deck
from .errors import InvalidSetup
from .evaluator import HandEvaluator, describe_rank
from .models import ActionType, ActionWindow, Phase, Player, PlayerAction, PlayerId, TableConfig, ValidationResult
from .rng import EntropySource, FisherYatesShuffler, Shuffler
from .state import GameState
from .validator import legal_actions, min_raise_increment, validate

LOGGER = logging.getLogger("holdem")

# GameEngine is stateless: every operation takes the GameState it works on.
# No rendering, pacing or transport lives here, only rules and chip accounting.


class GameObserver(Protocol):
    def on_event(self, event: Dict[str, object]) -> None:
        ...


class HandRankProvider(Protocol):
    def evaluate(self, hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> int:
        ...

    def hand_name(self, hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> str:
        ...


class GameEngine:
    """No-Limit Texas Hold'em hand progression for one table."""

    def __init__(self, observers: Optional[Iterable[GameObserver]] = None) -> None:
        self.observers: List[GameObserver] = list(observers or [])

    # Setup -----------------------------------------------------------

    def create_game_state(
        self,
        players: Iterable[Player],
        small_blind: int,
        big_blind: int,
        dealer_seat: int,
        entropy: EntropySource,
        shuffler: Optional[Shuffler] = None,
    ) -> GameState:
        if entropy is None:
            raise InvalidSetup("Entropy source required")
        shuffler = shuffler or FisherYatesShuffler()
        deck = Deck.create_standard(entropy, shuffler)
        return GameState(players, deck, small_blind, big_blind, dealer_seat, entropy, shuffler)

    def create_table(
        self,
        config: TableConfig,
        entropy: EntropySource,
        shuffler: Optional[Shuffler] = None,
        dealer_seat: int = 0,
    ) -> GameState:
        players = [
            Player(id=f"P{idx}", seat=idx, stack=config.starting_stack, name=f"Player{idx}")
            for idx in range(config.seats)
        ]
        return self.create_game_state(players, config.small_blind, config.big_blind, dealer_seat, entropy, shuffler)

    # Hand lifecycle --------------------------------------------------

    def start_hand(self, state: GameState) -> None:
        funded = state.funded_players()
        if len(funded) < 2:
            raise RuntimeError("Not enough funded players to start a hand")
        if not state.hand_complete and state.phase != Phase.NOT_STARTED:
            raise RuntimeError("Hand already in progress")

        if state.deck.position > 0:
            state.deck.reset_and_shuffle(state.entropy, state.shuffler)
        if state.player_by_seat(state.dealer_seat).stack <= 0:
            state.dealer_seat = turns.next_funded_seat(state, state.dealer_seat)

        state.hand_complete = False
        state.hand_number += 1
        state.pots = []
        state.payouts = {}
        for player_id in state.total_contributions:
            state.total_contributions[player_id] = 0

        phases.start_hand(state)
        self._post_blinds(state, heads_up=len(funded) == 2)
        state.seat_to_act = self._first_to_act(state)
        LOGGER.info(
            "Hand #%s started: dealer=%s sb=%s bb=%s first=%s",
            state.hand_number,
            state.dealer_seat,
            state.small_blind_seat,
            state.big_blind_seat,
            state.seat_to_act,
        )

        if turns.betting_exhausted(state):
            self._run_out(state)

    def _post_blinds(self, state: GameState, heads_up: bool) -> None:
        if heads_up:
            sb_seat = state.dealer_seat
            bb_seat = turns.next_seat(state, state.dealer_seat)
        else:
            sb_seat = turns.next_seat(state, state.dealer_seat)
            bb_seat = turns.next_seat(state, sb_seat)
        small = state.player_by_seat(sb_seat)
        big = state.player_by_seat(bb_seat)

        sb_amount = self._commit(state, small, state.small_blind)
        bb_amount = self._commit(state, big, state.big_blind)
        state.round.set_current_bet(max(sb_amount, bb_amount), big.seat, state.big_blind)
        state.small_blind_seat = sb_seat
        state.big_blind_seat = bb_seat
        self._emit(
            state,
            {
                "ev": "POST_BLINDS",
                "sb_seat": sb_seat,
                "bb_seat": bb_seat,
                "sb": sb_amount,
                "bb": bb_amount,
            },
        )

    def _first_to_act(self, state: GameState) -> int:
        if state.phase == Phase.PRE_FLOP:
            # Heads-up the dealer has the small blind and opens the action.
            if len(state.contesting_players()) == 2:
                dealer = state.player_by_seat(state.dealer_seat)
                return dealer.seat if turns.can_act(dealer) else turns.next_seat(state, dealer.seat)
            assert state.big_blind_seat is not None
            return turns.next_seat(state, state.big_blind_seat)
        return turns.next_seat(state, state.dealer_seat)

    # Actions ---------------------------------------------------------

    def legal_actions(self, state: GameState, player_id: PlayerId) -> ActionWindow:
        return legal_actions(state, player_id)

    def apply_action(self, state: GameState, action: PlayerAction) -> ValidationResult:
        result = validate(state, action)
        if not result.ok:
            LOGGER.debug("Rejected %s for %r: %s", action.action, action.player_id, result.errors)
            return result

        player = state.player_by_id(action.player_id)
        round_state = state.round
        committed = 0

        if action.action == ActionType.FOLD:
            player.fold()
            round_state.mark_fold(player.id)
        elif action.action == ActionType.CHECK:
            pass
        elif action.action == ActionType.CALL:
            committed = self._commit(state, player, round_state.to_call(player.id))
        elif action.action in (ActionType.BET, ActionType.RAISE):
            committed = self._commit(state, player, action.amount - round_state.contribution(player.id))
            self._raise_bar(state, player)
        elif action.action == ActionType.ALL_IN:
            committed = self._commit(state, player, player.stack)
            self._raise_bar(state, player)
        round_state.mark_acted(player.id)

        self._emit(
            state,
            {"ev": action.action.value, "seat": player.seat, "player": player.id, "amount": committed},
        )
        self._after_action(state)
        return result

    def _commit(self, state: GameState, player: Player, amount: int) -> int:
        committed = player.commit_chips(amount)
        state.round.record_contribution(player.id, committed)
        pots.apply_contribution(state, player.id, committed)
        return committed

    def _raise_bar(self, state: GameState, player: Player) -> None:
        round_state = state.round
        new_total = round_state.contribution(player.id)
        if new_total <= round_state.current_bet:
            return
        raise_amount = new_total - round_state.current_bet
        minimum = min_raise_increment(state)
        # A short all-in lifts the bet but leaves the minimum increment alone.
        increment = raise_amount if raise_amount >= minimum else minimum
        round_state.set_current_bet(new_total, player.seat, increment)

    def _after_action(self, state: GameState) -> None:
        contesting = state.contesting_players()
        if len(contesting) <= 1:
            self._award_uncontested(state, contesting[0])
            return

        if turns.betting_exhausted(state):
            self._run_out(state)
            return

        if turns.should_close_round(state):
            self._advance(state)
            state.seat_to_act = self._first_to_act(state)
            if state.phase.is_betting() and turns.betting_exhausted(state):
                self._run_out(state)
        else:
            state.seat_to_act = turns.next_seat(state)

    def _advance(self, state: GameState) -> None:
        dealt = len(state.community_cards)
        phase = phases.advance_phase(state)
        revealed = state.community_cards[dealt:]
        if revealed:
            self._emit(state, {"ev": phase.value, "cards": [card.label for card in revealed]})

    def _run_out(self, state: GameState) -> None:
        LOGGER.debug("Betting closed in %s; running out the board", state.phase.value)
        while state.phase.order < Phase.SHOWDOWN.order:
            self._advance(state)

    # Settlement ------------------------------------------------------

    def _award_uncontested(self, state: GameState, winner: Player) -> None:
        built = pots.build_pots(state, [winner.id])
        total = sum(pot.amount for pot in built)
        winner.receive_payout(total)
        pots.clear_contributions(state)
        state.payouts = {winner.id: total}
        self._emit(state, {"ev": "POT_AWARD", "seat": winner.seat, "player": winner.id, "amount": total})
        self._finish(state)

    def showdown(self, state: GameState, hand_ranks: Mapping[PlayerId, int]) -> Dict[PlayerId, int]:
        if state.hand_complete:
            raise RuntimeError("Hand already complete")
        if state.phase == Phase.NOT_STARTED:
            raise RuntimeError("Hand not started")

        eligible = [player.id for player in state.contesting_players()]
        payouts = pots.settle(state, hand_ranks, eligible)
        state.phase = Phase.SHOWDOWN
        pots.clear_contributions(state)
        state.payouts = dict(payouts)
        for player_id, amount in payouts.items():
            if amount > 0:
                seat = state.player_by_id(player_id).seat
                self._emit(state, {"ev": "POT_AWARD", "seat": seat, "player": player_id, "amount": amount})
        self._finish(state)
        return payouts

    def resolve_showdown(
        self,
        state: GameState,
        evaluator: Optional[HandRankProvider] = None,
    ) -> Dict[PlayerId, int]:
        """Rank every contesting hand with `evaluator` and settle the pots."""
        if state.hand_complete:
            raise RuntimeError("Hand already complete")
        evaluator = evaluator or HandEvaluator()
        if state.phase.is_betting():
            self._run_out(state)

        ranks: Dict[PlayerId, int] = {}
        for player in state.contesting_players():
            rank = evaluator.evaluate(player.hole_cards, state.community_cards)
            ranks[player.id] = rank
            self._emit(
                state,
                {
                    "ev": "SHOWDOWN",
                    "seat": player.seat,
                    "player": player.id,
                    "hand": [card.label for card in player.hole_cards],
                    "board": [card.label for card in state.community_cards],
                    "rank": describe_rank(rank),
                },
            )
        return self.showdown(state, ranks)

    def _finish(self, state: GameState) -> None:
        state.hand_complete = True
        state.phase = Phase.COMPLETE
        LOGGER.info("Hand #%s complete: payouts=%s", state.hand_number, state.payouts)
        self._emit(
            state,
            {"ev": "HAND_COMPLETE", "stacks": [{"seat": p.seat, "stack": p.stack} for p in state.players]},
        )

    # Between hands ---------------------------------------------------

    def rotate_dealer(self, state: GameState) -> int:
        if not state.hand_complete and state.phase != Phase.NOT_STARTED:
            raise RuntimeError("Cannot move the button during a hand")
        state.dealer_seat = turns.next_funded_seat(state, state.dealer_seat)
        LOGGER.debug("Dealer button moved to seat %s", state.dealer_seat)
        return state.dealer_seat

    def is_match_over(self, state: GameState) -> bool:
        return len(state.funded_players()) <= 1

    def _emit(self, state: GameState, event: Dict[str, object]) -> None:
        event.setdefault("hand_number", state.hand_number)
        for observer in self.observers:
            observer.on_event(event)
