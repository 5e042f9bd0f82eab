from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from .cards import Card
from .deck import Deck
from .errors import InvalidSetup
from .models import Phase, Player, PlayerId, Pot
from .rng import EntropySource, FisherYatesShuffler, Shuffler

# 22 * 2 hole cards + 3 burns + 5 board cards = 52.
MAX_PLAYERS = 22


class RoundState:
    """Betting ledger for a single round; wiped at every phase change."""

    def __init__(self) -> None:
        self.current_bet = 0
        self.last_aggressor_seat: Optional[int] = None
        self.last_raise_amount = 0
        self.contributions: Dict[PlayerId, int] = {}
        self.contesting: Set[PlayerId] = set()
        self.acted: Set[PlayerId] = set()

    def reset_for_new_round(self, player_ids: Iterable[PlayerId]) -> None:
        self.contributions.clear()
        self.contesting.clear()
        self.acted.clear()
        for player_id in player_ids:
            self.contesting.add(player_id)
            self.contributions[player_id] = 0
        self.current_bet = 0
        self.last_aggressor_seat = None
        self.last_raise_amount = 0

    def record_contribution(self, player_id: PlayerId, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot record a negative contribution: {amount}")
        self.contributions[player_id] = self.contributions.get(player_id, 0) + amount

    def set_current_bet(self, bet: int, aggressor_seat: int, raise_amount: int) -> None:
        # Aggression reopens the action for everyone else.
        self.current_bet = bet
        self.last_aggressor_seat = aggressor_seat
        self.last_raise_amount = raise_amount
        self.acted.clear()

    def contribution(self, player_id: PlayerId) -> int:
        return self.contributions.get(player_id, 0)

    def to_call(self, player_id: PlayerId) -> int:
        return max(self.current_bet - self.contribution(player_id), 0)

    def mark_acted(self, player_id: PlayerId) -> None:
        self.acted.add(player_id)

    def has_acted(self, player_id: PlayerId) -> bool:
        return player_id in self.acted

    def mark_fold(self, player_id: PlayerId) -> None:
        self.contesting.discard(player_id)


class GameState:
    """Everything one table needs across hands; owns its players and deck."""

    def __init__(
        self,
        players: Iterable[Player],
        deck: Deck,
        small_blind: int,
        big_blind: int,
        dealer_seat: int,
        entropy: EntropySource,
        shuffler: Optional[Shuffler] = None,
    ) -> None:
        if players is None:
            raise InvalidSetup("Players required")
        ordered = list(players)
        if len(ordered) < 2:
            raise InvalidSetup("At least two players required")
        if len(ordered) > MAX_PLAYERS:
            raise InvalidSetup(f"At most {MAX_PLAYERS} players fit one deck, got {len(ordered)}")
        if any(player is None for player in ordered):
            raise InvalidSetup("Players cannot contain None")
        if len({player.seat for player in ordered}) != len(ordered):
            raise InvalidSetup("Seat indices must be unique across players")
        if len({player.id for player in ordered}) != len(ordered):
            raise InvalidSetup("Player ids must be unique across players")
        if deck is None:
            raise InvalidSetup("Deck required")
        if small_blind <= 0:
            raise InvalidSetup(f"Small blind must be positive, got {small_blind}")
        if big_blind <= 0 or big_blind < small_blind:
            raise InvalidSetup(f"Big blind must be positive and at least the small blind, got {big_blind}")

        self._players: List[Player] = sorted(ordered, key=lambda p: p.seat)
        self._index_by_seat = {player.seat: idx for idx, player in enumerate(self._players)}
        self._index_by_id = {player.id: idx for idx, player in enumerate(self._players)}
        if dealer_seat not in self._index_by_seat:
            raise InvalidSetup(f"Dealer seat {dealer_seat} is not occupied")

        self.deck = deck
        self.entropy = entropy
        self.shuffler: Shuffler = shuffler or FisherYatesShuffler()
        self.small_blind = small_blind
        self.big_blind = big_blind
        self.dealer_seat = dealer_seat
        self.small_blind_seat: Optional[int] = None
        self.big_blind_seat: Optional[int] = None
        self.seat_to_act = dealer_seat
        self.phase = Phase.NOT_STARTED
        self.community_cards: List[Card] = []
        self.round = RoundState()
        self.pots: List[Pot] = []
        self.total_contributions: Dict[PlayerId, int] = {player.id: 0 for player in self._players}
        self.payouts: Dict[PlayerId, int] = {}
        self.hand_complete = False
        self.hand_number = 0

    @property
    def players(self) -> List[Player]:
        return list(self._players)

    @property
    def seats(self) -> List[int]:
        return [player.seat for player in self._players]

    def has_player(self, player_id: PlayerId) -> bool:
        return player_id in self._index_by_id

    def player_by_id(self, player_id: PlayerId) -> Player:
        try:
            return self._players[self._index_by_id[player_id]]
        except KeyError:
            raise KeyError(f"Unknown player {player_id!r}") from None

    def player_by_seat(self, seat: int) -> Player:
        try:
            return self._players[self._index_by_seat[seat]]
        except KeyError:
            raise KeyError(f"No player at seat {seat}") from None

    def contesting_players(self) -> List[Player]:
        return [player for player in self._players if not player.folded]

    def funded_players(self) -> List[Player]:
        return [player for player in self._players if player.stack > 0]

    def chips_in_play(self) -> int:
        return sum(player.stack for player in self._players) + sum(self.total_contributions.values())
