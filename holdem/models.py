from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Hashable, List, Optional

from .cards import Card

PlayerId = Hashable


class Phase(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    PRE_FLOP = "PRE_FLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"
    SHOWDOWN = "SHOWDOWN"
    COMPLETE = "COMPLETE"

    @property
    def order(self) -> int:
        return _PHASE_ORDER.index(self)

    def is_betting(self) -> bool:
        return Phase.PRE_FLOP.order <= self.order <= Phase.RIVER.order


_PHASE_ORDER = list(Phase)


class ActionType(str, Enum):
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    BET = "BET"
    RAISE = "RAISE"
    ALL_IN = "ALL_IN"


@dataclass(frozen=True)
class PlayerAction:
    # For BET/RAISE `amount` is the target total for the round, not an increment.
    player_id: PlayerId
    action: ActionType
    amount: int = 0

    @classmethod
    def fold(cls, player_id: PlayerId) -> "PlayerAction":
        return cls(player_id, ActionType.FOLD)

    @classmethod
    def check(cls, player_id: PlayerId) -> "PlayerAction":
        return cls(player_id, ActionType.CHECK)

    @classmethod
    def call(cls, player_id: PlayerId) -> "PlayerAction":
        return cls(player_id, ActionType.CALL)

    @classmethod
    def bet(cls, player_id: PlayerId, amount: int) -> "PlayerAction":
        return cls(player_id, ActionType.BET, amount)

    @classmethod
    def raise_to(cls, player_id: PlayerId, amount: int) -> "PlayerAction":
        return cls(player_id, ActionType.RAISE, amount)

    @classmethod
    def all_in(cls, player_id: PlayerId, amount: int) -> "PlayerAction":
        return cls(player_id, ActionType.ALL_IN, amount)


@dataclass
class Player:
    id: PlayerId
    seat: int
    stack: int
    name: str = ""
    folded: bool = False
    hole_cards: List[Card] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.seat < 0:
            raise ValueError(f"Seat must be non-negative, got {self.seat}")
        if self.stack < 0:
            raise ValueError(f"Stack must be non-negative, got {self.stack}")
        if not self.name:
            self.name = str(self.id)

    @property
    def is_all_in(self) -> bool:
        return self.stack == 0 and not self.folded

    @property
    def can_act(self) -> bool:
        return not self.folded and self.stack > 0

    def give_hole_cards(self, first: Card, second: Card) -> None:
        self.hole_cards[:] = [first, second]

    def reset_for_hand(self) -> None:
        self.folded = False
        self.hole_cards.clear()

    def sit_out(self) -> None:
        self.folded = True
        self.hole_cards.clear()

    def fold(self) -> None:
        self.folded = True

    def commit_chips(self, amount: int) -> int:
        if amount < 0:
            raise ValueError(f"Cannot commit a negative amount: {amount}")
        committed = min(amount, self.stack)
        self.stack -= committed
        return committed

    def receive_payout(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot pay out a negative amount: {amount}")
        self.stack += amount


@dataclass(frozen=True)
class Pot:
    amount: int
    eligible_players: FrozenSet[PlayerId]


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls([])


@dataclass
class ActionWindow:
    legal: List[ActionType]
    call_amount: Optional[int]
    min_raise_to: Optional[int]
    max_raise_to: Optional[int]


@dataclass
class TableConfig:
    seats: int = 6
    starting_stack: int = 10_000
    small_blind: int = 50
    big_blind: int = 100
