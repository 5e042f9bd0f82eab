from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence

RANK_LABELS = "23456789TJQKA"
RANK_VALUE = {label: idx for idx, label in enumerate(RANK_LABELS, start=2)}
MIN_RANK = 2
MAX_RANK = 14


class Suit(str, Enum):
    CLUBS = "c"
    DIAMONDS = "d"
    HEARTS = "h"
    SPADES = "s"


@dataclass(frozen=True)
class Card:
    rank: int
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, int) or not MIN_RANK <= self.rank <= MAX_RANK:
            raise ValueError(f"Invalid rank: {self.rank}")
        if not isinstance(self.suit, Suit):
            try:
                object.__setattr__(self, "suit", Suit(self.suit))
            except ValueError:
                raise ValueError(f"Invalid suit: {self.suit}") from None

    @property
    def label(self) -> str:
        return f"{RANK_LABELS[self.rank - MIN_RANK]}{self.suit.value}"

    def __str__(self) -> str:
        return self.label


def standard_cards() -> List[Card]:
    # Suit-major, ascending ranks: the order a fresh deck is built in before shuffling.
    return [Card(rank, suit) for suit in Suit for rank in range(MIN_RANK, MAX_RANK + 1)]


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    rank = RANK_VALUE.get(label[0].upper())
    if rank is None:
        raise ValueError(f"Invalid rank: {label[0]}")
    return Card(rank, label[1].lower())


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]


def cards_to_labels(cards: Iterable[Card]) -> List[str]:
    return [card.label for card in cards]
