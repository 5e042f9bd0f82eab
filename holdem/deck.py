from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .cards import Card, standard_cards
from .errors import DeckExhausted
from .rng import EntropySource, FisherYatesShuffler, Shuffler


class Deck:
    """Ordered cards plus a draw cursor that only moves forward until reset."""

    def __init__(self, cards: Iterable[Card]) -> None:
        self._cards: List[Card] = list(cards)
        if not self._cards:
            raise ValueError("Deck cannot be empty")
        self._position = 0

    @classmethod
    def create_standard(cls, entropy: EntropySource, shuffler: Optional[Shuffler] = None) -> "Deck":
        if entropy is None:
            raise ValueError("Entropy source required")
        cards = standard_cards()
        (shuffler or FisherYatesShuffler()).shuffle_in_place(cards, entropy)
        return cls(cards)

    @property
    def cards(self) -> Tuple[Card, ...]:
        return tuple(self._cards)

    @property
    def position(self) -> int:
        return self._position

    @property
    def remaining(self) -> int:
        return len(self._cards) - self._position

    def has_cards(self, count: int = 1) -> bool:
        return self._position + count <= len(self._cards)

    def draw(self) -> Card:
        if not self.has_cards():
            raise DeckExhausted("Deck exhausted")
        card = self._cards[self._position]
        self._position += 1
        return card

    def draw_many(self, count: int) -> List[Card]:
        if count < 0:
            raise ValueError(f"Cannot draw a negative number of cards: {count}")
        if not self.has_cards(count):
            raise DeckExhausted(f"Not enough cards to draw {count}; {self.remaining} left")
        cards = self._cards[self._position : self._position + count]
        self._position += count
        return cards

    def burn(self) -> None:
        if not self.has_cards():
            raise DeckExhausted("Deck exhausted; cannot burn")
        self._position += 1

    def reset(self) -> None:
        self._position = 0

    def reset_and_shuffle(self, entropy: EntropySource, shuffler: Optional[Shuffler] = None) -> None:
        if entropy is None:
            raise ValueError("Entropy source required")
        self._position = 0
        (shuffler or FisherYatesShuffler()).shuffle_in_place(self._cards, entropy)
