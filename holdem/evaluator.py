from __future__ import annotations

import itertools
from collections import Counter
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .cards import Card
from .models import PlayerId

BAND = 1_000_000


class HandCategory(IntEnum):
    STRAIGHT_FLUSH = 1
    FOUR_OF_A_KIND = 2
    FULL_HOUSE = 3
    FLUSH = 4
    STRAIGHT = 5
    THREE_OF_A_KIND = 6
    TWO_PAIR = 7
    ONE_PAIR = 8
    HIGH_CARD = 9


def evaluate(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> int:
    """Rank of the best five-card hand; lower is stronger."""
    if len(hole_cards) < 2:
        raise ValueError("Need at least 2 hole cards")
    if len(community_cards) < 3:
        raise ValueError("Need at least 3 community cards")
    return evaluate_best(list(hole_cards) + list(community_cards))


def evaluate_best(cards: Sequence[Card]) -> int:
    if len(cards) < 5:
        raise ValueError(f"Need at least 5 cards, got {len(cards)}")
    best: Optional[int] = None
    for combo in itertools.combinations(cards, 5):
        rank = _evaluate_five(combo)
        if best is None or rank < best:
            best = rank
    assert best is not None
    return best


def hand_category(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> HandCategory:
    return category_of(evaluate(hole_cards, community_cards))


def category_of(rank: int) -> HandCategory:
    return HandCategory(rank // BAND)


def hand_name(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> str:
    if len(hole_cards) < 2 or len(community_cards) < 3:
        return "unknown"
    return describe_rank(evaluate(hole_cards, community_cards))


def describe_rank(rank: int) -> str:
    return category_of(rank).name.lower()


def _score(category: HandCategory, strength: int) -> int:
    # Stronger kickers must give a smaller rank inside the category band.
    return category * BAND + (BAND - 1) - strength


def _pack(values: Iterable[int]) -> int:
    # Base 15 keeps five kicker ranks (max 14 each) under one band.
    packed = 0
    for value in values:
        packed = packed * 15 + value
    return packed


def _evaluate_five(cards: Sequence[Card]) -> int:
    ranks = sorted((card.rank for card in cards), reverse=True)
    is_flush = len({card.suit for card in cards}) == 1
    straight_high = _straight_high(ranks)

    counts = Counter(ranks)
    groups: List[Tuple[int, int]] = sorted(counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
    shape = [count for _, count in groups]
    values = [rank for rank, _ in groups]

    if straight_high and is_flush:
        return _score(HandCategory.STRAIGHT_FLUSH, straight_high)
    if shape[0] == 4:
        return _score(HandCategory.FOUR_OF_A_KIND, values[0] * 100 + values[1])
    if shape[:2] == [3, 2]:
        return _score(HandCategory.FULL_HOUSE, values[0] * 100 + values[1])
    if is_flush:
        return _score(HandCategory.FLUSH, _pack(ranks))
    if straight_high:
        return _score(HandCategory.STRAIGHT, straight_high)
    if shape[0] == 3:
        return _score(HandCategory.THREE_OF_A_KIND, values[0] * 10_000 + values[1] * 100 + values[2])
    if shape[:2] == [2, 2]:
        return _score(HandCategory.TWO_PAIR, values[0] * 10_000 + values[1] * 100 + values[2])
    if shape[0] == 2:
        return _score(HandCategory.ONE_PAIR, _pack(values))
    return _score(HandCategory.HIGH_CARD, _pack(ranks))


def _straight_high(ranks: Sequence[int]) -> Optional[int]:
    """High card of a five-card straight, 5 for the wheel (A-2-3-4-5)."""
    if len(set(ranks)) != 5:
        return None
    if ranks[0] - ranks[4] == 4:
        return ranks[0]
    if ranks == [14, 5, 4, 3, 2]:
        return 5
    return None


class HandEvaluator:
    """Hand-rank provider handed to the engine at showdown."""

    def evaluate(self, hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> int:
        return evaluate(hole_cards, community_cards)

    def hand_name(self, hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> str:
        return hand_name(hole_cards, community_cards)

    def hand_category(self, hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> HandCategory:
        return hand_category(hole_cards, community_cards)

    def evaluate_all(
        self,
        players: Iterable[Tuple[PlayerId, Sequence[Card]]],
        community_cards: Sequence[Card],
    ) -> Dict[PlayerId, int]:
        return {player_id: evaluate(hole, community_cards) for player_id, hole in players}
