from __future__ import annotations

from typing import Dict, Iterable, List, MutableSequence, Optional, Sequence, Tuple

from holdem.__main__ import play_passive_hand
from holdem.cards import Card, parse_cards
from holdem.game import GameEngine
from holdem.models import Player, PlayerAction
from holdem.rng import EntropySource, SeededRandom
from holdem.state import GameState


class StackedShuffler:
    """Puts the given cards on top of the deck, in order; the rest keep their order."""

    def __init__(self, top: Sequence[str]) -> None:
        self.top: List[Card] = parse_cards(top)

    def shuffle_in_place(self, items: MutableSequence[Card], entropy: EntropySource) -> None:
        rest = [card for card in items if card not in self.top]
        items[:] = list(self.top) + rest


class ScriptedEntropy:
    """Replays fixed values and records every bound it was asked for."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values = list(values)
        self.bounds: List[int] = []

    def next_int(self, bound: int) -> int:
        self.bounds.append(bound)
        return self.values.pop(0) if self.values else 0


class EventRecorder:
    def __init__(self) -> None:
        self.events: List[Dict[str, object]] = []

    def on_event(self, event: Dict[str, object]) -> None:
        self.events.append(event)

    def of(self, ev: str) -> List[Dict[str, object]]:
        return [event for event in self.events if event["ev"] == ev]


def make_players(stacks: Sequence[int], ids: Optional[Sequence[str]] = None) -> List[Player]:
    ids = ids or [chr(ord("A") + idx) for idx in range(len(stacks))]
    return [Player(id=pid, seat=idx, stack=stack) for idx, (pid, stack) in enumerate(zip(ids, stacks))]


def create_state(
    stacks: Sequence[int] = (1_000, 1_000, 1_000),
    *,
    sb: int = 10,
    bb: int = 20,
    dealer_seat: int = 0,
    seed: int = 42,
    top: Optional[Sequence[str]] = None,
    engine: Optional[GameEngine] = None,
) -> Tuple[GameEngine, GameState]:
    engine = engine or GameEngine()
    shuffler = StackedShuffler(top) if top is not None else None
    state = engine.create_game_state(make_players(stacks), sb, bb, dealer_seat, SeededRandom(seed), shuffler)
    return engine, state


def start(stacks: Sequence[int] = (1_000, 1_000, 1_000), **kwargs) -> Tuple[GameEngine, GameState]:
    engine, state = create_state(stacks, **kwargs)
    engine.start_hand(state)
    return engine, state


def act(engine: GameEngine, state: GameState, action: PlayerAction) -> None:
    result = engine.apply_action(state, action)
    assert result.ok, result.errors


def actor_id(state: GameState) -> str:
    return state.player_by_seat(state.seat_to_act).id


def auto_complete_hand(engine: GameEngine, state: GameState) -> Dict[str, int]:
    return play_passive_hand(engine, state)
