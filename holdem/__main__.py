"""Play a run of hands on one table with passive players.

Every seat checks when it can and calls otherwise, so each hand reaches a
showdown unless blinds force someone all-in. Useful as a smoke test of the
engine's chip accounting.

Example:
    python -m holdem --players 4 --hands 200 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional

from .evaluator import HandEvaluator
from .game import GameEngine
from .models import ActionType, PlayerAction, PlayerId, TableConfig
from .rng import SecureRandom, SeededRandom
from .state import GameState

LOGGER = logging.getLogger("holdem_sim")


def play_passive_hand(
    engine: GameEngine,
    state: GameState,
    evaluator: Optional[HandEvaluator] = None,
) -> Dict[PlayerId, int]:
    """Drive the current hand to completion and return its payouts."""
    while not state.hand_complete and state.phase.is_betting():
        actor = state.player_by_seat(state.seat_to_act)
        window = engine.legal_actions(state, actor.id)
        if ActionType.CHECK in window.legal:
            action = PlayerAction.check(actor.id)
        elif ActionType.CALL in window.legal:
            action = PlayerAction.call(actor.id)
        else:
            action = PlayerAction.fold(actor.id)
        result = engine.apply_action(state, action)
        if not result.ok:
            raise RuntimeError(f"Passive action rejected: {result.errors}")
    if not state.hand_complete:
        engine.resolve_showdown(state, evaluator)
    return dict(state.payouts)


def run_session(config: TableConfig, hands: int, seed: Optional[int], secure: bool = False) -> GameState:
    entropy = SecureRandom() if secure else SeededRandom(seed)
    engine = GameEngine()
    evaluator = HandEvaluator()
    state = engine.create_table(config, entropy)
    opening_chips = state.chips_in_play()

    for hand_idx in range(hands):
        if engine.is_match_over(state):
            LOGGER.info("Match over after %s hands", hand_idx)
            break
        if hand_idx:
            engine.rotate_dealer(state)
        engine.start_hand(state)
        payouts = play_passive_hand(engine, state, evaluator)
        LOGGER.info(
            "[hand %s] board=%s payouts=%s",
            state.hand_number,
            " ".join(card.label for card in state.community_cards),
            {pid: amount for pid, amount in payouts.items() if amount},
        )
        if state.chips_in_play() != opening_chips:
            raise RuntimeError(f"Chip total drifted from {opening_chips} to {state.chips_in_play()}")

    return state


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run passive Texas Hold'em hands through the engine")
    parser.add_argument("--players", type=int, default=4)
    parser.add_argument("--starting-stack", type=int, default=1_000)
    parser.add_argument("--sb", type=int, default=10)
    parser.add_argument("--bb", type=int, default=20)
    parser.add_argument("--hands", type=int, default=100)
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible shuffles")
    parser.add_argument("--secure", action="store_true", help="shuffle with the OS CSPRNG (ignores --seed)")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = TableConfig(
        seats=args.players,
        starting_stack=args.starting_stack,
        small_blind=args.sb,
        big_blind=args.bb,
    )
    try:
        state = run_session(config, args.hands, args.seed, secure=args.secure)
    except RuntimeError as exc:
        LOGGER.error("%s", exc)
        return 1
    except ValueError as exc:
        LOGGER.error("Invalid table: %s", exc)
        return 2

    for player in state.players:
        LOGGER.info("%s (seat %s): %s", player.name, player.seat, player.stack)
    return 0


if __name__ == "__main__":
    sys.exit(main())
