from __future__ import annotations

import logging

from .models import Phase
from .state import GameState

LOGGER = logging.getLogger("holdem.phases")

_NEXT_PHASE = {
    Phase.PRE_FLOP: Phase.FLOP,
    Phase.FLOP: Phase.TURN,
    Phase.TURN: Phase.RIVER,
    Phase.RIVER: Phase.SHOWDOWN,
}
_REVEAL_COUNT = {
    Phase.PRE_FLOP: 3,
    Phase.FLOP: 1,
    Phase.TURN: 1,
}


def start_hand(state: GameState) -> None:
    state.phase = Phase.PRE_FLOP
    state.community_cards.clear()
    funded = [player for player in state.players if player.stack > 0]
    state.round.reset_for_new_round(player.id for player in funded)

    # Two consecutive cards per funded player, lowest seat first.
    for player in state.players:
        if player.stack <= 0:
            player.sit_out()
            continue
        player.reset_for_hand()
        first = state.deck.draw()
        second = state.deck.draw()
        player.give_hole_cards(first, second)


def advance_phase(state: GameState) -> Phase:
    previous = state.phase
    reveal = _REVEAL_COUNT.get(previous, 0)
    if reveal:
        state.deck.burn()
        state.community_cards.extend(state.deck.draw_many(reveal))
    state.phase = _NEXT_PHASE.get(previous, Phase.COMPLETE)

    # All-in players stay in the ledger: they keep their claim on the pots.
    state.round.reset_for_new_round(player.id for player in state.contesting_players())
    LOGGER.debug("Phase %s -> %s, board=%s", previous.value, state.phase.value, [c.label for c in state.community_cards])
    return state.phase
