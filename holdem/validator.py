from __future__ import annotations

from typing import List

from .models import ActionType, ActionWindow, Phase, PlayerAction, PlayerId, ValidationResult
from .state import GameState

# Validation never mutates state. Every applicable reason is reported.


def min_raise_increment(state: GameState) -> int:
    return state.round.last_raise_amount if state.round.last_raise_amount > 0 else state.big_blind


def validate(state: GameState, action: PlayerAction) -> ValidationResult:
    errors: List[str] = []

    if state.hand_complete:
        return ValidationResult(["Hand already complete."])
    if state.phase == Phase.NOT_STARTED:
        return ValidationResult(["Hand has not started."])
    if not state.phase.is_betting():
        return ValidationResult(["No actions allowed during showdown."])
    if not state.has_player(action.player_id):
        return ValidationResult(["Unknown player."])

    player = state.player_by_id(action.player_id)
    if player.folded:
        errors.append("Player already folded.")
    if player.is_all_in:
        errors.append("Player is all-in and cannot act.")
    if player.seat != state.seat_to_act:
        errors.append("Not this player's turn.")

    round_state = state.round
    contribution = round_state.contribution(player.id)
    to_call = round_state.current_bet - contribution
    amount = action.amount

    if action.action == ActionType.FOLD:
        pass
    elif action.action == ActionType.CHECK:
        if round_state.current_bet > contribution:
            errors.append("Cannot check facing a bet.")
    elif action.action == ActionType.CALL:
        if to_call <= 0:
            errors.append("Nothing to call.")
        elif player.stack <= 0:
            errors.append("Insufficient stack to call.")
    elif action.action == ActionType.BET:
        if round_state.current_bet > 0:
            errors.append("Bet not allowed when a bet exists. Use raise.")
        if amount <= 0:
            errors.append("Bet amount must be positive.")
        if amount < state.big_blind:
            errors.append("Bet must be at least big blind.")
        if amount > player.stack:
            errors.append("Bet exceeds stack. Use all-in.")
    elif action.action == ActionType.RAISE:
        if round_state.current_bet <= 0:
            errors.append("No bet to raise.")
        else:
            # Short all-in raises are allowed below the minimum increment.
            max_target = player.stack + contribution
            min_target = round_state.current_bet + min_raise_increment(state)
            if amount < min_target and amount != max_target:
                errors.append("Raise must meet or exceed last increment.")
            if amount <= round_state.current_bet:
                errors.append("Raise must exceed current bet.")
            if amount > max_target:
                errors.append("Raise exceeds stack. Use all-in.")
    elif action.action == ActionType.ALL_IN:
        if player.stack <= 0:
            errors.append("No chips available for all-in.")
        if amount > player.stack:
            errors.append("All-in cannot exceed available stack.")
    else:
        errors.append("Unsupported action type.")

    return ValidationResult(errors)


def legal_actions(state: GameState, player_id: PlayerId) -> ActionWindow:
    """Actions `validate` would accept for the player right now, with raise bounds."""
    if not state.has_player(player_id):
        raise KeyError(f"Unknown player {player_id!r}")
    player = state.player_by_id(player_id)
    if (
        state.hand_complete
        or not state.phase.is_betting()
        or player.folded
        or player.is_all_in
        or player.seat != state.seat_to_act
    ):
        return ActionWindow(legal=[], call_amount=None, min_raise_to=None, max_raise_to=None)

    round_state = state.round
    contribution = round_state.contribution(player.id)
    to_call = round_state.current_bet - contribution
    max_target = player.stack + contribution

    legal: List[ActionType] = [ActionType.FOLD]
    if to_call <= 0:
        legal.append(ActionType.CHECK)
    else:
        legal.append(ActionType.CALL)

    min_raise_to = None
    max_raise_to = None
    if round_state.current_bet <= 0:
        if player.stack >= state.big_blind:
            legal.append(ActionType.BET)
            min_raise_to = state.big_blind
            max_raise_to = player.stack
    elif max_target > round_state.current_bet:
        legal.append(ActionType.RAISE)
        min_raise_to = min(round_state.current_bet + min_raise_increment(state), max_target)
        max_raise_to = max_target
    legal.append(ActionType.ALL_IN)

    return ActionWindow(
        legal=legal,
        call_amount=to_call if to_call > 0 else None,
        min_raise_to=min_raise_to,
        max_raise_to=max_raise_to,
    )
