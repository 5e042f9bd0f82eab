"""Texas Hold'em hand-progression engine: betting rules, side pots and hand ranking."""

from .cards import Card, RANK_LABELS, Suit, cards_to_labels, parse_cards, parse_label, standard_cards
from .deck import Deck
from .errors import DeckExhausted, InvalidSetup
from .evaluator import HandCategory, HandEvaluator, evaluate, evaluate_best, hand_category, hand_name
from .game import GameEngine, GameObserver
from .models import ActionType, ActionWindow, Phase, Player, PlayerAction, Pot, TableConfig, ValidationResult
from .rng import FisherYatesShuffler, SecureRandom, SeededRandom
from .state import GameState, RoundState

__all__ = [
    "Card",
    "RANK_LABELS",
    "Suit",
    "cards_to_labels",
    "parse_cards",
    "parse_label",
    "standard_cards",
    "Deck",
    "DeckExhausted",
    "InvalidSetup",
    "HandCategory",
    "HandEvaluator",
    "evaluate",
    "evaluate_best",
    "hand_category",
    "hand_name",
    "GameEngine",
    "GameObserver",
    "ActionType",
    "ActionWindow",
    "Phase",
    "Player",
    "PlayerAction",
    "Pot",
    "TableConfig",
    "ValidationResult",
    "FisherYatesShuffler",
    "SecureRandom",
    "SeededRandom",
    "GameState",
    "RoundState",
]
