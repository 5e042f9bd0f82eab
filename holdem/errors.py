from __future__ import annotations


class InvalidSetup(ValueError):
    """Raised when a game state cannot be built from the supplied table."""


class DeckExhausted(RuntimeError):
    """Raised when drawing or burning past the last card of the deck."""
