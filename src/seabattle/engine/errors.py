"""Exception types raised by the Battleship engine."""

from __future__ import annotations


class GameError(Exception):
    """Base class for every engine failure."""


class InvalidArgument(GameError, ValueError):
    """A malformed argument such as a non-positive ship length or missing board."""


class InvalidPlacement(GameError, ValueError):
    """A ship placement that leaves the grid or overlaps another ship."""


class OutOfBounds(GameError, ValueError):
    """An attack or query coordinate outside the grid."""


class TurnViolation(GameError, RuntimeError):
    """A command issued by the side that is not on turn."""


class GameOver(GameError, RuntimeError):
    """A command issued after the match has been decided."""


class SearchExhausted(GameError, RuntimeError):
    """A bounded random search ran out of attempts."""
