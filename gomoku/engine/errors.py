from __future__ import annotations


class GomokuError(Exception):
    pass


class InvalidMoveError(GomokuError, ValueError):
    """Position off the board or already occupied. The board is left untouched."""


class ConfigurationError(GomokuError, ValueError):
    """Engine settings outside their recognised range, e.g. an odd search depth."""


class NoMoveAvailableError(GomokuError, RuntimeError):
    """A move was requested on a full board."""
