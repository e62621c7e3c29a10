from __future__ import annotations


class EquityError(Exception):
    """Base class for every error raised by the equity engine."""


class InvalidRequestError(EquityError, ValueError):
    """A request the engine refuses to interpret (duplicates, bad counts, ...)."""


class CardParseError(InvalidRequestError):
    pass


class DeckExhaustedError(EquityError, IndexError):
    pass


class ConfigError(EquityError, ValueError):
    pass
