"""Exceptions raised on the Python side of the auction.

Contract failures surface as EVM reverts carrying short reason strings
(``"!increment"``, ``"!refund"``...) and are matched with ``boa.reverts``.
"""


class ConfigError(ValueError):
    pass


class InvariantViolation(AssertionError):
    """A deployed auction's state broke one of its invariants."""
