"""Exception types raised by the PLA codecs and solver adapters."""

from __future__ import annotations


class PlaFormatError(ValueError):
    """Malformed PLA text or a row that does not fit its table."""


class VocabularyError(LookupError):
    """A value was required to exist in an itemizer that never observed it."""

    def __init__(self, value) -> None:
        super().__init__(f"Value {value!r} was never itemized for this variable.")
        self.value = value


class UnknownIdentityError(LookupError):
    """An identity was requested that the itemizer never assigned."""

    def __init__(self, identity: int) -> None:
        super().__init__(f"Identity {identity} was never assigned.")
        self.identity = identity


class SolverError(RuntimeError):
    """The espresso backend could not be loaded or did not produce output."""


__all__ = [
    "PlaFormatError",
    "VocabularyError",
    "UnknownIdentityError",
    "SolverError",
]
