"""Dense numeric identities for the categorical values of one variable."""

from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterable, Iterator, List, Optional, TypeVar

from .errors import UnknownIdentityError, VocabularyError

V = TypeVar("V", bound=Hashable)


class Itemizer(Generic[V]):
    """Append-only bijection between values and identities 1..n.

    Identities are handed out in order of first observation and are never
    renumbered. Identity 0 is never assigned. Instances are not synchronized;
    keep one set per encode/solve/decode run.
    """

    def __init__(self, values: Iterable[V] = ()) -> None:
        self._ids: Dict[V, int] = {}
        self._values: List[V] = []
        for value in values:
            self.id_of(value)

    def id_of(self, value: V) -> int:
        """Return the identity of value, assigning the next one if unseen."""
        identity = self._ids.get(value)
        if identity is None:
            self._values.append(value)
            identity = len(self._values)
            self._ids[value] = identity
        return identity

    def id_of_opt(self, value: V) -> Optional[int]:
        """Return the identity of value, or None if it was never observed."""
        return self._ids.get(value)

    def id_of_exists(self, value: V) -> int:
        """Return the identity of value; raise VocabularyError if unseen."""
        try:
            return self._ids[value]
        except KeyError:
            raise VocabularyError(value) from None

    def value_of(self, identity: int) -> V:
        """Inverse lookup of an identity handed out by this itemizer."""
        if identity < 1 or identity > len(self._values):
            raise UnknownIdentityError(identity)
        return self._values[identity - 1]

    def length(self) -> int:
        return len(self._values)

    def values(self) -> List[V]:
        """Vocabulary in identity order."""
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, value: object) -> bool:
        return value in self._ids

    def __iter__(self) -> Iterator[V]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Itemizer):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"Itemizer({self._values!r})"


__all__ = ["Itemizer"]
