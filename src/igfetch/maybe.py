"""Safe navigation over untyped JSON structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

_MISSING = object()


@dataclass(frozen=True)
class Maybe:
    """A value that may be absent.

    Every accessor returns another ``Maybe``, so a chain such as
    ``Maybe.of(data).get("graphql").get("shortcode_media")`` never raises on a
    missing key, a wrong container type or an out-of-range index.
    """

    _value: Any = _MISSING

    @classmethod
    def of(cls, value: Any) -> "Maybe":
        if value is None:
            return NOTHING
        return cls(value)

    @property
    def present(self) -> bool:
        return self._value is not _MISSING

    def get(self, key: str) -> "Maybe":
        if isinstance(self._value, dict) and key in self._value:
            return Maybe.of(self._value[key])
        return NOTHING

    def at(self, index: int) -> "Maybe":
        if isinstance(self._value, list) and -len(self._value) <= index < len(self._value):
            return Maybe.of(self._value[index])
        return NOTHING

    def or_else(self, other: "Maybe") -> "Maybe":
        return self if self.present else other

    def value(self, default: Any = None) -> Any:
        return self._value if self.present else default

    def text(self) -> str | None:
        """The value if it is a non-empty string."""

        if isinstance(self._value, str) and self._value:
            return self._value
        return None

    def number(self) -> float | None:
        if isinstance(self._value, bool) or not isinstance(self._value, (int, float)):
            return None
        return float(self._value)

    def items(self) -> Iterator["Maybe"]:
        """Iterate list elements; yields nothing for non-lists."""

        if isinstance(self._value, list):
            for item in self._value:
                yield Maybe.of(item)


NOTHING = Maybe()
