"""
Variable store shared by every ``run`` of one interpreter.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

logger = logging.getLogger(__name__)


class VariableStore:
    """
    Mapping from identifier to its last assigned value.

    With ``legacy_zero_lookup`` a stored falsy value (0.0 or NaN) is treated
    as unassigned on lookup, matching the first releases of the calculator.
    """

    def __init__(self, legacy_zero_lookup: bool = False) -> None:
        self.legacy_zero_lookup = legacy_zero_lookup
        self._values: dict[str, float] = {}

    def assign(self, name: str, value: float) -> float:
        self._values[name] = value
        logger.debug("Assigned %s = %r", name, value)
        return value

    def lookup(self, name: str) -> float | None:
        """Return the stored value, or None when the name is unresolvable."""
        value = self._values.get(name)
        if value is None:
            return None
        if self.legacy_zero_lookup and not _truthy(value):
            return None
        return value

    def clear(self) -> None:
        self._values.clear()

    def snapshot(self) -> dict[str, float]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"VariableStore({self._values!r})"


def _truthy(value: float) -> bool:
    # NaN compares unequal to itself and is falsy in the legacy lookup
    return value == value and value != 0
