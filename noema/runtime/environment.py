"""Variable store used by the evaluator."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional

from .values import Value

logger = logging.getLogger(__name__)

DEFAULT_MAX_VARIABLES = 1000


class StoreCapacityError(LookupError):
    """Raised when a new name would exceed the store capacity."""


class VariableStore:
    """Mapping from variable name to value with a fixed capacity.

    Assignment is an upsert: new names take a slot, existing names are
    overwritten in place and never fail.
    """

    def __init__(self, max_variables: int = DEFAULT_MAX_VARIABLES):
        self.max_variables = max_variables
        self._values: Dict[str, Value] = {}

    def get(self, name: str) -> Optional[Value]:
        return self._values.get(name)

    def set(self, name: str, value: Value) -> None:
        if name not in self._values and len(self._values) >= self.max_variables:
            logger.debug("Variable store full (%d entries), rejecting %r", self.max_variables, name)
            raise StoreCapacityError(name)
        self._values[name] = value

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def snapshot(self) -> Dict[str, Value]:
        return dict(self._values)


__all__ = ["VariableStore", "StoreCapacityError", "DEFAULT_MAX_VARIABLES"]
