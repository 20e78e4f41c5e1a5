"""Tagged flag values"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .exceptions import FeatureFlagError, FeatureFlagErrorCodes


class FlagValueKind(StrEnum):
    """Kind tag of a flag value."""

    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    JSON = "json"
    NULL = "null"


@dataclass(frozen=True)
class FlagValue:
    """A flag value tagged with its kind.

    Consumers read the payload through the accessor matching the kind; the
    wrong accessor raises ``FeatureFlagError(TYPE_MISMATCH)`` instead of
    coercing.
    """

    kind: FlagValueKind
    raw: Any = None

    @classmethod
    def of(cls, raw: Any) -> FlagValue:
        if isinstance(raw, FlagValue):
            return raw
        if raw is None:
            return cls(FlagValueKind.NULL)
        # bool is a subclass of int
        if isinstance(raw, bool):
            return cls(FlagValueKind.BOOLEAN, raw)
        if isinstance(raw, (int, float)):
            return cls(FlagValueKind.NUMBER, raw)
        if isinstance(raw, str):
            return cls(FlagValueKind.STRING, raw)
        if isinstance(raw, (dict, list)):
            return cls(FlagValueKind.JSON, raw)
        raise FeatureFlagError(
            FeatureFlagErrorCodes.TYPE_MISMATCH,
            f"Unsupported flag value type: {type(raw).__name__}",
        )

    @classmethod
    def null(cls) -> FlagValue:
        return cls(FlagValueKind.NULL)

    def is_off(self) -> bool:
        """Whether this value switches its flag off regardless of rollout."""
        if self.kind is FlagValueKind.NULL:
            return True
        if self.kind is FlagValueKind.BOOLEAN:
            return not self.raw
        if self.kind is FlagValueKind.NUMBER:
            return self.raw == 0 or math.isnan(self.raw)
        if self.kind is FlagValueKind.STRING:
            return self.raw == ""
        return False

    def _expect(self, kind: FlagValueKind) -> Any:
        if self.kind is not kind:
            raise FeatureFlagError(
                FeatureFlagErrorCodes.TYPE_MISMATCH,
                f"Flag value is {self.kind.value}, not {kind.value}",
            )
        return self.raw

    def as_bool(self) -> bool:
        return self._expect(FlagValueKind.BOOLEAN)

    def as_str(self) -> str:
        return self._expect(FlagValueKind.STRING)

    def as_number(self) -> int | float:
        return self._expect(FlagValueKind.NUMBER)

    def as_json(self) -> dict[str, Any] | list[Any]:
        return self._expect(FlagValueKind.JSON)
