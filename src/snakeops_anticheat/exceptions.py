"""anticheat library exception types"""

from __future__ import annotations


class AntiCheatError(Exception):
    """Base error for the anticheat library.

    The scorer itself never raises; this covers payload parsing and the
    player history store.
    """

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class AntiCheatErrorCodes:
    """Error code constants."""

    INVALID_SESSION: str = "INVALID_SESSION"
    HISTORY_UNAVAILABLE: str = "HISTORY_UNAVAILABLE"
