"""featureflag library exception types"""

from __future__ import annotations


class FeatureFlagError(Exception):
    """Base error for the featureflag library."""

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


class FeatureFlagErrorCodes:
    """Error code constants."""

    TYPE_MISMATCH: str = "TYPE_MISMATCH"
    CONNECTION_ERROR: str = "CONNECTION_ERROR"
    HTTP_ERROR: str = "HTTP_ERROR"
    INVALID_PAYLOAD: str = "INVALID_PAYLOAD"
