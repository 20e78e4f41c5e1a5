"""config library exception types"""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Raised when a config file cannot be read, parsed or validated.

    ``path`` names the file that failed, or None when the merged result
    failed validation.
    """

    def __init__(
        self,
        code: str,
        message: str,
        path: Path | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.path = path
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ConfigErrorCodes:
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
    UNKNOWN_ENVIRONMENT: str = "UNKNOWN_ENVIRONMENT_ERROR"
