"""sqs_simple exception types."""

from __future__ import annotations


class SqsError(Exception):
    """Base error for the sqs_simple library."""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class SqsErrorCodes:
    """Error code constants for SqsError."""

    CONFIGURATION_ERROR: str = "CONFIGURATION_ERROR"
    REQUEST_FAILED: str = "REQUEST_FAILED"
    MISSING_FIELD: str = "MISSING_FIELD"
    TRANSPORT_ERROR: str = "TRANSPORT_ERROR"
    PARSE_ERROR: str = "PARSE_ERROR"
