"""Error taxonomy for Jobly.

Every expected failure is a single ``JoblyError`` tagged with an ``ErrorKind``.
Callers branch on ``err.kind``; the HTTP layer maps kinds to status codes.
"""

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    DUPLICATE_ENTRY = "duplicate_entry"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"


class JoblyError(Exception):
    """Expected, classified failure raised by a service operation."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"JoblyError({self.kind.name}, {self.message!r})"
