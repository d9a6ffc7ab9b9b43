"""
Custom exceptions for DartQL parsing and compilation.
"""


class DartQLError(Exception):
    """Base exception for all DartQL-related errors."""

    pass


class DartQLSyntaxError(DartQLError):
    """Raised when a query has invalid syntax.

    The message is user-facing and already names the position; `position` and
    `token` are kept for callers that want to highlight the offending text.
    """

    def __init__(self, message: str, position: int | None = None, token: str | None = None):
        self.position = position
        self.token = token
        super().__init__(message)


class DartQLValidationError(DartQLError):
    """Raised when a selector cannot be turned into a usable filter."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or []
        super().__init__(message)


class DartQLCompileError(DartQLError):
    """Raised inside the filter compiler when an AST cannot be compiled."""

    pass
