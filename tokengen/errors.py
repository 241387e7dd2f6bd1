"""
errors.py — Exception types raised by the token pipeline.

Every error is an input-correctness failure: raised where it is detected,
never retried. All of them subclass ValueError so callers that already
catch ValueError around OTP code keep working.
"""


class TokenError(ValueError):
    """Base class for every error raised by tokengen."""


class EmptyKeyError(TokenError):
    def __init__(self, message: str = "Empty base32 key!"):
        super().__init__(message)


class InvalidKeyError(TokenError):
    def __init__(self, message: str = "Invalid base32 key!"):
        super().__init__(message)


class InvalidTimestampError(TokenError):
    def __init__(self, message: str = "Invalid timestamp!"):
        super().__init__(message)


class InvalidConfigError(TokenError):
    """A configuration field failed its type or range check."""

    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(f"Invalid {field}: {reason}")
