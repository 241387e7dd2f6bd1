"""
tokengen package
================

Time-based one-time passwords (RFC 6238) on top of HOTP (RFC 4226), for
every SHA-1, SHA-2 and SHA-3 variant.

──────────────────────────────────────────────
Pipeline
──────────────────────────────────────────────
- Base32 key  -> raw key bytes (trailing partial byte dropped)
- Timestamp   -> Unix seconds -> counter = floor(seconds / period)
- HMAC-<alg>(key, counter as 8-byte big-endian) -> dynamic truncation
  -> 31-bit integer P
- Token = last `digits` characters of str(P) (never left-padded)

──────────────────────────────────────────────
Quick usage
──────────────────────────────────────────────
>>> from tokengen import TokenGenerator
>>> gen = TokenGenerator(timestamp=1675324259)
>>> gen.generate("JBSWY3DPEHPK3PXP")
'680081'
>>> gen.with_options(timestamp=1675324260).generate("JBSWY3DPEHPK3PXP")
'858066'
"""
from .base32 import decode_base32, validate_key
from .config import (
    DEFAULT_ALGORITHM,
    DEFAULT_DIGITS,
    DEFAULT_PERIOD,
    TokenConfig,
)
from .errors import (
    EmptyKeyError,
    InvalidConfigError,
    InvalidKeyError,
    InvalidTimestampError,
    TokenError,
)
from .generator import TokenGenerator, generate_token
from .otp_core import HashAlgorithm, dynamic_truncate, format_token, hotp, hotp_value
from .timestamps import EpochMillis, EpochSeconds, time_counter, to_unix_seconds

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_ALGORITHM",
    "DEFAULT_DIGITS",
    "DEFAULT_PERIOD",
    "EmptyKeyError",
    "EpochMillis",
    "EpochSeconds",
    "HashAlgorithm",
    "InvalidConfigError",
    "InvalidKeyError",
    "InvalidTimestampError",
    "TokenConfig",
    "TokenError",
    "TokenGenerator",
    "decode_base32",
    "dynamic_truncate",
    "format_token",
    "generate_token",
    "hotp",
    "hotp_value",
    "time_counter",
    "to_unix_seconds",
    "validate_key",
]
