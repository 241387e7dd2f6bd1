"""
config.py — Immutable token configuration.

TokenConfig is a frozen dataclass: a generator never sees its settings
change underneath it. Use evolve() to get a copy with some fields replaced.

>>> cfg = TokenConfig(period=60)
>>> cfg.evolve(digits=8).digits
8
"""

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from .errors import InvalidConfigError
from .otp_core import HashAlgorithm
from .timestamps import (
    EpochMillis,
    EpochSeconds,
    Timestamp,
    current_timestamp,
    is_plain_int,
)

# --- Defaults ----------------------------------------------------------------
DEFAULT_ALGORITHM = HashAlgorithm.SHA1
DEFAULT_PERIOD = 30     # seconds per counter step
DEFAULT_DIGITS = 6

CONFIG_FIELDS = ("algorithm", "period", "digits", "timestamp")


def parse_algorithm(value: Any) -> HashAlgorithm:
    try:
        return HashAlgorithm(value)
    except ValueError:
        raise InvalidConfigError(
            "algorithm", f"{value!r} is not one of {', '.join(HashAlgorithm.names())}"
        ) from None


def _check_positive_int(name: str, value: Any) -> None:
    if not is_plain_int(value):
        raise InvalidConfigError(name, f"expected an integer, got {type(value).__name__}")
    if value <= 0:
        raise InvalidConfigError(name, f"must be positive, got {value}")


def _check_timestamp(value: Any) -> None:
    if isinstance(value, datetime):
        return
    if isinstance(value, (EpochSeconds, EpochMillis)):
        if not is_plain_int(value.value) or value.value < 0:
            raise InvalidConfigError("timestamp", f"{value!r} must hold a non-negative integer")
        return
    if is_plain_int(value):
        if value <= 0:
            raise InvalidConfigError("timestamp", f"must be positive, got {value}")
        return
    raise InvalidConfigError(
        "timestamp", f"expected an integer or datetime, got {type(value).__name__}"
    )


@dataclass(frozen=True)
class TokenConfig:
    algorithm: HashAlgorithm = DEFAULT_ALGORITHM
    period: int = DEFAULT_PERIOD
    digits: int = DEFAULT_DIGITS
    timestamp: Timestamp = field(default_factory=current_timestamp)

    def __post_init__(self):
        # frozen: normalize the algorithm through object.__setattr__
        object.__setattr__(self, "algorithm", parse_algorithm(self.algorithm))
        _check_positive_int("period", self.period)
        _check_positive_int("digits", self.digits)
        _check_timestamp(self.timestamp)

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]] = None) -> "TokenConfig":
        """
        Build a config from an untyped mapping (JSON body, CLI options).

        Keys whose value is None fall back to the defaults; unknown keys
        raise InvalidConfigError.
        """
        if options is None:
            return cls()
        if not isinstance(options, Mapping):
            raise InvalidConfigError("options", f"expected a mapping, got {type(options).__name__}")
        _reject_unknown(options)
        return cls(**{k: v for k, v in options.items() if v is not None})

    def evolve(self, **changes) -> "TokenConfig":
        """Copy of this config with the given fields replaced (and re-validated)."""
        _reject_unknown(changes)
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> dict:
        return {
            "algorithm": self.algorithm.value,
            "period": self.period,
            "digits": self.digits,
            "timestamp": self.timestamp,
        }


def _reject_unknown(options: Mapping[str, Any]) -> None:
    unknown = sorted(set(options) - set(CONFIG_FIELDS))
    if unknown:
        raise InvalidConfigError(unknown[0], "unrecognized option")
