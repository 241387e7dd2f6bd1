"""
generator.py — TokenGenerator: validate key, decode, derive counter, HMAC,
truncate, format.
"""

import logging
from typing import Optional

from .base32 import decode_base32, validate_key
from .config import TokenConfig
from .otp_core import HashAlgorithm, format_token, hotp_value
from .timestamps import Timestamp, seconds_remaining, time_counter

logger = logging.getLogger(__name__)


class TokenGenerator:
    """
    Time-based token generator bound to one immutable TokenConfig.

        gen = TokenGenerator(period=60, digits=8)
        gen.generate("JBSWY3DPEHPK3PXP")

    Passing no timestamp pins the generator to the current second at
    construction time; build a new generator (or call with_options) to move
    to a later instant.
    """

    def __init__(self, config: Optional[TokenConfig] = None, **options):
        if config is None:
            config = TokenConfig.from_mapping(options)
        elif options:
            config = config.evolve(**options)
        self._config = config

    def __repr__(self):
        cfg = self._config
        return (
            f"TokenGenerator(algorithm={cfg.algorithm.value!r}, period={cfg.period}, "
            f"digits={cfg.digits}, timestamp={cfg.timestamp!r})"
        )

    @property
    def config(self) -> TokenConfig:
        return self._config

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._config.algorithm

    @property
    def period(self) -> int:
        return self._config.period

    @property
    def digits(self) -> int:
        return self._config.digits

    @property
    def timestamp(self) -> Timestamp:
        return self._config.timestamp

    def with_options(self, **changes) -> "TokenGenerator":
        """New generator sharing this one's settings except `changes`."""
        return TokenGenerator(self._config.evolve(**changes))

    def counter(self) -> int:
        return time_counter(self._config.timestamp, self._config.period)

    def remaining_seconds(self) -> int:
        return seconds_remaining(self._config.timestamp, self._config.period)

    def generate(self, key: str) -> str:
        """
        Token for `key` at the configured instant.

        Raises:
            EmptyKeyError: key is "".
            InvalidKeyError: key is not base32.
            InvalidTimestampError: configured timestamp has the wrong shape.
        """
        cfg = self._config
        key = validate_key(key)
        key_bytes = decode_base32(key)
        counter = time_counter(cfg.timestamp, cfg.period)
        logger.debug("TOTP: algorithm=%s period=%ds counter=%d", cfg.algorithm.value, cfg.period, counter)

        value = hotp_value(key_bytes, counter, cfg.algorithm)
        token = format_token(value, cfg.digits)
        if len(token) < cfg.digits:
            logger.debug("Truncated value %d has fewer than %d digits", value, cfg.digits)
        return token


def generate_token(key: str, **options) -> str:
    """One-shot helper: TokenGenerator(**options).generate(key)."""
    return TokenGenerator(**options).generate(key)
