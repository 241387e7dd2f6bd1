"""
otp_core.py — HMAC one-time-password engine (RFC 4226 / RFC 6238).

Pure functions only: no I/O, no configuration state. The generator and the
CLI/API layers feed already-validated values into these helpers.

Pipeline for a counter C and key K:
    digest = HMAC-<algorithm>(key=K, msg=C as 8-byte big-endian)
    offset = digest[-1] & 0x0F
    P      = digest[offset:offset+4] as big-endian uint32 & 0x7FFFFFFF
    token  = last `digits` characters of str(P)
"""

import hashlib
import hmac
import struct
from enum import Enum

COUNTER_MAX = 2 ** 64


class HashAlgorithm(str, Enum):
    """Hash functions accepted for HMAC keying."""

    SHA1 = "SHA-1"
    SHA224 = "SHA-224"
    SHA256 = "SHA-256"
    SHA384 = "SHA-384"
    SHA512 = "SHA-512"
    SHA3_224 = "SHA3-224"
    SHA3_256 = "SHA3-256"
    SHA3_384 = "SHA3-384"
    SHA3_512 = "SHA3-512"

    @property
    def hashlib_name(self) -> str:
        return _HASHLIB_NAMES[self]

    @classmethod
    def names(cls) -> list:
        return [member.value for member in cls]


_HASHLIB_NAMES = {
    HashAlgorithm.SHA1: "sha1",
    HashAlgorithm.SHA224: "sha224",
    HashAlgorithm.SHA256: "sha256",
    HashAlgorithm.SHA384: "sha384",
    HashAlgorithm.SHA512: "sha512",
    HashAlgorithm.SHA3_224: "sha3_224",
    HashAlgorithm.SHA3_256: "sha3_256",
    HashAlgorithm.SHA3_384: "sha3_384",
    HashAlgorithm.SHA3_512: "sha3_512",
}


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(counter: int) -> bytes:
    """
    Serialize a counter as the 8-byte big-endian HOTP message.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'

    Raises:
        ValueError: counter outside the unsigned 64-bit range.
    """
    if not 0 <= counter < COUNTER_MAX:
        raise ValueError(f"Counter out of range: {counter}")
    return struct.pack(">Q", counter)


def hmac_digest(key: bytes, counter: int, algorithm: HashAlgorithm = HashAlgorithm.SHA1) -> bytes:
    """HMAC of the serialized counter; 20 bytes for SHA-1, up to 64 for SHA-512/SHA3-512."""
    algorithm = HashAlgorithm(algorithm)
    return hmac.new(key, int_to_bytes(counter), algorithm.hashlib_name).digest()


def dynamic_truncate(digest: bytes) -> int:
    """
    RFC 4226 section 5.3 dynamic truncation.

    - offset = low nibble of the last digest byte (0..15)
    - read 4 bytes from offset as a big-endian uint32
    - clear the sign bit, giving a 31-bit unsigned integer

    Every supported digest is at least 20 bytes, so offset + 4 stays in
    bounds.
    """
    offset = digest[-1] & 0x0F
    (value,) = struct.unpack(">I", digest[offset:offset + 4])
    return value & 0x7FFFFFFF


def hotp_value(key: bytes, counter: int, algorithm: HashAlgorithm = HashAlgorithm.SHA1) -> int:
    """Truncated 31-bit HOTP value for `counter`."""
    return dynamic_truncate(hmac_digest(key, counter, algorithm))


def format_token(value: int, digits: int) -> str:
    """
    Render the truncated value as the final token.

    Keeps the rightmost `digits` characters of str(value). When str(value)
    is shorter than `digits` the whole string is returned unpadded, so the
    token can be shorter than requested (e.g. 82162583 with digits=9).
    """
    text = str(value)
    start = max(len(text) - digits, 0)
    return text[start:start + digits]


def hotp(key: bytes, counter: int, algorithm: HashAlgorithm = HashAlgorithm.SHA1, digits: int = 6) -> str:
    """Counter-based (RFC 4226) token for already-decoded key bytes."""
    return format_token(hotp_value(key, counter, algorithm), digits)
