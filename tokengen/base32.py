"""
base32.py — Base32 key validation and decoding (RFC 4648 alphabet).

The decoder accepts keys of any length: symbols are expanded to 5-bit groups
and regrouped into bytes, dropping the trailing partial byte. This differs
from base64.b32decode, which rejects keys whose length is not a multiple
of 8 after padding.

Example: decode_base32("JBSWY3DPEHPK3PXP") -> b'Hello!\\xde\\xad\\xbe\\xef'
"""

import re

from .errors import EmptyKeyError, InvalidKeyError

BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
PAD_CHAR = "="

_KEY_RE = re.compile(r"[A-Z2-7]+=*")
_SYMBOL_VALUES = {symbol: value for value, symbol in enumerate(BASE32_ALPHABET)}


def validate_key(key: str) -> str:
    """
    Check a base32 key before it is used for HMAC keying.

    - Lowercase letters are uppercased first.
    - The empty string raises EmptyKeyError.
    - Anything not matching [A-Z2-7]+ followed by optional '=' padding
      raises InvalidKeyError (this includes a key made only of padding).

    Returns:
        str: the uppercased key, padding kept.
    """
    if not isinstance(key, str):
        raise InvalidKeyError()
    key = key.upper()
    if key == "":
        raise EmptyKeyError()
    if _KEY_RE.fullmatch(key) is None:
        raise InvalidKeyError()
    return key


def decode_base32(key: str) -> bytes:
    """
    Decode a base32 key into raw key bytes.

    Steps:
    1. Uppercase and strip trailing '=' padding.
    2. Map each symbol to its 5-bit value (A=0 .. Z=25, 2=26 .. 7=31).
    3. Concatenate the bit groups and cut them into bytes from the start;
       a final group shorter than 8 bits is discarded.

    Raises:
        InvalidKeyError: the stripped key is empty or has a symbol outside
        the alphabet.
    """
    if not isinstance(key, str):
        raise InvalidKeyError()
    symbols = key.upper().rstrip(PAD_CHAR)
    if not symbols:
        raise InvalidKeyError()

    out = bytearray()
    buffer = 0
    bits = 0
    for symbol in symbols:
        value = _SYMBOL_VALUES.get(symbol)
        if value is None:
            raise InvalidKeyError()
        buffer = (buffer << 5) | value
        bits += 5
        if bits >= 8:
            bits -= 8
            out.append((buffer >> bits) & 0xFF)
    # leftover bits (< 8) are dropped
    return bytes(out)
