#!/usr/bin/env python3
"""
otp_cli.py — command-line wrapper around the tokengen pipeline.

Subcommands:
- token      : print the TOTP token for a key at a given (or current) time
- watch      : show the TOTP token in real time
- hotp       : print the counter-based token for a key
- algorithms : list supported hash algorithms

The key comes from --key, --key-file, or the TOKENGEN_KEY environment
variable, in that order.

eg..:
    python -m tokengen token --key JBSWY3DPEHPK3PXP
    python -m tokengen token --key JBSWY3DPEHPK3PXP --timestamp 1675324259
    python -m tokengen token --key JBSWY3DPEHPK3PXP --timestamp 2023-02-02T07:46:03Z
    python -m tokengen watch --key CI2FM6EQCI2FM6EQKU --period 60 --digits 8
    python -m tokengen hotp --key GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ --counter 42
"""

import argparse
import logging
import os
import sys
import time

from .base32 import decode_base32, validate_key
from .config import DEFAULT_DIGITS, DEFAULT_PERIOD, TokenConfig
from .errors import InvalidTimestampError, TokenError
from .generator import TokenGenerator
from .otp_core import HashAlgorithm, hotp
from .timestamps import parse_timestamp

KEY_ENV_VAR = "TOKENGEN_KEY"

logger = logging.getLogger(__name__)


class CLIError(Exception):
    """Usage problem that is not a token error (missing key, unreadable file)."""


def setup_logging() -> None:
    logging.basicConfig(level=logging.DEBUG, format="[+] %(message)s")


def timestamp_arg(text: str):
    try:
        return parse_timestamp(text)
    except InvalidTimestampError:
        raise argparse.ArgumentTypeError(f"not an integer or ISO-8601 date-time: {text!r}") from None


def resolve_key(args) -> str:
    if args.key is not None:
        return args.key
    if args.key_file is not None:
        try:
            with open(args.key_file, "r", encoding="utf-8") as f:
                return f.read().strip()
        except OSError as e:
            raise CLIError(f"Cannot read key file {args.key_file}: {e}") from e
    key = os.getenv(KEY_ENV_VAR)
    if key is None:
        raise CLIError(f"No key given. Use --key, --key-file or set {KEY_ENV_VAR}.")
    return key


def _config_from_args(args) -> TokenConfig:
    return TokenConfig.from_mapping({
        "algorithm": args.algorithm,
        "period": args.period,
        "digits": args.digits,
        "timestamp": getattr(args, "timestamp", None),
    })


# --- CLI command handlers ---
def cmd_token(args):
    gen = TokenGenerator(_config_from_args(args))
    code = gen.generate(resolve_key(args))
    logger.debug("counter=%d remaining=%ds", gen.counter(), gen.remaining_seconds())
    print(code)


def cmd_watch(args):
    key = resolve_key(args)
    # fail fast on a bad key or config before entering the loop
    gen = TokenGenerator(_config_from_args(args))
    gen.generate(key)

    print(f"Press Ctrl+C to quit. Generating {gen.digits}-digit TOTP every {gen.period}s...\n")
    last_code = None
    try:
        while True:
            gen = gen.with_options(timestamp=int(time.time()))
            code = gen.generate(key)
            remaining = gen.remaining_seconds()
            if code != last_code:
                print(f"TOTP: {code}  (valid ~{remaining:2d}s)")
                last_code = code
            else:
                print(f".. {remaining:2d}s left", end="\r", flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")


def cmd_hotp(args):
    key = validate_key(resolve_key(args))
    cfg = TokenConfig.from_mapping({"algorithm": args.algorithm, "digits": args.digits})
    try:
        code = hotp(decode_base32(key), args.counter, cfg.algorithm, cfg.digits)
    except ValueError as e:
        raise CLIError(str(e)) from e
    print(f"HOTP(counter={args.counter}): {code}")


def cmd_algorithms(args):
    for name in HashAlgorithm.names():
        print(name)


def cmd_help(args):
    print("No command specified. Use -h for help.")


# --- Argparse builder ---
def _add_key_args(p):
    p.add_argument("--key", help="Base32 key")
    p.add_argument("--key-file", help="File holding the base32 key")


def _add_config_args(p, with_period: bool = True):
    p.add_argument("--algorithm", choices=HashAlgorithm.names(), help="HMAC hash (default SHA-1)")
    p.add_argument("--digits", type=int, help=f"Number of token digits (default {DEFAULT_DIGITS})")
    if with_period:
        p.add_argument("--period", type=int, help=f"TOTP time step in seconds (default {DEFAULT_PERIOD})")
    p.add_argument("--verbose", action="store_true", help="Verbose output")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tokengen", description="TOTP/HOTP token generator (RFC 6238 / RFC 4226).")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help, verbose=False)

    # token
    pt = sub.add_parser("token", help="Print the TOTP token for a key")
    _add_key_args(pt)
    _add_config_args(pt)
    pt.add_argument("--timestamp", type=timestamp_arg,
                    help="10-digit seconds, 13-digit milliseconds or ISO-8601 date-time (default now)")
    pt.set_defaults(func=cmd_token)

    # watch
    pw = sub.add_parser("watch", help="Show the TOTP token in real time")
    _add_key_args(pw)
    _add_config_args(pw)
    pw.set_defaults(func=cmd_watch)

    # hotp
    ph = sub.add_parser("hotp", help="Print the HOTP token for a specific counter")
    _add_key_args(ph)
    ph.add_argument("--counter", type=int, required=True)
    _add_config_args(ph, with_period=False)
    ph.set_defaults(func=cmd_hotp)

    # algorithms
    pa = sub.add_parser("algorithms", help="List supported hash algorithms")
    pa.set_defaults(func=cmd_algorithms)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        setup_logging()
    try:
        args.func(args)
    except (TokenError, CLIError) as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
