"""motp — print a Mobile-OTP (mOTP) code for a secret and PIN.

The code is written to stdout without a trailing newline so it can be piped
straight into other tools. Errors go to stderr and exit with status 1.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Optional, Sequence

from motp.log import logger, debug_detail
from motp.otp.generator import DEFAULT_DIGITS, DEFAULT_PERIOD, MOTPError, Generator

try:
    __version__ = version("motp")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0+unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="motp",
        description=(
            "Generate one-time passwords (OTP) using Mobile-OTP (mOTP). "
            "The code is derived from a secret, a PIN and the current time period."
        ),
        epilog="Secret and PIN may also be supplied via MOTP_SECRET and MOTP_PIN.",
    )
    parser.add_argument(
        "-s", "--secret",
        default=os.getenv("MOTP_SECRET"),
        help="mOTP secret value (often hex or alphanumeric digits)",
    )
    parser.add_argument(
        "-p", "--pin",
        default=os.getenv("MOTP_PIN"),
        help="mOTP PIN value (usually 4 digits)",
    )
    parser.add_argument(
        "-d", "--duration",
        type=int,
        default=os.getenv("MOTP_PERIOD", DEFAULT_PERIOD),
        help=f"Duration of mOTP codes in seconds (default {DEFAULT_PERIOD}s)",
    )
    parser.add_argument(
        "-l", "--length",
        type=int,
        default=os.getenv("MOTP_DIGITS", DEFAULT_DIGITS),
        help=f"Length of mOTP output (default {DEFAULT_DIGITS} characters)",
    )
    parser.add_argument(
        "--at",
        type=int,
        metavar="UNIX_SECONDS",
        help="Generate the code for this Unix time instead of now",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.secret is None:
        parser.error("the following arguments are required: -s/--secret")
    if args.pin is None:
        parser.error("the following arguments are required: -p/--pin")
    previous_level = logger.level
    if args.verbose:
        logger.setLevel(logging.DEBUG)
    try:
        return _emit_code(args)
    finally:
        logger.setLevel(previous_level)


def _emit_code(args: argparse.Namespace) -> int:
    try:
        generator = Generator(args.secret, args.pin, period=args.duration, digits=args.length)
        if args.at is None:
            otp = generator.generate_current()
        else:
            otp = generator.generate(args.at)
    except MOTPError as exc:
        logger.error("Error creating mOTP code: %s", exc)
        return 1

    debug_detail(
        f"Generated {generator.digits}-character code, valid for "
        f"{generator.seconds_remaining(args.at)}s"
    )
    sys.stdout.write(otp)
    sys.stdout.flush()
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
