"""motp — MCP server for Mobile-OTP (mOTP) code generation and verification.

Provides tools for AI agents to produce and check mOTP codes from a secret and
PIN. Nothing is stored: every call is computed from its arguments and the
current time.
"""

import json
from typing import Optional

from mcp.server.fastmcp import FastMCP

from motp.log import logger, debug_detail
from motp.otp.generator import MOTPError, Generator

mcp = FastMCP("motp")


# ── Tools ─────────────────────────────────────────────────────────────────────


@mcp.tool(
    name="motp_generate",
    annotations={
        "title": "Generate mOTP Code",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": False,
    },
)
async def motp_generate(
    secret: str,
    pin: str,
    period: int = 10,
    digits: int = 6,
    unix_seconds: Optional[int] = None,
) -> str:
    """Generate a Mobile-OTP code.

    Args:
        secret: Shared mOTP secret (usually 16 hex characters).
        pin: User PIN (usually 4 digits).
        period: Code lifetime in seconds (>= 1, default 10).
        digits: Number of hex characters to return (1-32, default 6).
        unix_seconds: Generate for this Unix time instead of now.

    Returns:
        JSON: {"code": str, "epoch_period": int, "valid_for": int, "unix_seconds": int}
        Error: {"error": str}
    """
    try:
        generator = Generator(secret, pin, period=period, digits=digits)
        if unix_seconds is None:
            unix_seconds = int(generator.clock())
        code = generator.generate(unix_seconds)
    except MOTPError as exc:
        logger.warning("motp_generate rejected: %s", exc)
        return json.dumps({"error": str(exc)}, indent=2)

    debug_detail(f"Generated mOTP code for time step {generator.epoch_period(unix_seconds)}")
    return json.dumps({
        "code": code,
        "epoch_period": generator.epoch_period(unix_seconds),
        "valid_for": generator.seconds_remaining(unix_seconds),
        "unix_seconds": unix_seconds,
    }, indent=2)


@mcp.tool(
    name="motp_verify",
    annotations={
        "title": "Verify mOTP Code",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": False,
    },
)
async def motp_verify(
    code: str,
    secret: str,
    pin: str,
    period: int = 10,
    digits: int = 6,
    window: int = 1,
    unix_seconds: Optional[int] = None,
) -> str:
    """Check whether a Mobile-OTP code is valid.

    A code is accepted if it matches any time step within `window` periods of
    the reference time, to tolerate clock drift between devices.

    Args:
        code: The code to check.
        secret: Shared mOTP secret.
        pin: User PIN.
        period: Code lifetime in seconds (>= 1, default 10).
        digits: Code length in hex characters (1-32, default 6).
        window: Time steps accepted either side of the reference time (default 1).
        unix_seconds: Reference Unix time; defaults to now.

    Returns:
        JSON: {"valid": bool, "unix_seconds": int}
        Error: {"error": str}
    """
    try:
        generator = Generator(secret, pin, period=period, digits=digits)
        if unix_seconds is None:
            unix_seconds = int(generator.clock())
        valid = generator.verify(code, unix_seconds, window=window)
    except ValueError as exc:
        logger.warning("motp_verify rejected: %s", exc)
        return json.dumps({"error": str(exc)}, indent=2)

    return json.dumps({"valid": valid, "unix_seconds": unix_seconds}, indent=2)


def main():
    mcp.run()


if __name__ == "__main__":
    main()
