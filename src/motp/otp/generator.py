"""Mobile-OTP (mOTP) code generation.

An mOTP code is the MD5 digest of ``"{time_step}{secret}{pin}"`` rendered as
lowercase hex and cut down to the configured number of characters. The time
step is the Unix time integer-divided by the period (10 seconds by default).
"""

from __future__ import annotations

import hashlib
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from pyotp.utils import strings_equal

DEFAULT_PERIOD = 10
DEFAULT_DIGITS = 6
MAX_DIGITS = 32  # length of an MD5 hex digest
MAX_WINDOW = 10


class MOTPError(ValueError):
    """Base class for mOTP validation failures."""


class InvalidConfiguration(MOTPError):
    """Raised when a generator is built with an unusable period or length."""


class InvalidTimestamp(MOTPError):
    """Raised when a code is requested for a time before the Unix epoch."""


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Generator:
    """Immutable mOTP generator.

    ``secret`` and ``pin`` are used verbatim; callers own their strength.
    ``clock`` returns seconds since the epoch and is only read by the
    methods that work on the current time.
    """

    secret: str
    pin: str
    period: int = DEFAULT_PERIOD
    digits: int = DEFAULT_DIGITS
    clock: Callable[[], float] = field(default=time.time, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not _is_int(self.period) or self.period < 1:
            raise InvalidConfiguration("period must be positive")
        if not _is_int(self.digits) or not 1 <= self.digits <= MAX_DIGITS:
            raise InvalidConfiguration(f"digits must be in the range 1-{MAX_DIGITS}")

    def epoch_period(self, unix_seconds: int) -> int:
        """Return the time-step counter for ``unix_seconds``."""
        if unix_seconds < 0:
            raise InvalidTimestamp("unix_seconds must be non-negative")
        return int(unix_seconds) // self.period

    def generate(self, unix_seconds: int) -> str:
        """Generate the code for the time step containing ``unix_seconds``."""
        return self._code_for_step(self.epoch_period(unix_seconds))

    def generate_current(self) -> str:
        """Generate the code for the current clock time."""
        return self.generate(self._now())

    def seconds_remaining(self, unix_seconds: Optional[int] = None) -> int:
        """Seconds until the code for ``unix_seconds`` (default: now) rotates."""
        if unix_seconds is None:
            unix_seconds = self._now()
        self.epoch_period(unix_seconds)
        return self.period - int(unix_seconds) % self.period

    def verify(self, code: str, unix_seconds: Optional[int] = None, window: int = 0) -> bool:
        """Check ``code`` against the time steps within ``window`` of ``unix_seconds``.

        Steps before the epoch are skipped. The comparison is constant-time.
        The window may not exceed ``MAX_WINDOW`` and must check fewer steps
        than there are distinct codes of this length.
        """
        if not 0 <= window <= MAX_WINDOW:
            raise ValueError(f"window must be in the range 0-{MAX_WINDOW}")
        if 2 * window + 1 >= 16 ** self.digits:
            raise ValueError(f"window {window} is too wide for {self.digits}-character codes")
        if unix_seconds is None:
            unix_seconds = self._now()
        step = self.epoch_period(unix_seconds)
        candidate = code.strip().lower()
        for offset in range(-window, window + 1):
            if step + offset < 0:
                continue
            if strings_equal(candidate, self._code_for_step(step + offset)):
                return True
        return False

    def _now(self) -> int:
        return int(self.clock())

    def _code_for_step(self, step: int) -> str:
        hash_input = f"{step}{self.secret}{self.pin}"
        digest = hashlib.md5(hash_input.encode("utf-8")).hexdigest()
        return digest[: self.digits]


def new_generator(
    secret: str,
    pin: str,
    *,
    period: int = DEFAULT_PERIOD,
    digits: int = DEFAULT_DIGITS,
) -> Generator:
    """Build a validated :class:`Generator`."""
    return Generator(secret=secret, pin=pin, period=period, digits=digits)
