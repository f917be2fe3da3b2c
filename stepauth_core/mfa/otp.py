"""StepAuth OTP - HOTP/TOTP code computation.

Implements RFC 4226 HOTP and the RFC 6238 time-step counter:
- Deterministic 6-digit codes from a shared secret and a counter
- Time-derived counters (30 second steps)
- Verification with clock-skew tolerance

The default tolerance is +/-2 steps (+/-60 seconds). A wider window is
easier on users with drifting phone clocks but leaves a longer replay
window; ``window=1`` is the stricter setting.

Compatible with:
- Google Authenticator
- Authy
- Microsoft Authenticator
- Any RFC 6238 compliant app

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging
import struct
import time
from typing import Callable, Optional, Union

# Configure logging
logger = logging.getLogger(__name__)

DIGITS = 6
PERIOD = 30
DEFAULT_WINDOW = 2


class OTPSecretError(ValueError):
    """Shared secret is not valid base-32."""
    pass


def compute_code(secret: bytes, counter: int, digits: int = DIGITS) -> int:
    """Compute HOTP value (RFC 4226).

    Args:
        secret: Shared secret bytes
        counter: Moving factor (unsigned 64-bit)
        digits: Number of decimal digits

    Returns:
        Code as an integer in [0, 10**digits)
    """
    # Pack counter as big-endian 8-byte integer
    counter_bytes = struct.pack(">Q", counter)

    hmac_digest = hmac.new(secret, counter_bytes, hashlib.sha1).digest()

    # Dynamic truncation
    offset = hmac_digest[-1] & 0x0F
    binary = struct.unpack(">I", hmac_digest[offset:offset + 4])[0] & 0x7FFFFFFF

    return binary % (10 ** digits)


def format_code(code: int, digits: int = DIGITS) -> str:
    """Render a code with leading zeros."""
    return str(code).zfill(digits)


def totp_counter(timestamp: Optional[float] = None, period: int = PERIOD) -> int:
    """Time-step counter for a Unix timestamp (defaults to now)."""
    if timestamp is None:
        timestamp = time.time()
    return int(timestamp // period)


def decode_secret(secret: str) -> bytes:
    """Decode a base-32 secret as typed or scanned by a user.

    Padding is optional, case and embedded spaces are ignored.

    Raises:
        OTPSecretError: If the text is not base-32
    """
    if not secret:
        raise OTPSecretError("Empty secret")

    normalized = secret.replace(" ", "").upper()
    normalized += "=" * ((8 - len(normalized) % 8) % 8)

    try:
        return base64.b32decode(normalized)
    except (binascii.Error, ValueError) as e:
        raise OTPSecretError(f"Invalid base32 secret: {e}") from e


def totp_code(
    secret: Union[str, bytes],
    timestamp: Optional[float] = None,
    period: int = PERIOD,
    digits: int = DIGITS,
) -> str:
    """Current (or given-time) TOTP code as a zero-padded string."""
    key = decode_secret(secret) if isinstance(secret, str) else secret
    return format_code(compute_code(key, totp_counter(timestamp, period), digits), digits)


def verify(
    secret: str,
    submitted: str,
    now: Optional[float] = None,
    window: int = DEFAULT_WINDOW,
    period: int = PERIOD,
    digits: int = DIGITS,
) -> bool:
    """Verify a submitted TOTP code.

    Candidates are the codes for counters ``c - window .. c + window``
    where ``c`` is the counter for ``now``.

    Args:
        secret: Base-32 shared secret
        submitted: Code entered by the user
        now: Unix timestamp (defaults to now)
        window: Allowed steps either side of the current one
        period: Time step in seconds
        digits: Code length

    Returns:
        True if any candidate matches. Malformed secrets or codes yield
        False rather than an error.
    """
    if not submitted:
        return False

    code = submitted.strip().replace(" ", "")
    if len(code) != digits or not (code.isascii() and code.isdigit()):
        return False

    try:
        key = decode_secret(secret)
    except OTPSecretError as e:
        logger.warning(f"TOTP verification against malformed secret: {e}")
        return False

    current = totp_counter(now, period)
    matched = False

    # Check every candidate so timing does not reveal which step matched
    for offset in range(-window, window + 1):
        counter = current + offset
        if counter < 0:
            continue
        expected = format_code(compute_code(key, counter, digits), digits)
        if hmac.compare_digest(code, expected):
            matched = True

    return matched


class TOTPVerifier:
    """TOTP verification with fixed parameters and an injectable clock."""

    def __init__(
        self,
        window: int = DEFAULT_WINDOW,
        period: int = PERIOD,
        digits: int = DIGITS,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize verifier.

        Args:
            window: Time window tolerance in steps
            period: Time step in seconds
            digits: Number of digits
            clock: Source of Unix time
        """
        if window < 0:
            raise ValueError("window must be >= 0")

        self.window = window
        self.period = period
        self.digits = digits
        self.clock = clock

    def verify(self, secret: str, submitted: str) -> bool:
        """Verify code against secret at the current clock time."""
        return verify(
            secret,
            submitted,
            now=self.clock(),
            window=self.window,
            period=self.period,
            digits=self.digits,
        )

    def current_code(self, secret: str) -> str:
        """Generate current code (for testing/debug only)."""
        return totp_code(secret, self.clock(), self.period, self.digits)


__all__ = [
    "OTPSecretError",
    "TOTPVerifier",
    "compute_code",
    "decode_secret",
    "format_code",
    "totp_code",
    "totp_counter",
    "verify",
]
