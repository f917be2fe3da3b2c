"""StepAuth Provisioning - TOTP secret generation and otpauth:// URIs.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import base64
import secrets
from urllib.parse import quote, urlencode

from stepauth_core.mfa.otp import DIGITS, PERIOD

SECRET_BYTES = 20  # 160 bits


def generate_secret() -> str:
    """Generate a new shared secret.

    Returns:
        160 random bits as unpadded base-32 text (32 characters)
    """
    raw_secret = secrets.token_bytes(SECRET_BYTES)
    return base64.b32encode(raw_secret).decode().rstrip("=")


def build_provisioning_uri(
    issuer: str,
    account: str,
    secret: str,
    digits: int = DIGITS,
    period: int = PERIOD,
) -> str:
    """Render the otpauth:// URI an authenticator app scans.

    Issuer and account are percent-encoded in full (RFC 3986), the ``:``
    between them is the only literal separator in the label.

    Args:
        issuer: Application name
        account: Account label (usually the principal)
        secret: Base-32 secret
        digits: Code length
        period: Time step in seconds

    Returns:
        Provisioning URI
    """
    label = f"{quote(issuer, safe='')}:{quote(account, safe='')}"

    params = {
        "secret": secret,
        "issuer": issuer,
        "algorithm": "SHA1",
        "digits": str(digits),
        "period": str(period),
    }

    return f"otpauth://totp/{label}?{urlencode(params, quote_via=quote)}"


__all__ = [
    "SECRET_BYTES",
    "build_provisioning_uri",
    "generate_secret",
]
