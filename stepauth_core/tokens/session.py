"""StepAuth Session Tokens - Signed bearer tokens.

Issues compact HS256 JSON Web Tokens once every required factor is
satisfied:
- Claims: sub (principal), iat, exp, jti, optional iss
- Fixed validity window (24 hours by default)
- Stateless: validity is signature plus embedded expiry, no server record

The signing key is process-wide configuration, loaded once and never
rotated by this module.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import logging
import secrets
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Union

# Configure logging
logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_TTL = 86400  # 24 hours
MIN_KEY_BYTES = 32


class ConfigurationError(Exception):
    """Missing or unusable configuration."""
    pass


class TokenError(Exception):
    """Base token error."""
    pass


class TokenMalformedError(TokenError):
    """Token is not a well-formed HS256 JWT."""
    pass


class TokenSignatureError(TokenError):
    """Token signature does not verify."""
    pass


class TokenExpiredError(TokenError):
    """Token expired error."""
    pass


@dataclass(frozen=True)
class SigningKey:
    """Symmetric token signing key."""

    secret: bytes

    @classmethod
    def load(cls, value: Union[str, bytes, None]) -> SigningKey:
        """Validate and wrap a configured key.

        Raises:
            ConfigurationError: If the key is missing or shorter than 256 bits
        """
        if not value:
            raise ConfigurationError("Token signing key is not configured")

        secret = value.encode() if isinstance(value, str) else value
        if len(secret) < MIN_KEY_BYTES:
            raise ConfigurationError(
                f"Token signing key must be at least {MIN_KEY_BYTES} bytes, got {len(secret)}"
            )

        return cls(secret=secret)

    def __repr__(self) -> str:
        return "SigningKey(<redacted>)"


@dataclass(frozen=True)
class IssuedToken:
    """A freshly minted token."""

    token: str
    principal: str
    issued_at: int
    expires_at: int
    token_type: str = "Bearer"

    @property
    def expires_in(self) -> int:
        return self.expires_at - self.issued_at

    @property
    def expires_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.expires_at)


class SessionTokenIssuer:
    """Mints and validates session tokens."""

    def __init__(
        self,
        signing_key: SigningKey,
        ttl: int = DEFAULT_TTL,
        issuer: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize token issuer.

        Args:
            signing_key: Validated signing key
            ttl: Token lifetime in seconds
            issuer: Optional ``iss`` claim, enforced on validation when set
            clock: Source of Unix time
        """
        self._key = signing_key
        self.ttl = ttl
        self.issuer = issuer
        self.clock = clock

    def issue(self, principal: str) -> IssuedToken:
        """Mint a token for ``principal``."""
        now = int(self.clock())
        claims: Dict[str, Any] = {
            "sub": principal,
            "iat": now,
            "exp": now + self.ttl,
            "jti": secrets.token_urlsafe(16),
        }
        if self.issuer:
            claims["iss"] = self.issuer

        token = self._encode(claims)
        logger.info(f"Issued session token for {principal}, expires in {self.ttl}s")

        return IssuedToken(token=token, principal=principal, issued_at=now, expires_at=now + self.ttl)

    def parse_and_validate(self, token: str) -> str:
        """Validate a token and return its principal.

        Raises:
            TokenMalformedError: If the token cannot be parsed
            TokenSignatureError: If the signature does not verify
            TokenExpiredError: If the token is past its expiry
        """
        claims = self._decode(token)

        exp = claims.get("exp")
        if not isinstance(exp, int):
            raise TokenMalformedError("Missing exp claim")

        if int(self.clock()) >= exp:
            raise TokenExpiredError("Token has expired")

        if self.issuer and claims.get("iss") != self.issuer:
            raise TokenSignatureError(f"Invalid issuer: {claims.get('iss')}")

        return claims["sub"]

    def _encode(self, claims: Dict[str, Any]) -> str:
        """Encode claims to JWT."""
        header = {"alg": ALGORITHM, "typ": "JWT"}

        header_b64 = _base64url_encode(json.dumps(header, separators=(",", ":")).encode())
        payload_b64 = _base64url_encode(json.dumps(claims, separators=(",", ":")).encode())

        message = f"{header_b64}.{payload_b64}"
        signature_b64 = _base64url_encode(self._sign(message.encode()))

        return f"{message}.{signature_b64}"

    def _decode(self, token: str) -> Dict[str, Any]:
        """Verify signature and decode claims."""
        if not isinstance(token, str):
            raise TokenMalformedError("Token must be a string")

        parts = token.split(".")
        if len(parts) != 3 or not all(parts):
            raise TokenMalformedError("Invalid token format")

        header_b64, payload_b64, signature_b64 = parts

        try:
            header = json.loads(_base64url_decode(header_b64))
            signature = _base64url_decode(signature_b64)
        except (binascii.Error, ValueError) as e:
            raise TokenMalformedError(f"Decode error: {e}") from e

        if not isinstance(header, dict) or header.get("alg") != ALGORITHM:
            raise TokenMalformedError("Unsupported token algorithm")

        expected = self._sign(f"{header_b64}.{payload_b64}".encode())
        if not hmac.compare_digest(signature, expected):
            raise TokenSignatureError("Invalid signature")

        try:
            claims = json.loads(_base64url_decode(payload_b64))
        except (binascii.Error, ValueError) as e:
            raise TokenMalformedError(f"Decode error: {e}") from e

        if not isinstance(claims, dict) or not isinstance(claims.get("sub"), str):
            raise TokenMalformedError("Missing sub claim")

        return claims

    def _sign(self, message: bytes) -> bytes:
        return hmac.new(self._key.secret, message, hashlib.sha256).digest()


def _base64url_encode(data: bytes) -> str:
    """Base64URL encode bytes."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


def _base64url_decode(data: str) -> bytes:
    """Base64URL decode to bytes."""
    # Add padding
    padding = 4 - len(data) % 4
    if padding != 4:
        data += "=" * padding
    return base64.urlsafe_b64decode(data)


__all__ = [
    "ConfigurationError",
    "IssuedToken",
    "SessionTokenIssuer",
    "SigningKey",
    "TokenError",
    "TokenExpiredError",
    "TokenMalformedError",
    "TokenSignatureError",
]
