"""StepAuth Local Provider - In-process password check.

A minimal provider for development and tests: principals and PBKDF2
password hashes kept in memory. It has no password policy or lockout.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
import threading
from typing import Dict, Optional

from stepauth_core.providers.base import CredentialProvider, ProviderResult

# Configure logging
logger = logging.getLogger(__name__)


class PasswordHasher:
    """PBKDF2-SHA256 password hashing utility."""

    def __init__(self, iterations: int = 600000, salt_length: int = 32):
        """Initialize hasher.

        Args:
            iterations: Iteration count for PBKDF2
            salt_length: Salt length in bytes
        """
        self.iterations = iterations
        self.salt_length = salt_length

    def hash(self, password: str) -> str:
        """Hash a password.

        Returns:
            ``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``
        """
        salt = secrets.token_bytes(self.salt_length)
        hash_bytes = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, self.iterations)
        return f"pbkdf2_sha256${self.iterations}${salt.hex()}${hash_bytes.hex()}"

    def verify(self, password: str, hash_string: str) -> bool:
        """Verify a password against hash."""
        parts = hash_string.split("$")
        if len(parts) != 4 or parts[0] != "pbkdf2_sha256":
            return False

        _, iterations, salt_hex, hash_hex = parts
        try:
            salt = bytes.fromhex(salt_hex)
            stored_hash = bytes.fromhex(hash_hex)
            rounds = int(iterations)
        except ValueError as e:
            logger.error(f"Corrupt password hash: {e}")
            return False

        computed_hash = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, rounds)
        return hmac.compare_digest(computed_hash, stored_hash)


class LocalProvider(CredentialProvider):
    """Principal/password table held in memory."""

    provider_id = "local"

    def __init__(self, hasher: Optional[PasswordHasher] = None):
        """Initialize local provider.

        Args:
            hasher: Password hasher
        """
        self.hasher = hasher or PasswordHasher()
        self._users: Dict[str, str] = {}  # principal -> password hash
        self._lock = threading.RLock()
        # Compared against when the principal is unknown, so both paths cost the same
        self._dummy_hash = self.hasher.hash(secrets.token_urlsafe(16))

    def add_user(self, principal: str, password: str) -> None:
        """Create or replace an account."""
        with self._lock:
            self._users[principal.lower()] = self.hasher.hash(password)
        logger.info(f"Local account registered: {principal}")

    def remove_user(self, principal: str) -> bool:
        with self._lock:
            return self._users.pop(principal.lower(), None) is not None

    def verify(self, principal: str, password: str) -> ProviderResult:
        key = (principal or "").strip().lower()
        stored = self._users.get(key)

        if stored is None:
            self.hasher.verify(password or "", self._dummy_hash)
            return ProviderResult.failure_result("Invalid credentials", provider_id=self.provider_id)

        if not self.hasher.verify(password or "", stored):
            return ProviderResult.failure_result("Invalid credentials", provider_id=self.provider_id)

        return ProviderResult.success_result(key, provider_id=self.provider_id)


__all__ = [
    "LocalProvider",
    "PasswordHasher",
]
