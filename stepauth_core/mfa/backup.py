"""StepAuth Backup Codes - Recovery Code Management.

Provides backup/recovery codes for MFA:
- One-time use codes
- Secure generation
- Hashed storage
- Regeneration (invalidates the previous set)

Backup codes provide a fallback when the primary MFA method
is unavailable (lost phone, broken authenticator, etc.)

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import FrozenSet, List, Optional, Tuple

from stepauth_core.storage import InMemoryKeyValueStore, KeyedLock, KeyValueStore, update_record

# Configure logging
logger = logging.getLogger(__name__)


def generate_backup_code() -> str:
    """Generate a code in the format XXXX-XXXX-XXXX."""
    return "-".join(secrets.token_hex(2).upper() for _ in range(3))


def hash_backup_code(code: str) -> str:
    """Hash code for secure storage."""
    # Normalize code (remove dashes and spaces, uppercase)
    normalized = code.replace("-", "").replace(" ", "").upper()
    return hashlib.sha256(normalized.encode()).hexdigest()


@dataclass(frozen=True)
class BackupCodeSet:
    """Set of backup codes for a principal."""

    principal: str
    code_hashes: Tuple[str, ...] = ()
    used_hashes: FrozenSet[str] = field(default_factory=frozenset)
    created_at: datetime = field(default_factory=datetime.now)
    generation_count: int = 1

    @property
    def remaining_codes(self) -> int:
        """Get count of remaining valid codes."""
        return len(self.code_hashes) - len(self.used_hashes)

    def find(self, code: str) -> Optional[str]:
        """Return the stored hash matching ``code`` if still unused."""
        candidate = hash_backup_code(code)
        match = None
        for code_hash in self.code_hashes:
            if hmac.compare_digest(code_hash, candidate):
                match = code_hash

        if match is None or match in self.used_hashes:
            return None
        return match


class BackupCodesManager:
    """Manages backup codes for MFA recovery."""

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        locks: Optional[KeyedLock] = None,
        num_codes: int = 10,
    ):
        """Initialize backup codes manager.

        Args:
            store: Backing record store
            locks: Per-principal lock table
            num_codes: Number of codes to generate
        """
        self.store = store or InMemoryKeyValueStore()
        self.locks = locks or KeyedLock()
        self.num_codes = num_codes

    def generate(self, principal: str) -> List[str]:
        """Generate a fresh set of codes, invalidating any previous set.

        Returns:
            Plaintext codes (shown to the user once, never stored)
        """
        plaintext_codes = [generate_backup_code() for _ in range(self.num_codes)]
        hashes = tuple(hash_backup_code(code) for code in plaintext_codes)

        with self.locks.hold(principal):
            update_record(
                self.store,
                principal,
                lambda existing: BackupCodeSet(
                    principal=principal,
                    code_hashes=hashes,
                    generation_count=(existing.generation_count + 1) if existing else 1,
                ),
            )

        logger.info(f"Generated {len(plaintext_codes)} backup codes for {principal}")
        return plaintext_codes

    def consume(self, principal: str, code: str) -> bool:
        """Redeem a code. Each code succeeds at most once.

        Returns:
            True if the code was valid and is now used
        """
        with self.locks.hold(principal):
            code_set: Optional[BackupCodeSet] = self.store.get(principal)
            if code_set is None:
                return False

            match = code_set.find(code)
            if match is None:
                return False

            updated = replace(code_set, used_hashes=code_set.used_hashes | {match})
            if not self.store.compare_and_swap(principal, code_set, updated):
                return False

        logger.info(f"Backup code used for {principal}, {updated.remaining_codes} remaining")
        return True

    def remaining(self, principal: str) -> int:
        """Count unused codes."""
        code_set = self.store.get(principal)
        return code_set.remaining_codes if code_set else 0

    def delete(self, principal: str) -> bool:
        """Delete code set for principal."""
        with self.locks.hold(principal):
            return self.store.delete(principal)


__all__ = [
    "BackupCodeSet",
    "BackupCodesManager",
    "generate_backup_code",
    "hash_backup_code",
]
