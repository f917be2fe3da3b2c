"""StepAuth SMS Challenges - Out-of-band one-time codes.

Provides short-lived SMS codes for step-up authentication:
- Uniform 6-digit codes from a CSPRNG
- At most one live challenge per principal (a new one replaces the old)
- Single use on success, retry allowed on mismatch
- Lazy expiry on verification, optional background sweep

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import hmac
import logging
import secrets
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from stepauth_core.storage import InMemoryKeyValueStore, KeyedLock, KeyValueStore

# Configure logging
logger = logging.getLogger(__name__)

CODE_DIGITS = 6
DEFAULT_TTL = 300  # 5 minutes


class SMSVerification(Enum):
    """Outcome of an SMS code check."""

    VERIFIED = "verified"
    NO_CHALLENGE = "no_challenge"
    EXPIRED = "expired"
    MISMATCH = "mismatch"


@dataclass(frozen=True)
class SMSChallenge:
    """Outstanding SMS code for a principal."""

    principal: str
    code: str
    expires_at: float  # Unix timestamp

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


def generate_sms_code(digits: int = CODE_DIGITS) -> str:
    """Uniformly distributed numeric code, zero-padded."""
    return str(secrets.randbelow(10 ** digits)).zfill(digits)


class SMSChallengeStore:
    """Issues and consumes SMS challenges."""

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        locks: Optional[KeyedLock] = None,
        ttl: int = DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize challenge store.

        Args:
            store: Backing record store
            locks: Per-principal lock table
            ttl: Code lifetime in seconds
            clock: Source of Unix time
        """
        self.store = store or InMemoryKeyValueStore()
        self.locks = locks or KeyedLock()
        self.ttl = ttl
        self.clock = clock

    def issue(self, principal: str) -> str:
        """Issue a fresh code, replacing any outstanding one.

        Returns:
            Plaintext code for out-of-band delivery
        """
        challenge = SMSChallenge(
            principal=principal,
            code=generate_sms_code(),
            expires_at=self.clock() + self.ttl,
        )

        with self.locks.hold(principal):
            self.store.put(principal, challenge)

        logger.info(f"SMS challenge issued for {principal}")
        return challenge.code

    def verify(self, principal: str, submitted: str) -> SMSVerification:
        """Check a submitted code.

        Expired challenges are removed when detected. A mismatch keeps the
        challenge so the user can retry within its lifetime; a match
        removes it before returning, so a code is accepted at most once.
        """
        with self.locks.hold(principal):
            challenge: Optional[SMSChallenge] = self.store.get(principal)
            if challenge is None:
                return SMSVerification.NO_CHALLENGE

            if challenge.is_expired(self.clock()):
                self.store.compare_and_swap(principal, challenge, None)
                logger.info(f"Expired SMS challenge discarded for {principal}")
                return SMSVerification.EXPIRED

            code = (submitted or "").strip()
            if not hmac.compare_digest(code.encode(), challenge.code.encode()):
                return SMSVerification.MISMATCH

            if not self.store.compare_and_swap(principal, challenge, None):
                # Replaced or consumed concurrently
                return SMSVerification.NO_CHALLENGE

            return SMSVerification.VERIFIED

    def revoke(self, principal: str) -> bool:
        """Drop any outstanding challenge."""
        with self.locks.hold(principal):
            return self.store.delete(principal)

    def has_challenge(self, principal: str) -> bool:
        challenge = self.store.get(principal)
        return challenge is not None and not challenge.is_expired(self.clock())

    def sweep_expired(self) -> int:
        """Remove expired challenges.

        Returns:
            Number of challenges removed
        """
        now = self.clock()
        removed = 0

        for principal, challenge in self.store.items():
            if challenge.is_expired(now):
                # Only remove the exact record we saw expire
                if self.store.compare_and_swap(principal, challenge, None):
                    removed += 1

        return removed


class ChallengeSweeper:
    """Background thread that periodically evicts expired challenges.

    Memory hygiene only: expiry is always re-checked on verification.
    """

    def __init__(self, target: Any, interval: float = 300):
        """Initialize sweeper.

        Args:
            target: Anything with a ``sweep_expired() -> int`` method
            interval: Seconds between sweeps
        """
        self.target = target
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start background sweep thread."""
        if self.running:
            return

        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="sms-challenge-sweeper", daemon=True)
        self._thread.start()
        logger.info("SMS challenge sweeper started")

    def stop(self) -> None:
        """Stop background sweep thread."""
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None
        logger.info("SMS challenge sweeper stopped")

    def _loop(self) -> None:
        while not self._stop.is_set():
            try:
                count = self.target.sweep_expired()
                if count > 0:
                    logger.info(f"Swept {count} expired records")
            except Exception as e:
                logger.error(f"SMS challenge sweep error: {e}")

            self._stop.wait(self.interval)


__all__ = [
    "ChallengeSweeper",
    "SMSChallenge",
    "SMSChallengeStore",
    "SMSVerification",
    "generate_sms_code",
]
