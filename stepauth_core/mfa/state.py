"""StepAuth MFA State - Per-principal second-factor configuration.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional

from stepauth_core.storage import InMemoryKeyValueStore, KeyedLock, KeyValueStore, update_record

# Configure logging
logger = logging.getLogger(__name__)


class MFANotInitializedError(Exception):
    """TOTP enable attempted before a secret was provisioned."""
    pass


@dataclass(frozen=True)
class MFAConfiguration:
    """Second-factor settings for one principal.

    ``totp_enabled`` implies ``totp_secret`` is set.
    """

    principal: str
    totp_enabled: bool = False
    totp_secret: Optional[str] = None  # Base32 encoded
    sms_enabled: bool = False
    phone_number: Optional[str] = None
    totp_enabled_at: Optional[datetime] = None

    @property
    def sms_ready(self) -> bool:
        """SMS is enabled and there is a number to send to."""
        return self.sms_enabled and bool(self.phone_number)

    @property
    def has_second_factor(self) -> bool:
        return self.totp_enabled or self.sms_ready

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (without secret)."""
        return {
            "principal": self.principal,
            "totp_enabled": self.totp_enabled,
            "totp_pending": self.totp_secret is not None and not self.totp_enabled,
            "totp_enabled_at": self.totp_enabled_at.isoformat() if self.totp_enabled_at else None,
            "sms_enabled": self.sms_enabled,
            "phone_number": mask_phone_number(self.phone_number),
        }


def mask_phone_number(phone_number: Optional[str]) -> Optional[str]:
    """Mask all but the last two digits of a phone number."""
    if not phone_number:
        return phone_number
    if len(phone_number) <= 2:
        return "*" * len(phone_number)
    return "*" * (len(phone_number) - 2) + phone_number[-2:]


class MFAStateStore:
    """Reads and mutates MFA configuration records.

    Mutations of one principal are serialized; different principals are
    independent.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        locks: Optional[KeyedLock] = None,
    ):
        """Initialize state store.

        Args:
            store: Backing record store
            locks: Per-principal lock table
        """
        self.store = store or InMemoryKeyValueStore()
        self.locks = locks or KeyedLock()

    def get(self, principal: str) -> MFAConfiguration:
        """Get configuration, creating the default (all disabled) record on first use."""
        config = self.store.get(principal)
        if config is not None:
            return config

        with self.locks.hold(principal):
            return update_record(
                self.store,
                principal,
                lambda current: current or MFAConfiguration(principal=principal),
            )

    def set_totp_secret(self, principal: str, secret: str) -> MFAConfiguration:
        """Store a provisioned (not yet enabled) secret."""
        if not secret:
            raise ValueError("secret must not be empty")

        return self._update(principal, lambda c: replace(c, totp_secret=secret))

    def enable_totp(self, principal: str) -> MFAConfiguration:
        """Enable TOTP for a principal that already has a secret.

        Raises:
            MFANotInitializedError: If no secret has been provisioned
        """
        def mutate(config: MFAConfiguration) -> MFAConfiguration:
            if not config.totp_secret:
                raise MFANotInitializedError(f"No TOTP secret provisioned for {principal}")
            if config.totp_enabled:
                return config
            return replace(config, totp_enabled=True, totp_enabled_at=datetime.now())

        config = self._update(principal, mutate)
        logger.info(f"TOTP enabled for {principal}")
        return config

    def disable_totp(self, principal: str) -> MFAConfiguration:
        """Disable TOTP and forget the secret."""
        config = self._update(
            principal,
            lambda c: replace(c, totp_enabled=False, totp_secret=None, totp_enabled_at=None),
        )
        logger.info(f"TOTP disabled for {principal}")
        return config

    def set_sms_settings(
        self,
        principal: str,
        phone_number: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> MFAConfiguration:
        """Partial update of SMS settings; only supplied fields change."""
        def mutate(config: MFAConfiguration) -> MFAConfiguration:
            changes: Dict[str, Any] = {}
            if phone_number is not None:
                changes["phone_number"] = phone_number
            if enabled is not None:
                changes["sms_enabled"] = enabled
            return replace(config, **changes) if changes else config

        return self._update(principal, mutate)

    def _update(self, principal: str, mutate) -> MFAConfiguration:
        with self.locks.hold(principal):
            return update_record(
                self.store,
                principal,
                lambda current: mutate(current or MFAConfiguration(principal=principal)),
            )


__all__ = [
    "MFAConfiguration",
    "MFANotInitializedError",
    "MFAStateStore",
    "mask_phone_number",
]
