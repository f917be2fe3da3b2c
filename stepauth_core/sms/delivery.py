"""StepAuth SMS Delivery - Out-of-band code transport.

The engine only knows the ``SMSSender`` interface. Real transports
(carrier APIs, SMS gateways) live outside this package; they must bound
their own network calls with a timeout and report a timeout as a failed
delivery.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from stepauth_core.mfa.state import mask_phone_number

# Configure logging
logger = logging.getLogger(__name__)


class SMSDeliveryError(Exception):
    """Transport could not hand the message over."""
    pass


@dataclass
class DeliveryResult:
    """Result of a delivery attempt."""

    delivered: bool
    provider_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def sent(cls, provider_id: Optional[str] = None) -> DeliveryResult:
        """Create success result."""
        return cls(delivered=True, provider_id=provider_id)

    @classmethod
    def failed(cls, error: str) -> DeliveryResult:
        """Create failure result."""
        return cls(delivered=False, error=error)


class SMSSender(ABC):
    """Abstract SMS transport."""

    @abstractmethod
    def send(self, phone_number: str, message: str) -> DeliveryResult:
        """Send a text message.

        Args:
            phone_number: Destination number
            message: Message body

        Returns:
            Delivery result. Implementations may also raise
            ``SMSDeliveryError``; both are reported as delivery failures.
        """
        pass


class LoggingSMSSender(SMSSender):
    """Development sender that only logs the (masked) destination."""

    def send(self, phone_number: str, message: str) -> DeliveryResult:
        logger.info(f"SMS to {mask_phone_number(phone_number)} ({len(message)} chars)")
        return DeliveryResult.sent(provider_id="log")


@dataclass
class SentMessage:
    """Record of a sent message for test assertions."""

    phone_number: str
    message: str
    sent_at: datetime = field(default_factory=datetime.now)


class InMemorySMSSender(SMSSender):
    """Test double that keeps sent messages in a list.

    Set ``fail_with`` to make every send fail with that error text.
    """

    def __init__(self):
        self.sent: List[SentMessage] = []
        self.fail_with: Optional[str] = None

    def send(self, phone_number: str, message: str) -> DeliveryResult:
        if self.fail_with:
            return DeliveryResult.failed(self.fail_with)

        self.sent.append(SentMessage(phone_number, message))
        return DeliveryResult.sent(provider_id=f"mem-{len(self.sent)}")

    @property
    def last_message(self) -> Optional[SentMessage]:
        return self.sent[-1] if self.sent else None


__all__ = [
    "DeliveryResult",
    "InMemorySMSSender",
    "LoggingSMSSender",
    "SMSDeliveryError",
    "SMSSender",
    "SentMessage",
]
