"""StepAuth SMS - Out-of-band message delivery.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from stepauth_core.sms.delivery import (
    DeliveryResult,
    InMemorySMSSender,
    LoggingSMSSender,
    SMSDeliveryError,
    SMSSender,
)

__all__ = [
    "DeliveryResult",
    "InMemorySMSSender",
    "LoggingSMSSender",
    "SMSDeliveryError",
    "SMSSender",
]
