"""StepAuth Base Provider - Primary credential check.

Defines the interface the engine uses to validate a principal's primary
credential. How the check is done (password hash, external IdP,
directory bind) is up to the provider.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

# Configure logging
logger = logging.getLogger(__name__)


@dataclass
class ProviderResult:
    """Primary credential check result."""

    success: bool
    principal: Optional[str] = None
    message: Optional[str] = None

    # Provider metadata
    provider_id: Optional[str] = None

    @classmethod
    def success_result(cls, principal: str, **kwargs) -> ProviderResult:
        """Create success result."""
        return cls(success=True, principal=principal, **kwargs)

    @classmethod
    def failure_result(cls, message: Optional[str] = None, **kwargs) -> ProviderResult:
        """Create failure result."""
        return cls(success=False, message=message, **kwargs)


class CredentialProvider(ABC):
    """Abstract base class for primary credential checks."""

    provider_id: str = "custom"

    @abstractmethod
    def verify(self, principal: str, password: str) -> ProviderResult:
        """Check a principal's primary credential.

        Args:
            principal: Account identifier as entered
            password: Primary secret

        Returns:
            Result carrying the canonical principal on success. Unknown
            accounts and wrong secrets must be indistinguishable.
        """
        pass


__all__ = [
    "CredentialProvider",
    "ProviderResult",
]
