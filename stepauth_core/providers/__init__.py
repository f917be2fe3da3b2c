"""StepAuth Providers - Primary credential checks.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from stepauth_core.providers.base import CredentialProvider, ProviderResult
from stepauth_core.providers.local import LocalProvider, PasswordHasher

__all__ = [
    "CredentialProvider",
    "ProviderResult",
    "LocalProvider",
    "PasswordHasher",
]
