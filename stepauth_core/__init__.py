"""StepAuth - Multi-Factor Authentication for BlackRoad OS.

StepAuth authenticates a principal against a primary credential check and
steps up to a second factor before issuing a bearer session token:
- Primary credential check through pluggable providers
- TOTP (RFC 6238) with enrollment confirmation
- SMS one-time codes, single use, 5 minute lifetime
- Backup codes for account recovery
- Stateless HS256 session tokens (24 hour validity)

Architecture:
    ┌─────────────────────────────────────────────────────────────────────┐
    │                        StepAuth Engine                             │
    ├─────────────────────────────────────────────────────────────────────┤
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐                 │
    │  │ Credential  │  │  MFA State  │  │    Token    │                 │
    │  │  Provider   │──│    Store    │──│   Issuer    │                 │
    │  └─────────────┘  └─────────────┘  └─────────────┘                 │
    │         │               │               │                           │
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐                 │
    │  │  OTP Codec  │  │    SMS      │  │   Keyed     │                 │
    │  │ Provisioner │──│ Challenges  │──│   Storage   │                 │
    │  └─────────────┘  └─────────────┘  └─────────────┘                 │
    └─────────────────────────────────────────────────────────────────────┘

Usage:
    from stepauth_core import StepAuth, AuthConfig, LocalProvider

    provider = LocalProvider()
    provider.add_user("user@example.com", "password123")

    auth = StepAuth(AuthConfig(signing_key=KEY), provider=provider)

    result = auth.authenticate("user@example.com", "password123")
    if result.state is LoginState.AWAITING_SECOND_FACTOR:
        result = auth.submit_second_factor(result.mfa_token, code)

    if result.success:
        token = result.access_token

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "BlackRoad OS, Inc."
__email__ = "engineering@blackroad.io"

# Core exports
from stepauth_core.engine import (
    AuthConfig,
    AuthResult,
    AuthStatus,
    EnrollmentResult,
    LoginState,
    SecondFactor,
    StepAuth,
    create_auth,
)
from stepauth_core.storage import InMemoryKeyValueStore, KeyedLock, KeyValueStore, StorageError

# Token exports
from stepauth_core.tokens.session import (
    ConfigurationError,
    SessionTokenIssuer,
    SigningKey,
    TokenError,
)

# MFA exports
from stepauth_core.mfa.state import MFAConfiguration, MFAStateStore
from stepauth_core.mfa.sms import SMSChallengeStore, SMSVerification
from stepauth_core.mfa.backup import BackupCodesManager

# Provider exports
from stepauth_core.providers.base import CredentialProvider, ProviderResult
from stepauth_core.providers.local import LocalProvider

# SMS transport exports
from stepauth_core.sms.delivery import DeliveryResult, SMSSender

__all__ = [
    # Version
    "__version__",

    # Core
    "StepAuth",
    "AuthConfig",
    "AuthResult",
    "AuthStatus",
    "EnrollmentResult",
    "LoginState",
    "SecondFactor",
    "create_auth",

    # Storage
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "KeyedLock",
    "StorageError",

    # Tokens
    "SessionTokenIssuer",
    "SigningKey",
    "TokenError",
    "ConfigurationError",

    # MFA
    "MFAConfiguration",
    "MFAStateStore",
    "SMSChallengeStore",
    "SMSVerification",
    "BackupCodesManager",

    # Providers
    "CredentialProvider",
    "ProviderResult",
    "LocalProvider",

    # SMS transport
    "SMSSender",
    "DeliveryResult",
]
