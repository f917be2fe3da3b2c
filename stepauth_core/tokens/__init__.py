"""StepAuth Tokens - Session token issuance.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from stepauth_core.tokens.session import (
    ConfigurationError,
    IssuedToken,
    SessionTokenIssuer,
    SigningKey,
    TokenError,
    TokenExpiredError,
    TokenMalformedError,
    TokenSignatureError,
)

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
