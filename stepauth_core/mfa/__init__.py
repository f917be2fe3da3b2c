"""StepAuth MFA - Multi-Factor Authentication.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from stepauth_core.mfa.otp import OTPSecretError, TOTPVerifier, compute_code, totp_counter
from stepauth_core.mfa.provisioning import build_provisioning_uri, generate_secret
from stepauth_core.mfa.state import MFAConfiguration, MFANotInitializedError, MFAStateStore
from stepauth_core.mfa.sms import ChallengeSweeper, SMSChallengeStore, SMSVerification
from stepauth_core.mfa.backup import BackupCodesManager, BackupCodeSet

__all__ = [
    "OTPSecretError",
    "TOTPVerifier",
    "compute_code",
    "totp_counter",
    "build_provisioning_uri",
    "generate_secret",
    "MFAConfiguration",
    "MFANotInitializedError",
    "MFAStateStore",
    "ChallengeSweeper",
    "SMSChallengeStore",
    "SMSVerification",
    "BackupCodesManager",
    "BackupCodeSet",
]
