"""StepAuth Engine - Multi-factor login orchestration.

Provides the main StepAuth class that drives a login from the primary
credential check to a signed session token:
- Primary credential check through a pluggable provider
- Step-up to an SMS code or a TOTP code when enabled
- Backup code fallback for a pending second factor
- TOTP enrollment, SMS settings and backup code management
- Session token issuance and validation

Login states::

    AWAITING_PRIMARY ──> PRIMARY_REJECTED
           │
           ├──> AWAITING_SECOND_FACTOR ──> SECOND_FACTOR_REJECTED
           │              │
           └──────────────┴──> AUTHENTICATED

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import os
import re
import secrets
import time
from dataclasses import asdict, dataclass, field, fields, replace
from datetime import datetime
from enum import Enum, auto
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml

from stepauth_core.mfa.backup import BackupCodesManager
from stepauth_core.mfa.otp import TOTPVerifier
from stepauth_core.mfa.provisioning import build_provisioning_uri, generate_secret
from stepauth_core.mfa.sms import ChallengeSweeper, SMSChallengeStore, SMSVerification
from stepauth_core.mfa.state import MFANotInitializedError, MFAStateStore
from stepauth_core.providers.base import CredentialProvider
from stepauth_core.providers.local import LocalProvider
from stepauth_core.sms.delivery import DeliveryResult, LoggingSMSSender, SMSSender
from stepauth_core.storage import InMemoryKeyValueStore, KeyedLock, KeyValueStore
from stepauth_core.tokens.session import (
    ConfigurationError,
    SessionTokenIssuer,
    SigningKey,
    TokenError,
    TokenExpiredError,
)

# Configure logging
logger = logging.getLogger(__name__)

# Default paths
DEFAULT_CONFIG_PATH = Path.home() / ".stepauth" / "config.yaml"

PHONE_NUMBER_PATTERN = re.compile(r"^\+?[1-9]\d{6,14}$")

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
INVALID_CODE_MESSAGE = "Invalid verification code"


class AuthStatus(Enum):
    """Outcome of an engine operation."""

    SUCCESS = auto()
    MFA_REQUIRED = auto()
    INVALID_CREDENTIALS = auto()
    MFA_NOT_INITIALIZED = auto()
    MFA_ALREADY_ENABLED = auto()
    INVALID_CODE = auto()
    CHALLENGE_EXPIRED = auto()
    NO_ACTIVE_CHALLENGE = auto()
    DELIVERY_FAILED = auto()
    INVALID_PHONE_NUMBER = auto()
    TOKEN_INVALID = auto()
    TOKEN_EXPIRED = auto()


class LoginState(Enum):
    """Login state machine states."""

    AWAITING_PRIMARY = "awaiting_primary"
    PRIMARY_REJECTED = "primary_rejected"
    AWAITING_SECOND_FACTOR = "awaiting_second_factor"
    SECOND_FACTOR_REJECTED = "second_factor_rejected"
    AUTHENTICATED = "authenticated"


class SecondFactor(Enum):
    """Second factor kinds."""

    SMS = "sms"
    TOTP = "totp"


# Detailed messages, only shown when AuthConfig.detailed_mfa_errors is set
_DETAILED_MESSAGES = {
    AuthStatus.INVALID_CODE: INVALID_CODE_MESSAGE,
    AuthStatus.CHALLENGE_EXPIRED: "Verification code has expired",
    AuthStatus.NO_ACTIVE_CHALLENGE: "No verification in progress",
    AuthStatus.MFA_NOT_INITIALIZED: "Second factor is no longer enabled",
}

_SMS_OUTCOMES = {
    SMSVerification.NO_CHALLENGE: AuthStatus.NO_ACTIVE_CHALLENGE,
    SMSVerification.EXPIRED: AuthStatus.CHALLENGE_EXPIRED,
    SMSVerification.MISMATCH: AuthStatus.INVALID_CODE,
}


@dataclass
class AuthConfig:
    """Authentication configuration."""

    # Token settings
    signing_key: str = ""
    signing_key_env: str = "STEPAUTH_SIGNING_KEY"
    token_issuer: Optional[str] = None
    token_ttl: int = 86400  # 24 hours

    # TOTP settings
    mfa_issuer: str = "StepAuth"
    totp_window: int = 2  # +/-60 seconds
    totp_period: int = 30

    # SMS settings
    sms_code_ttl: int = 300  # 5 minutes

    # Login flow
    mfa_token_ttl: int = 300  # 5 minutes
    factor_priority: List[str] = field(default_factory=lambda: ["sms", "totp"])
    detailed_mfa_errors: bool = False
    backup_code_count: int = 10

    # Maintenance
    sweep_interval: int = 300

    @classmethod
    def from_file(cls, path: Path) -> AuthConfig:
        """Load config from YAML file."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_file(self, path: Path) -> None:
        """Save config to YAML file (the signing key is never written)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = asdict(self)
        data.pop("signing_key")

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)

    def resolve_signing_key(self) -> SigningKey:
        """Load the signing key from config, falling back to the environment."""
        value = self.signing_key or os.environ.get(self.signing_key_env, "")
        return SigningKey.load(value)

    def factor_order(self) -> List[SecondFactor]:
        """Parsed ``factor_priority``."""
        try:
            return [SecondFactor(name.lower()) for name in self.factor_priority]
        except ValueError as e:
            raise ConfigurationError(f"Unknown second factor in factor_priority: {e}") from e

    def validate(self) -> None:
        """Check value types and ranges.

        Raises:
            ConfigurationError: On the first invalid setting
        """
        for name in (
            "token_ttl", "totp_window", "totp_period", "sms_code_ttl",
            "mfa_token_ttl", "backup_code_count", "sweep_interval",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")

        for name in ("mfa_issuer", "signing_key_env"):
            if not isinstance(getattr(self, name), str):
                raise ConfigurationError(f"{name} must be a string")

        for name in ("token_ttl", "totp_period", "sms_code_ttl", "mfa_token_ttl", "sweep_interval"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive")

        if self.totp_window < 0:
            raise ConfigurationError("totp_window must be >= 0")

        if self.backup_code_count < 1:
            raise ConfigurationError("backup_code_count must be >= 1")

        if not isinstance(self.factor_priority, list) or not all(
            isinstance(name, str) for name in self.factor_priority
        ):
            raise ConfigurationError("factor_priority must be a list of factor names")

        self.factor_order()


@dataclass
class AuthResult:
    """Result of a login step or token check."""

    success: bool
    status: AuthStatus
    state: Optional[LoginState] = None
    principal: Optional[str] = None
    factor: Optional[SecondFactor] = None
    mfa_token: Optional[str] = None  # Addresses the pending second factor
    access_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class EnrollmentResult:
    """Result of an MFA settings operation."""

    success: bool
    status: AuthStatus
    principal: str
    secret: Optional[str] = None
    provisioning_uri: Optional[str] = None
    backup_codes: List[str] = field(default_factory=list)
    message: Optional[str] = None


@dataclass(frozen=True)
class PendingLogin:
    """A login that passed the primary check and awaits its second factor."""

    mfa_token: str
    principal: str
    factor: SecondFactor
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


def _memory_store(namespace: str) -> KeyValueStore:
    return InMemoryKeyValueStore()


# =============================================================================
# Main StepAuth Engine
# =============================================================================


class StepAuth:
    """Multi-factor authentication engine."""

    def __init__(
        self,
        config: Optional[AuthConfig] = None,
        provider: Optional[CredentialProvider] = None,
        sms_sender: Optional[SMSSender] = None,
        signing_key: Optional[str] = None,
        config_path: Optional[Path] = None,
        store_factory: Callable[[str], KeyValueStore] = _memory_store,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize StepAuth engine.

        Args:
            config: Auth configuration
            provider: Primary credential check (defaults to an empty LocalProvider)
            sms_sender: SMS transport (defaults to logging only)
            signing_key: Token signing key (overrides config)
            config_path: Path to config file
            store_factory: Builds the record store for a namespace
                ("mfa", "sms", "pending", "backup")
            clock: Source of Unix time

        Raises:
            ConfigurationError: If the signing key is missing or too short,
                or a setting is out of range
        """
        # Load configuration
        if config:
            self.config = config
        elif config_path:
            self.config = AuthConfig.from_file(config_path)
        else:
            self.config = AuthConfig.from_file(DEFAULT_CONFIG_PATH)

        # Override signing key if provided
        if signing_key:
            self.config = replace(self.config, signing_key=signing_key)

        self.config.validate()
        self.clock = clock
        self._factor_order = self.config.factor_order()

        # Collaborators
        self.provider = provider or LocalProvider()
        self.sms_sender = sms_sender or LoggingSMSSender()

        # Per-principal serialization shared by every store
        self.locks = KeyedLock()

        self.mfa_state = MFAStateStore(store_factory("mfa"), self.locks)
        self.challenges = SMSChallengeStore(
            store_factory("sms"),
            self.locks,
            ttl=self.config.sms_code_ttl,
            clock=clock,
        )
        self.backup_codes = BackupCodesManager(
            store_factory("backup"),
            self.locks,
            num_codes=self.config.backup_code_count,
        )
        self.pending = store_factory("pending")

        self.totp = TOTPVerifier(
            window=self.config.totp_window,
            period=self.config.totp_period,
            clock=clock,
        )
        self.tokens = SessionTokenIssuer(
            self.config.resolve_signing_key(),
            ttl=self.config.token_ttl,
            issuer=self.config.token_issuer,
            clock=clock,
        )

        self._sweeper = ChallengeSweeper(self, interval=self.config.sweep_interval)

        logger.info("StepAuth engine initialized")

    # -------------------------------------------------------------------------
    # Login
    # -------------------------------------------------------------------------

    def authenticate(self, principal: str, password: str) -> AuthResult:
        """Run the primary check and decide whether a second factor is needed.

        Args:
            principal: Account identifier
            password: Primary credential

        Returns:
            AuthResult in state PRIMARY_REJECTED, AWAITING_SECOND_FACTOR
            (carrying ``mfa_token``) or AUTHENTICATED (carrying the token)
        """
        provider_result = self.provider.verify(principal, password)
        if not provider_result.success:
            logger.warning(f"Primary credential check failed for {principal}")
            return AuthResult(
                success=False,
                status=AuthStatus.INVALID_CREDENTIALS,
                state=LoginState.PRIMARY_REJECTED,
                message=INVALID_CREDENTIALS_MESSAGE,
            )

        principal = provider_result.principal or principal
        mfa = self.mfa_state.get(principal)

        for factor in self._factor_order:
            if factor is SecondFactor.SMS and mfa.sms_ready:
                return self._start_sms_challenge(principal, mfa.phone_number)
            if factor is SecondFactor.TOTP and mfa.totp_enabled:
                return self._await_second_factor(principal, SecondFactor.TOTP)

        return self._authenticated(principal, factor=None)

    def submit_second_factor(self, mfa_token: str, code: str) -> AuthResult:
        """Verify the code for a pending login.

        A wrong code keeps the pending login so the user can retry; an
        expired or missing challenge ends it.
        """
        pending = self._resolve_pending(mfa_token)
        if pending is None:
            return self._second_factor_failure(None, AuthStatus.NO_ACTIVE_CHALLENGE)

        principal = pending.principal

        if pending.factor is SecondFactor.SMS:
            outcome = self.challenges.verify(principal, code)
            if outcome is SMSVerification.VERIFIED:
                return self._complete(pending)

            status = _SMS_OUTCOMES[outcome]
            if outcome is not SMSVerification.MISMATCH:
                self.pending.compare_and_swap(pending.mfa_token, pending, None)
                return self._second_factor_failure(pending, status)
            return self._second_factor_failure(pending, status, retry=True)

        mfa = self.mfa_state.get(principal)
        if not mfa.totp_enabled or not mfa.totp_secret:
            self.pending.compare_and_swap(pending.mfa_token, pending, None)
            return self._second_factor_failure(pending, AuthStatus.MFA_NOT_INITIALIZED)

        if self.totp.verify(mfa.totp_secret, code):
            return self._complete(pending)

        return self._second_factor_failure(pending, AuthStatus.INVALID_CODE, retry=True)

    def submit_backup_code(self, mfa_token: str, code: str) -> AuthResult:
        """Satisfy a pending login with a single-use backup code."""
        pending = self._resolve_pending(mfa_token)
        if pending is None:
            return self._second_factor_failure(None, AuthStatus.NO_ACTIVE_CHALLENGE)

        if not self.backup_codes.consume(pending.principal, code):
            return self._second_factor_failure(pending, AuthStatus.INVALID_CODE, retry=True)

        if pending.factor is SecondFactor.SMS:
            self.challenges.revoke(pending.principal)

        logger.info(f"Backup code accepted for {pending.principal}")
        return self._complete(pending)

    def validate_token(self, token: str) -> AuthResult:
        """Check a session token presented on a later request."""
        try:
            principal = self.tokens.parse_and_validate(token)
        except TokenExpiredError:
            return AuthResult(
                success=False,
                status=AuthStatus.TOKEN_EXPIRED,
                message="Token has expired",
            )
        except TokenError as e:
            logger.debug(f"Token validation failed: {e}")
            return AuthResult(
                success=False,
                status=AuthStatus.TOKEN_INVALID,
                message="Invalid token",
            )

        return AuthResult(
            success=True,
            status=AuthStatus.SUCCESS,
            state=LoginState.AUTHENTICATED,
            principal=principal,
        )

    # -------------------------------------------------------------------------
    # Enrollment and settings
    # -------------------------------------------------------------------------

    def begin_totp_enrollment(self, principal: str) -> EnrollmentResult:
        """Provision a TOTP secret and return its provisioning URI.

        Repeated calls before confirmation return the same secret.
        """
        with self.locks.hold(principal):
            mfa = self.mfa_state.get(principal)
            if mfa.totp_enabled:
                return EnrollmentResult(
                    success=False,
                    status=AuthStatus.MFA_ALREADY_ENABLED,
                    principal=principal,
                    message="TOTP is already enabled",
                )

            secret = mfa.totp_secret
            if not secret:
                secret = generate_secret()
                self.mfa_state.set_totp_secret(principal, secret)
                logger.info(f"TOTP setup initiated for {principal}")

        uri = build_provisioning_uri(
            self.config.mfa_issuer,
            principal,
            secret,
            period=self.config.totp_period,
        )

        return EnrollmentResult(
            success=True,
            status=AuthStatus.SUCCESS,
            principal=principal,
            secret=secret,
            provisioning_uri=uri,
        )

    def confirm_totp_enrollment(self, principal: str, code: str) -> EnrollmentResult:
        """Enable TOTP once the user proves their app produces valid codes."""
        with self.locks.hold(principal):
            mfa = self.mfa_state.get(principal)
            if mfa.totp_enabled:
                return EnrollmentResult(
                    success=False,
                    status=AuthStatus.MFA_ALREADY_ENABLED,
                    principal=principal,
                    message="TOTP is already enabled",
                )

            if not mfa.totp_secret:
                return self._not_initialized(principal)

            if not self.totp.verify(mfa.totp_secret, code):
                logger.warning(f"TOTP enrollment code rejected for {principal}")
                return EnrollmentResult(
                    success=False,
                    status=AuthStatus.INVALID_CODE,
                    principal=principal,
                    message=INVALID_CODE_MESSAGE,
                )

            try:
                self.mfa_state.enable_totp(principal)
            except MFANotInitializedError:
                return self._not_initialized(principal)

        return EnrollmentResult(
            success=True,
            status=AuthStatus.SUCCESS,
            principal=principal,
            message="TOTP enabled",
        )

    def disable_totp(self, principal: str) -> EnrollmentResult:
        """Disable TOTP and discard the secret."""
        with self.locks.hold(principal):
            self.mfa_state.disable_totp(principal)
            self._drop_backup_codes_if_unprotected(principal)

        return EnrollmentResult(
            success=True,
            status=AuthStatus.SUCCESS,
            principal=principal,
            message="TOTP disabled",
        )

    def configure_sms(
        self,
        principal: str,
        phone_number: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> EnrollmentResult:
        """Update SMS settings; only supplied fields change."""
        if phone_number is not None:
            phone_number = normalize_phone_number(phone_number)
            if not PHONE_NUMBER_PATTERN.match(phone_number):
                return EnrollmentResult(
                    success=False,
                    status=AuthStatus.INVALID_PHONE_NUMBER,
                    principal=principal,
                    message="Invalid phone number",
                )

        with self.locks.hold(principal):
            current = self.mfa_state.get(principal)
            if enabled and not (phone_number or current.phone_number):
                return EnrollmentResult(
                    success=False,
                    status=AuthStatus.INVALID_PHONE_NUMBER,
                    principal=principal,
                    message="A phone number is required to enable SMS",
                )

            self.mfa_state.set_sms_settings(principal, phone_number=phone_number, enabled=enabled)
            self._drop_backup_codes_if_unprotected(principal)

        logger.info(f"SMS settings updated for {principal}")
        return EnrollmentResult(
            success=True,
            status=AuthStatus.SUCCESS,
            principal=principal,
            message="SMS settings updated",
        )

    def generate_backup_codes(self, principal: str) -> EnrollmentResult:
        """Issue a fresh set of backup codes, replacing any previous set."""
        with self.locks.hold(principal):
            if not self.mfa_state.get(principal).has_second_factor:
                return self._not_initialized(principal)

            codes = self.backup_codes.generate(principal)

        return EnrollmentResult(
            success=True,
            status=AuthStatus.SUCCESS,
            principal=principal,
            backup_codes=codes,
        )

    def get_mfa_status(self, principal: str) -> Dict[str, Any]:
        """MFA settings summary (never includes the secret)."""
        status = self.mfa_state.get(principal).to_dict()
        status["backup_codes_remaining"] = self.backup_codes.remaining(principal)
        status["sms_challenge_pending"] = self.challenges.has_challenge(principal)
        return status

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    def sweep_expired(self) -> int:
        """Evict expired SMS challenges and pending logins.

        Returns:
            Number of records removed
        """
        removed = self.challenges.sweep_expired()

        now = self.clock()
        for mfa_token, pending in self.pending.items():
            if pending.is_expired(now) and self.pending.compare_and_swap(mfa_token, pending, None):
                removed += 1

        return removed

    def start_maintenance(self) -> None:
        """Start the background sweep thread."""
        self._sweeper.start()

    def stop_maintenance(self) -> None:
        """Stop the background sweep thread."""
        self._sweeper.stop()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _start_sms_challenge(self, principal: str, phone_number: str) -> AuthResult:
        code = self.challenges.issue(principal)
        minutes = max(1, self.config.sms_code_ttl // 60)
        message = (
            f"Your {self.config.mfa_issuer} verification code is {code}. "
            f"It expires in {minutes} minutes."
        )

        try:
            delivery = self.sms_sender.send(phone_number, message)
        except Exception as e:
            # Any transport fault is a delivery failure, never a crash
            delivery = DeliveryResult.failed(str(e) or type(e).__name__)

        if not delivery.delivered:
            self.challenges.revoke(principal)
            logger.error(f"SMS delivery failed for {principal}: {delivery.error}")
            return AuthResult(
                success=False,
                status=AuthStatus.DELIVERY_FAILED,
                state=LoginState.SECOND_FACTOR_REJECTED,
                principal=principal,
                factor=SecondFactor.SMS,
                message="Could not deliver verification code",
            )

        return self._await_second_factor(principal, SecondFactor.SMS)

    def _await_second_factor(self, principal: str, factor: SecondFactor) -> AuthResult:
        pending = PendingLogin(
            mfa_token=secrets.token_urlsafe(32),
            principal=principal,
            factor=factor,
            expires_at=self.clock() + self.config.mfa_token_ttl,
        )
        self.pending.put(pending.mfa_token, pending)

        logger.info(f"Second factor ({factor.value}) required for {principal}")
        return AuthResult(
            success=False,
            status=AuthStatus.MFA_REQUIRED,
            state=LoginState.AWAITING_SECOND_FACTOR,
            principal=principal,
            factor=factor,
            mfa_token=pending.mfa_token,
            message=f"{factor.value.upper()} verification code required",
        )

    def _resolve_pending(self, mfa_token: str) -> Optional[PendingLogin]:
        if not mfa_token:
            return None

        pending: Optional[PendingLogin] = self.pending.get(mfa_token)
        if pending is None:
            return None

        if pending.is_expired(self.clock()):
            self.pending.compare_and_swap(mfa_token, pending, None)
            return None

        return pending

    def _complete(self, pending: PendingLogin) -> AuthResult:
        # Exactly one submission may turn a pending login into a token
        if not self.pending.compare_and_swap(pending.mfa_token, pending, None):
            return self._second_factor_failure(pending, AuthStatus.NO_ACTIVE_CHALLENGE)

        return self._authenticated(pending.principal, factor=pending.factor)

    def _authenticated(self, principal: str, factor: Optional[SecondFactor]) -> AuthResult:
        issued = self.tokens.issue(principal)

        logger.info(f"User authenticated: {principal}")
        return AuthResult(
            success=True,
            status=AuthStatus.SUCCESS,
            state=LoginState.AUTHENTICATED,
            principal=principal,
            factor=factor,
            access_token=issued.token,
            expires_at=issued.expires_at_datetime,
            metadata={"token_type": issued.token_type, "expires_in": issued.expires_in},
        )

    def _second_factor_failure(
        self,
        pending: Optional[PendingLogin],
        status: AuthStatus,
        retry: bool = False,
    ) -> AuthResult:
        if self.config.detailed_mfa_errors:
            message = _DETAILED_MESSAGES.get(status, INVALID_CODE_MESSAGE)
        else:
            message = INVALID_CODE_MESSAGE

        principal = pending.principal if pending else None
        logger.warning(f"Second factor rejected for {principal or 'unknown login'}: {status.name}")

        return AuthResult(
            success=False,
            status=status,
            state=LoginState.SECOND_FACTOR_REJECTED,
            principal=principal,
            factor=pending.factor if pending else None,
            mfa_token=pending.mfa_token if (pending and retry) else None,
            message=message,
        )

    def _not_initialized(self, principal: str) -> EnrollmentResult:
        return EnrollmentResult(
            success=False,
            status=AuthStatus.MFA_NOT_INITIALIZED,
            principal=principal,
            message="No second factor has been set up",
        )

    def _drop_backup_codes_if_unprotected(self, principal: str) -> None:
        if not self.mfa_state.get(principal).has_second_factor:
            if self.backup_codes.delete(principal):
                logger.info(f"Backup codes removed for {principal}, no second factor left")


def normalize_phone_number(phone_number: str) -> str:
    """Strip the separators people type into phone numbers."""
    return re.sub(r"[\s\-().]", "", phone_number)


# =============================================================================
# Factory Functions
# =============================================================================


def create_auth(
    signing_key: Optional[str] = None,
    config_path: Optional[Path] = None,
    provider: Optional[CredentialProvider] = None,
    sms_sender: Optional[SMSSender] = None,
    **kwargs,
) -> StepAuth:
    """Create a StepAuth instance.

    Args:
        signing_key: Token signing key
        config_path: Path to config file
        provider: Primary credential check
        sms_sender: SMS transport
        **kwargs: Additional config options, applied over the file when
            both are given

    Returns:
        Configured StepAuth instance
    """
    config = AuthConfig.from_file(config_path) if config_path else None
    if kwargs:
        config = replace(config, **kwargs) if config else AuthConfig(**kwargs)

    return StepAuth(
        config=config,
        provider=provider,
        sms_sender=sms_sender,
        signing_key=signing_key,
        config_path=config_path,
    )


__all__ = [
    "StepAuth",
    "AuthConfig",
    "AuthResult",
    "AuthStatus",
    "EnrollmentResult",
    "LoginState",
    "PendingLogin",
    "SecondFactor",
    "create_auth",
    "normalize_phone_number",
]
