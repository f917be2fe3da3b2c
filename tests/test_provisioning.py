"""Tests for TOTP secret generation and provisioning URIs."""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlparse

from stepauth_core.mfa.otp import decode_secret
from stepauth_core.mfa.provisioning import build_provisioning_uri, generate_secret

BASE32 = re.compile(r"^[A-Z2-7]+$")


class TestGenerateSecret:

    def test_format(self):
        secret = generate_secret()

        assert len(secret) == 32
        assert "=" not in secret
        assert BASE32.match(secret)

    def test_160_bits(self):
        assert len(decode_secret(generate_secret())) == 20

    def test_unique(self):
        assert len({generate_secret() for _ in range(50)}) == 50


class TestProvisioningUri:

    def test_structure(self):
        uri = build_provisioning_uri("StepAuth", "a@x.com", "JBSWY3DPEHPK3PXP")
        parsed = urlparse(uri)
        params = parse_qs(parsed.query)

        assert parsed.scheme == "otpauth"
        assert parsed.netloc == "totp"
        assert parsed.path == "/StepAuth:a%40x.com"
        assert params["secret"] == ["JBSWY3DPEHPK3PXP"]
        assert params["issuer"] == ["StepAuth"]
        assert params["algorithm"] == ["SHA1"]
        assert params["digits"] == ["6"]
        assert params["period"] == ["30"]

    def test_full_percent_encoding(self):
        """Spaces and reserved characters in issuer and label are encoded."""
        uri = build_provisioning_uri("My App & Co", "jane doe/ops", "JBSWY3DPEHPK3PXP")

        assert uri.startswith("otpauth://totp/My%20App%20%26%20Co:jane%20doe%2Fops?")
        assert "issuer=My%20App%20%26%20Co" in uri
        assert " " not in uri
        assert "+" not in uri

    def test_custom_period(self):
        uri = build_provisioning_uri("StepAuth", "a@x.com", "JBSWY3DPEHPK3PXP", period=60)
        assert parse_qs(urlparse(uri).query)["period"] == ["60"]
