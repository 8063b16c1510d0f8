"""Tests for Basic auth decoding and credential validation."""

import base64

import pytest

from stagegate.credentials import check_credentials, decode_basic_auth, validate_credentials
from stagegate.errors import (
    ConfigurationIncomplete,
    CredentialMismatch,
    DecodeFailure,
    GateError,
    SchemeMismatch,
)
from stagegate.models import Credentials


def _basic(raw: str) -> str:
    return "Basic " + base64.b64encode(raw.encode("utf-8")).decode("ascii")


class TestDecodeBasicAuth:
    def test_decodes_pair(self):
        creds = decode_basic_auth(_basic("admin:correctpass"))
        assert creds == Credentials("admin", "correctpass")

    @pytest.mark.parametrize(
        "username,password",
        [("admin", "s3cret"), ("ünïcødé", "pässwörd"), ("user name", "with spaces")],
    )
    def test_recovers_original_pair(self, username, password):
        creds = decode_basic_auth(_basic(f"{username}:{password}"))
        assert (creds.username, creds.password) == (username, password)

    def test_password_with_colon_kept(self):
        creds = decode_basic_auth(_basic("admin:pa:ss:word"))
        assert creds.username == "admin"
        assert creds.password == "pa:ss:word"

    def test_scheme_prefix_required(self):
        with pytest.raises(SchemeMismatch):
            decode_basic_auth("Bearer abc.def.ghi")

    def test_scheme_is_case_sensitive(self):
        with pytest.raises(SchemeMismatch):
            decode_basic_auth(_basic("admin:pw").replace("Basic", "basic"))

    @pytest.mark.parametrize("payload", ["!!!not-base64!!!", "YWRtaW4", "%%%%"])
    def test_malformed_base64(self, payload):
        with pytest.raises(DecodeFailure):
            decode_basic_auth(f"Basic {payload}")

    def test_invalid_utf8(self):
        encoded = base64.b64encode(b"\xff\xfe:\xfa").decode("ascii")
        with pytest.raises(DecodeFailure):
            decode_basic_auth(f"Basic {encoded}")

    @pytest.mark.parametrize("raw", ["nocolon", ":password", "admin:", ":", ""])
    def test_empty_fields_rejected(self, raw):
        with pytest.raises(DecodeFailure):
            decode_basic_auth(_basic(raw))

    def test_decode_failure_is_value_error(self):
        with pytest.raises(ValueError):
            decode_basic_auth("Basic ***")

    def test_all_failures_are_gate_errors(self):
        for header in ("Token x", "Basic ***", _basic("admin:")):
            with pytest.raises(GateError):
                decode_basic_auth(header)


class TestCredentials:
    def test_repr_hides_password(self):
        creds = Credentials("admin", "topsecret")
        assert "topsecret" not in repr(creds)
        assert "admin" in repr(creds)


class TestValidateCredentials:
    def test_exact_match(self):
        assert validate_credentials(Credentials("admin", "correctpass"), "admin", "correctpass")

    def test_wrong_password(self):
        assert not validate_credentials(Credentials("admin", "wrongpass"), "admin", "correctpass")

    def test_wrong_username(self):
        assert not validate_credentials(Credentials("root", "correctpass"), "admin", "correctpass")

    def test_case_sensitive(self):
        assert not validate_credentials(Credentials("Admin", "correctpass"), "admin", "correctpass")
        assert not validate_credentials(Credentials("admin", "CorrectPass"), "admin", "correctpass")

    @pytest.mark.parametrize(
        "expected_username,expected_password",
        [(None, "pw"), ("admin", None), ("", "pw"), ("admin", ""), (None, None)],
    )
    def test_missing_configuration_fails_closed(self, expected_username, expected_password):
        creds = Credentials("admin", "pw")
        assert not validate_credentials(creds, expected_username, expected_password)

    def test_non_ascii_secrets(self):
        assert validate_credentials(Credentials("jörg", "pässwörd"), "jörg", "pässwörd")


class TestCheckCredentials:
    def test_missing_configuration_raises(self):
        with pytest.raises(ConfigurationIncomplete):
            check_credentials(Credentials("admin", "pw"), "admin", "")

    def test_mismatch_raises(self):
        with pytest.raises(CredentialMismatch):
            check_credentials(Credentials("admin", "nope"), "admin", "pw")

    def test_match_returns_none(self):
        assert check_credentials(Credentials("admin", "pw"), "admin", "pw") is None
