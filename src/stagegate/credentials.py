"""Basic auth header decoding and credential checks."""

from __future__ import annotations

import base64
import binascii
import secrets

from stagegate.errors import (
    ConfigurationIncomplete,
    CredentialMismatch,
    DecodeFailure,
    SchemeMismatch,
)
from stagegate.models import Credentials

BASIC_PREFIX = "Basic "


def decode_basic_auth(header_value: str) -> Credentials:
    """Decode an Authorization header value into Credentials.

    Splits on the first colon only, so passwords may contain ':'.

    Raises:
        SchemeMismatch: header does not start with "Basic "
        DecodeFailure: bad base64, bad UTF-8, or an empty username/password
    """
    if not header_value.startswith(BASIC_PREFIX):
        raise SchemeMismatch("Authorization scheme is not Basic")

    encoded = header_value[len(BASIC_PREFIX):].strip()
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise DecodeFailure("Credentials are not valid base64 UTF-8") from e

    username, sep, password = decoded.partition(":")
    if not sep or not username or not password:
        raise DecodeFailure("Invalid credentials format")

    return Credentials(username=username, password=password)


def check_credentials(
    creds: Credentials, expected_username: str | None, expected_password: str | None
) -> None:
    """Raise unless creds match the expected pair exactly.

    Raises:
        ConfigurationIncomplete: either expected value is missing or empty
        CredentialMismatch: username or password differs
    """
    if not expected_username or not expected_password:
        raise ConfigurationIncomplete("Staging username/password not configured")

    # Compare both fields so timing does not reveal which one failed
    user_ok = secrets.compare_digest(creds.username.encode(), expected_username.encode())
    pass_ok = secrets.compare_digest(creds.password.encode(), expected_password.encode())
    if not (user_ok and pass_ok):
        raise CredentialMismatch("Credentials do not match")


def validate_credentials(
    creds: Credentials, expected_username: str | None, expected_password: str | None
) -> bool:
    """Boolean form of check_credentials; missing configuration is False."""
    try:
        check_credentials(creds, expected_username, expected_password)
    except (ConfigurationIncomplete, CredentialMismatch):
        return False
    return True
