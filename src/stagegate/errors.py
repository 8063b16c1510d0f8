"""Gate failure taxonomy.

Every failure produces the same 401 challenge; the class only feeds logs.
"""


class GateError(Exception):
    """Base class for reasons a request is challenged."""

    pass


class ConfigurationIncomplete(GateError):
    """Expected username or password is not configured."""

    pass


class HeaderMissing(GateError):
    """No Authorization header on the request."""

    pass


class SchemeMismatch(GateError):
    """Authorization header does not use the Basic scheme."""

    pass


class DecodeFailure(GateError, ValueError):
    """Basic credentials are not valid base64 or not user:password."""

    pass


class CredentialMismatch(GateError):
    """Credentials decoded fine but do not match the configured secrets."""

    pass
