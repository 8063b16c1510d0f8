"""Per-request access decision for protected deployments."""

from __future__ import annotations

import logging

from stagegate.credentials import check_credentials, decode_basic_auth
from stagegate.environment import classify
from stagegate.errors import GateError, HeaderMissing
from stagegate.models import (
    AuthDecision,
    EnvironmentContext,
    GateResult,
    GateSettings,
    IncomingRequest,
)
from stagegate.paths import is_exempt

logger = logging.getLogger("stagegate.gate")

_ALLOW = GateResult(AuthDecision.ALLOW)


class RequestGate:
    """Decide whether a request may reach the application.

    Stateless after construction; one instance serves all requests.
    """

    def __init__(self, settings: GateSettings, environment: EnvironmentContext | None = None):
        self._settings = settings
        self._environment = environment or classify(settings)

    @property
    def settings(self) -> GateSettings:
        return self._settings

    @property
    def environment(self) -> EnvironmentContext:
        return self._environment

    def evaluate(self, request: IncomingRequest) -> GateResult:
        if not self._environment.is_protected:
            return _ALLOW
        if is_exempt(request.path, self._settings.public_paths):
            return _ALLOW

        try:
            self._authenticate(request)
        except GateError as e:
            failure = type(e).__name__
            logger.debug("Challenging %s %s: %s", request.method, request.path, failure)
            return GateResult(AuthDecision.CHALLENGE_REQUIRED, failure=failure)

        return _ALLOW

    def _authenticate(self, request: IncomingRequest) -> None:
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            raise HeaderMissing("No Authorization header")

        creds = decode_basic_auth(auth_header)
        check_credentials(
            creds, self._settings.staging_username, self._settings.staging_password
        )
