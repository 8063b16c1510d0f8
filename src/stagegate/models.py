"""Data models for stagegate."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from starlette.datastructures import Headers


class AuthDecision(Enum):
    """Outcome of evaluating one request."""

    ALLOW = "allow"
    CHALLENGE_REQUIRED = "challenge_required"


@dataclass(frozen=True)
class GateSettings:
    """Immutable gate configuration, built once per process."""

    node_env: str = "development"
    vercel_env: str = ""
    public_env: str = ""
    deployment_url: str = ""
    staging_username: str = ""
    staging_password: str = field(default="", repr=False)
    realm: str = "Staging Environment"
    contact_email: str = ""
    public_paths: tuple[str, ...] = ()
    strict_environment_match: bool = False
    force_protection: bool = False

    @property
    def has_credentials(self) -> bool:
        return bool(self.staging_username and self.staging_password)


@dataclass(frozen=True)
class EnvironmentContext:
    """Whether this deployment is protected, and which hint said so."""

    is_protected: bool
    reason: str | None = None


@dataclass(frozen=True)
class Credentials:
    """Username/password pair decoded from a Basic auth header."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class IncomingRequest:
    """Read-only view of the parts of a request the gate looks at."""

    method: str
    path: str
    headers: Headers

    @classmethod
    def from_scope(cls, scope) -> IncomingRequest:
        return cls(
            method=scope.get("method", "GET"),
            path=scope.get("path", "/"),
            headers=Headers(scope=scope),
        )


@dataclass(frozen=True)
class GateResult:
    """Decision plus the internal failure name (never sent to clients)."""

    decision: AuthDecision
    failure: str | None = None

    @property
    def allowed(self) -> bool:
        return self.decision is AuthDecision.ALLOW
