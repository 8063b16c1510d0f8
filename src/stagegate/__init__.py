"""stagegate - basic auth and no-index protection for staging deployments."""

from stagegate.gate import RequestGate
from stagegate.middleware import StagingGateMiddleware
from stagegate.models import AuthDecision, Credentials, GateResult, GateSettings

__version__ = "0.1.0"

__all__ = [
    "AuthDecision",
    "Credentials",
    "GateResult",
    "GateSettings",
    "RequestGate",
    "StagingGateMiddleware",
]
