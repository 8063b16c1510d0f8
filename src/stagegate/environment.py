"""Decide whether the running deployment is a protected pre-production one."""

from __future__ import annotations

from stagegate.models import EnvironmentContext, GateSettings

_PRODUCTION_MODE = "production"
_URL_MARKERS = ("staging", "preview")


def classify(settings: GateSettings) -> EnvironmentContext:
    """Classify the deployment described by settings.

    Protection needs a production-mode build *and* a deployment hint, so a
    local dev server with a stray VERCEL_ENV is never locked.
    """
    if settings.node_env != _PRODUCTION_MODE:
        return EnvironmentContext(is_protected=False)

    if settings.force_protection:
        return EnvironmentContext(is_protected=True, reason="force_protection")
    if settings.vercel_env == "preview":
        return EnvironmentContext(is_protected=True, reason="vercel_env=preview")
    if settings.public_env == "staging":
        return EnvironmentContext(is_protected=True, reason="public_env=staging")

    if not settings.strict_environment_match and settings.deployment_url:
        for marker in _URL_MARKERS:
            if marker in settings.deployment_url:
                return EnvironmentContext(
                    is_protected=True, reason=f"deployment_url contains '{marker}'"
                )

    return EnvironmentContext(is_protected=False)
