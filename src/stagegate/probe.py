"""Check a deployed environment actually enforces the gate.

Uses httpx directly, so it can be pointed at any URL (local or remote).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from stagegate.headers import security_headers

logger = logging.getLogger("stagegate.probe")


@dataclass(frozen=True)
class ProbeCheck:
    name: str
    passed: bool
    detail: str = ""


@dataclass
class ProbeReport:
    url: str
    checks: list[ProbeCheck] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(c.passed for c in self.checks)

    def add(self, name: str, passed: bool, detail: str = "") -> None:
        self.checks.append(ProbeCheck(name, passed, detail))


def _check_headers(report: ProbeReport, label: str, resp: httpx.Response) -> None:
    missing = [
        name for name, value in security_headers().items()
        if resp.headers.get(name) != value
    ]
    report.add(
        f"{label}: security headers",
        not missing,
        f"missing or wrong: {', '.join(missing)}" if missing else "",
    )


def probe(
    url: str,
    username: str | None = None,
    password: str | None = None,
    client: httpx.Client | None = None,
) -> ProbeReport:
    """Request url anonymously (and with credentials if given) and report.

    Transport errors are recorded as a failed check rather than raised.
    """
    report = ProbeReport(url=url)
    owns_client = client is None
    client = client or httpx.Client(timeout=15.0, follow_redirects=False)

    try:
        try:
            anon = client.get(url)
        except httpx.HTTPError as e:
            logger.warning("Probe request to %s failed: %s", url, e)
            report.add("anonymous request", False, str(e))
            return report

        report.add("anonymous: 401 challenge", anon.status_code == 401, f"got {anon.status_code}")
        challenge = anon.headers.get("WWW-Authenticate", "")
        report.add(
            "anonymous: WWW-Authenticate Basic",
            challenge.startswith("Basic realm="),
            challenge or "header absent",
        )
        _check_headers(report, "anonymous", anon)

        if username and password:
            try:
                authed = client.get(url, auth=httpx.BasicAuth(username, password))
            except httpx.HTTPError as e:
                logger.warning("Authenticated probe to %s failed: %s", url, e)
                report.add("authenticated request", False, str(e))
                return report
            report.add(
                "authenticated: accepted",
                authed.status_code != 401,
                f"got {authed.status_code}",
            )
            _check_headers(report, "authenticated", authed)
    finally:
        if owns_client:
            client.close()

    return report
