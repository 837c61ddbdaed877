"""Logging and monitoring probe.

Sends a few obviously hostile requests and looks for a request-tracking
header on the response, the only externally visible sign that requests are
being correlated and logged.
"""

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Attempt, Category, Target, Verdict

SUSPICIOUS_ACTIONS = [
    Attempt("POST", "/login", json={"username": "admin'--"}),
    Attempt("GET", "/api/data", params={"id": "1 OR 1=1"}),
    Attempt("POST", "/upload", json={"file": "test.php"}),
]

TRACKING_HEADER = "x-request-id"


class LoggingProbe(BaseProbe):

    category = Category.LOGGING

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        issues = []
        async for attempt, response in self.sweep(client, target, SUSPICIOUS_ACTIONS):
            if not response.headers.get(TRACKING_HEADER):
                issues.append(f"No request tracking on {attempt.path}")
        return self.verdict(not issues, issues)
