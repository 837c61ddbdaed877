"""Broken access control probe."""

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Attempt, Category, Target, Verdict

SENSITIVE_ENDPOINTS = ["/admin", "/api/users", "/dashboard", "/settings"]

DENIED = (401, 403)


class AccessControlProbe(BaseProbe):

    category = Category.ACCESS_CONTROL

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        attempts = [Attempt("GET", path) for path in SENSITIVE_ENDPOINTS]
        issues = []
        async for attempt, response in self.sweep(client, target, attempts):
            if response.status_code not in DENIED:
                issues.append(
                    f"Endpoint {attempt.path} accessible without authentication")
        return self.verdict(bool(issues), issues)
