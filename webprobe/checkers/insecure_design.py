"""Insecure design probe — sensitive operations without rate limiting."""

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Attempt, Category, Target, Verdict

SENSITIVE_OPERATIONS = [
    Attempt("POST", "/reset-password"),
    Attempt("GET", "/api/export"),
    Attempt("POST", "/api/bulk-update"),
]


class InsecureDesignProbe(BaseProbe):

    category = Category.INSECURE_DESIGN

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        issues = []
        async for attempt, response in self.sweep(client, target, SENSITIVE_OPERATIONS):
            if not self.has_rate_limit(response):
                issues.append(f"No rate limiting on {attempt.path}")
        return self.verdict(bool(issues), issues)
