"""Authentication probe — framing and rate-limit protection on auth forms."""

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Attempt, Category, Target, Verdict

AUTH_ENDPOINTS = [
    Attempt("POST", "/login"),
    Attempt("POST", "/register"),
    Attempt("POST", "/reset-password"),
]


class AuthenticationProbe(BaseProbe):

    category = Category.AUTHENTICATION

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        issues = []
        async for attempt, response in self.sweep(client, target, AUTH_ENDPOINTS):
            if not response.headers.get("x-frame-options"):
                issues.append(f"Missing X-Frame-Options header on {attempt.path}")
            if not self.has_rate_limit(response):
                issues.append(f"No rate limiting on {attempt.path}")
        return self.verdict(not issues, issues)
