"""Reflected XSS probe.

Sends script payloads to a handful of conventional search/comment endpoints
and flags any endpoint that echoes a payload back verbatim. No canary, no
context analysis: a verbatim echo is the whole signal.
"""

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Attempt, Category, Target, Verdict

PAYLOADS = [
    "<script>alert(1)</script>",
    '"><script>alert(1)</script>',
    '"><img src=x onerror=alert(1)>',
]

ENDPOINTS = ["/search", "/comment", "/feedback"]

PARAM = "q"


class XSSProbe(BaseProbe):

    category = Category.XSS

    def get_payloads(self):
        return PAYLOADS

    def check_response(self, response: httpx.Response) -> bool:
        body = response.text or ""
        return any(p in body for p in self.get_payloads())

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        attempts = [Attempt("GET", path, params={PARAM: payload})
                    for path in ENDPOINTS for payload in self.get_payloads()]
        flagged = []
        async for attempt, response in self.sweep(client, target, attempts):
            if attempt.path not in flagged and self.check_response(response):
                flagged.append(attempt.path)
                if self.logger:
                    self.logger.finding("high", "Reflected XSS", attempt.path, PARAM,
                                        attempt.params[PARAM], response.status_code)
        return self.verdict(bool(flagged), flagged)
