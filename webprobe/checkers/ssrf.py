"""SSRF probe — fetch/proxy endpoints that accept internal URLs."""

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Attempt, Category, Target, Verdict

ENDPOINTS = ["/api/fetch", "/api/proxy", "/api/import", "/api/webhook"]

INTERNAL_URLS = [
    "http://169.254.169.254/latest/meta-data/",   # AWS metadata
    "http://localhost/",
    "http://127.0.0.1/",
    "file:///etc/passwd",
]

REJECTED = (400, 403)


class SSRFProbe(BaseProbe):

    category = Category.SSRF

    def get_payloads(self):
        return INTERNAL_URLS

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        attempts = [Attempt("POST", path, json={"url": url})
                    for path in ENDPOINTS for url in self.get_payloads()]
        endpoints = []
        async for attempt, response in self.sweep(client, target, attempts):
            if response.status_code not in REJECTED:
                endpoints.append(
                    f"{attempt.path} might be vulnerable to SSRF ({attempt.json['url']})")
        return self.verdict(bool(endpoints), endpoints)
