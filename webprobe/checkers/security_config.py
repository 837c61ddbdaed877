"""Security misconfiguration probe — hardening headers and their values."""

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Category, Target, Verdict

# header -> expected value; empty means presence is enough
EXPECTED_HEADERS = {
    "x-content-type-options": "nosniff",
    "x-frame-options": "DENY",
    "referrer-policy": "strict-origin-when-cross-origin",
    "permissions-policy": "",
    "cross-origin-opener-policy": "same-origin",
}


class SecurityConfigProbe(BaseProbe):

    category = Category.SECURITY_CONFIG

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        response = await client.get(target.url)
        issues = []
        for header, expected in EXPECTED_HEADERS.items():
            actual = response.headers.get(header)
            if not actual or (expected and actual != expected):
                issues.append(f"Missing or incorrect security header: {header}")
        return self.verdict(not issues, issues)
