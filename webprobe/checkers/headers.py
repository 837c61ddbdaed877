"""Security headers probe."""

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Category, Target, Verdict

REQUIRED_HEADERS = [
    "strict-transport-security",
    "x-content-type-options",
    "x-frame-options",
    "content-security-policy",
]


class HeadersProbe(BaseProbe):

    category = Category.HEADERS

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        response = await client.head(target.url, follow_redirects=False)
        missing = [h for h in REQUIRED_HEADERS if not response.headers.get(h)]
        return self.verdict(not missing, missing)
