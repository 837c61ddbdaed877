"""Cryptographic hygiene probe — cookie flags and a TLS version hint."""

from typing import List

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Category, Target, Verdict


def cookie_attributes(set_cookie: str) -> List[str]:
    """Lower-cased attribute names of one Set-Cookie value (name=value excluded)."""
    parts = set_cookie.split(";")[1:]
    return [p.split("=", 1)[0].strip().lower() for p in parts if p.strip()]


class CryptographyProbe(BaseProbe):

    category = Category.CRYPTOGRAPHY

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        response = await client.get(target.url)
        issues = []

        cookies = response.headers.get_list("set-cookie")
        attrs = [cookie_attributes(c) for c in cookies]
        if any("secure" not in a or "httponly" not in a for a in attrs):
            issues.append("Cookies missing Secure or HttpOnly flags")
        if any("samesite" not in a for a in attrs):
            issues.append("Cookies missing SameSite attribute")

        # Only a server-timing hint is available from the HTTP layer
        if "tls=1.3" not in response.headers.get("server-timing", ""):
            issues.append("Not using latest TLS version (1.3)")

        return self.verdict(not issues, issues)
