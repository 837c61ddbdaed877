"""Software and data integrity probe — SRI on script tags, CSP presence."""

import re

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Category, Target, Verdict

_SCRIPT_TAG = re.compile(r"<script[^>]*>", re.I)
_SRC_ATTR = re.compile(r"""\bsrc\s*=\s*["']?([^"'\s>]+)""", re.I)


class IntegrityProbe(BaseProbe):

    category = Category.INTEGRITY_FAILURES

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        response = await client.get(target.url)
        issues = []

        for tag in _SCRIPT_TAG.findall(response.text or ""):
            if "integrity=" in tag.lower():
                continue
            src = _SRC_ATTR.search(tag)
            where = f" ({src.group(1)})" if src else ""
            issues.append(f"Script tag missing Subresource Integrity (SRI) hash{where}")

        if not response.headers.get("content-security-policy"):
            issues.append("Missing Content Security Policy")

        return self.verdict(bool(issues), issues)
