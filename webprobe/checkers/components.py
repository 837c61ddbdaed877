"""Vulnerable components probe — Server header version fingerprints."""

import re

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Category, Target, Verdict

KNOWN_OLD_VERSIONS = [
    (re.compile(r"Apache/2\.4\.(2[0-9]|3[0-9])"), "Apache < 2.4.40"),
    (re.compile(r"nginx/1\.[0-9]\.[0-9]"), "nginx < 1.14.0"),
    (re.compile(r"PHP/[1-6]"), "PHP < 7.0"),
]


class VulnerableComponentsProbe(BaseProbe):

    category = Category.VULNERABLE_COMPONENTS

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        response = await client.get(target.url)
        server = response.headers.get("server", "")
        issues = [f"Potentially vulnerable {name} detected"
                  for rx, name in KNOWN_OLD_VERSIONS if server and rx.search(server)]
        return self.verdict(bool(issues), issues)
