"""SQL injection probe — error-based only."""

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.core.models import Attempt, Category, Target, Verdict

PAYLOADS = [
    "' OR '1'='1",
    "1' OR '1'='1",
    "1; DROP TABLE users--",
]

ENDPOINTS = ["/login", "/search", "/profile"]

PARAM = "id"

# Database engine error fragments, matched case-insensitively
ERROR_SIGNATURES = [
    "sql syntax",
    "mysql error",
    "postgresql error",
    "ORA-",
    "SQL Server error",
]


class SQLiProbe(BaseProbe):

    category = Category.SQL

    def __init__(self, logger=None):
        super().__init__(logger)
        self._signatures = [s.lower() for s in ERROR_SIGNATURES]

    def get_payloads(self):
        return PAYLOADS

    def check_response(self, response: httpx.Response) -> bool:
        body = (response.text or "").lower()
        return any(s in body for s in self._signatures)

    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        attempts = [Attempt("GET", path, params={PARAM: payload})
                    for path in ENDPOINTS for payload in self.get_payloads()]
        flagged = []
        async for attempt, response in self.sweep(client, target, attempts):
            if attempt.path not in flagged and self.check_response(response):
                flagged.append(attempt.path)
                if self.logger:
                    self.logger.finding("high", "SQL Injection", attempt.path, PARAM,
                                        attempt.params[PARAM], response.status_code)
        return self.verdict(bool(flagged), flagged)
