"""Abstract base for all probes."""

from abc import ABC, abstractmethod
from typing import AsyncIterator, List, Sequence, Tuple

import httpx

from webprobe.core.errors import ProbeExecutionError, classify
from webprobe.core.models import Attempt, Category, Target, Verdict


# Headers that advertise a rate limit on the response.
RATE_LIMIT_HEADERS = ("x-ratelimit-limit", "ratelimit-limit")


class BaseProbe(ABC):
    """Every probe must declare its category and implement evaluate()."""

    category: Category

    def __init__(self, logger=None):
        self.logger = logger

    @property
    def name(self) -> str:
        return self.category.label

    # ── public API ──────────────────────────────────────────────

    @abstractmethod
    async def evaluate(self, client: httpx.AsyncClient, target: Target) -> Verdict:
        """
        Probe *target* and return a fresh Verdict.
        May raise on unrecoverable network or parse failure; the engine
        turns that into a failed verdict.
        """
        ...

    # ── shared helpers ──────────────────────────────────────────

    def verdict(self, signal: bool, findings: Sequence[str] = (), **extra) -> Verdict:
        """Build an evaluated verdict for this probe's category."""
        fields = {self.category.signal: signal,
                  self.category.findings: tuple(findings)}
        fields.update(extra)
        return Verdict(category=self.category, evaluated=True,
                       severity=self.category.severity, **fields)

    @staticmethod
    async def send(client: httpx.AsyncClient, target: Target, attempt: Attempt) -> httpx.Response:
        return await client.request(
            attempt.method,
            target.join(attempt.path),
            params=attempt.params,
            json=attempt.json,
        )

    async def sweep(
        self,
        client: httpx.AsyncClient,
        target: Target,
        attempts: Sequence[Attempt],
    ) -> AsyncIterator[Tuple[Attempt, httpx.Response]]:
        """
        Send each attempt in order and yield (attempt, response).
        Endpoints that fail are skipped; if every attempt failed the last
        error is raised as a ProbeExecutionError.
        """
        failures: List[BaseException] = []
        for attempt in attempts:
            if self.logger:
                self.logger.debug(f"→ {attempt.method} {target.join(attempt.path)}")
            try:
                response = await self.send(client, target, attempt)
            except httpx.HTTPError as exc:
                failures.append(exc)
                if self.logger:
                    self.logger.debug(
                        f"  {self.name}: {attempt.path} skipped ({exc!r})")
                continue
            yield attempt, response

        if attempts and len(failures) == len(attempts):
            last = failures[-1]
            raise ProbeExecutionError(classify(last), str(last) or last.__class__.__name__)

    @staticmethod
    def has_rate_limit(response: httpx.Response) -> bool:
        return any(h in response.headers for h in RATE_LIMIT_HEADERS)
