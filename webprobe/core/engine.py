from typing import Callable, List, Optional, Union

import httpx

from webprobe.checkers.base import BaseProbe
from webprobe.checkers.registry import build_probes
from webprobe.core.models import Profile, ProbeError, ScanAggregate, Target, Verdict

DEFAULT_TIMEOUT = 10.0
USER_AGENT = "webprobe/1.0"

ProgressCallback = Callable[[int], None]


def progress_percent(completed: int, total: int) -> int:
    return round(100 * completed / total)


class Scanner:
    def __init__(self, profile: Union[Profile, str] = Profile.EXTENDED,
                 timeout: float = DEFAULT_TIMEOUT, proxy: str | None = None,
                 verify: bool = True, user_agent: str = USER_AGENT,
                 logger=None, transport: httpx.AsyncBaseTransport | None = None):
        self.name = "webprobe"
        self.version = "1.0.0"
        self.profile = Profile(profile)
        self.timeout = timeout
        self.proxy = proxy
        self.verify = verify
        self.user_agent = user_agent
        self.logger = logger
        self.transport = transport

    def probes(self) -> List[BaseProbe]:
        return build_probes(self.profile, logger=self.logger)

    def _client(self) -> httpx.AsyncClient:
        kwargs = dict(
            verify=self.verify,
            follow_redirects=True,
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
        )
        if self.transport is not None:
            kwargs["transport"] = self.transport
        elif self.proxy:
            kwargs["proxy"] = self.proxy
        return httpx.AsyncClient(**kwargs)

    async def run(self, target_url: str,
                  on_progress: Optional[ProgressCallback] = None) -> ScanAggregate:
        """
        Run every probe of the profile against *target_url*, one at a time.

        Raises InvalidTargetError before anything is sent if the URL is not
        an absolute http(s) URL. Probe failures never escape: they become a
        failed verdict carrying the error cause.
        """
        target = Target.parse(target_url)
        probes = self.probes()
        aggregate = ScanAggregate(self.profile)
        total = len(probes)

        if self.logger:
            self.logger.info(
                f"Scanning {target} ({self.profile.value} profile, {total} checks)")

        async with self._client() as client:
            for index, probe in enumerate(probes):
                aggregate.merge(await self._evaluate(probe, client, target))
                pct = progress_percent(index + 1, total)
                if self.logger:
                    self.logger.progress(pct, probe.name)
                if on_progress is not None:
                    on_progress(pct)

        if self.logger:
            self.logger.ok(f"Scan of {target} complete")
        return aggregate.freeze()

    async def _evaluate(self, probe: BaseProbe, client: httpx.AsyncClient,
                        target: Target) -> Verdict:
        if self.logger:
            self.logger.debug(f"Running {probe.name} check")
        try:
            verdict = await probe.evaluate(client, target)
        except Exception as exc:
            error = ProbeError.from_exception(exc)
            if self.logger:
                self.logger.warn(
                    f"{probe.name} check failed [{error.kind}]: {error.message}")
            return Verdict.failed(probe.category, error)

        if self.logger and verdict.insecure:
            self.logger.fail(
                f"{probe.name}: {len(verdict.findings)} finding(s)")
        return verdict


async def run_scan(target_url: str, on_progress: Optional[ProgressCallback] = None,
                   **scanner_kwargs) -> ScanAggregate:
    """Shortcut for Scanner(**scanner_kwargs).run(target_url, on_progress)."""
    return await Scanner(**scanner_kwargs).run(target_url, on_progress)
