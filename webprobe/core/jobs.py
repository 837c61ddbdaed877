"""In-memory job ledger for scans.

A JobStore is an explicit object handed to whoever launches scans; there is
no module-level instance. Writes go through one lock, and a job id is
expected to have a single scan task writing to it.
"""

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Dict, List, Optional, Tuple, Union

from webprobe.core.models import Category, Profile, ScanAggregate, Target, Verdict


class JobStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class Job:
    id: int
    owner_id: int
    url: str
    profile: Profile = Profile.EXTENDED
    status: JobStatus = JobStatus.PENDING
    progress: int = 0
    results: Optional[dict] = None
    error: Optional[str] = None
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc))

    @property
    def finished(self) -> bool:
        return self.status in (JobStatus.COMPLETED, JobStatus.FAILED)


def degraded_aggregate(profile: Union[Profile, str], message: str) -> dict:
    """Aggregate shown for a failed job: default verdicts, error in ssl.issues."""
    aggregate = ScanAggregate(Profile(profile))
    aggregate.merge(Verdict(category=Category.SSL, valid=False, issues=(message,)))
    out = {"status": JobStatus.FAILED.value, "error": message}
    out.update(aggregate.to_dict())
    return out


class JobStore:
    def __init__(self):
        self._jobs: Dict[int, Job] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, owner_id: int, url: str,
               profile: Union[Profile, str] = Profile.EXTENDED) -> Job:
        with self._lock:
            job = Job(id=self._next_id, owner_id=owner_id, url=url,
                      profile=Profile(profile))
            self._jobs[job.id] = job
            self._next_id += 1
            return job

    def get(self, job_id: int) -> Optional[Job]:
        return self._jobs.get(job_id)

    def list_for(self, owner_id: int) -> List[Job]:
        with self._lock:
            return [j for j in self._jobs.values() if j.owner_id == owner_id]

    def _update(self, job_id: int, **changes) -> Optional[Job]:
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                return None
            if job.finished:
                raise RuntimeError(f"Job {job_id} is already {job.status.value}")
            if "progress" in changes:
                # never move backwards
                changes["progress"] = max(job.progress, changes["progress"])
            job = replace(job, **changes)
            self._jobs[job_id] = job
            return job

    def mark_running(self, job_id: int) -> Optional[Job]:
        return self._update(job_id, status=JobStatus.RUNNING)

    def update_progress(self, job_id: int, progress: int) -> Optional[Job]:
        return self._update(job_id, progress=min(100, max(0, int(progress))))

    def update_results(self, job_id: int, aggregate: ScanAggregate) -> Optional[Job]:
        return self._update(job_id, status=JobStatus.COMPLETED, progress=100,
                            results=aggregate.to_dict())

    def mark_failed(self, job_id: int, message: str) -> Optional[Job]:
        job = self.get(job_id)
        if job is None:
            return None
        return self._update(job_id, status=JobStatus.FAILED, error=message,
                            results=degraded_aggregate(job.profile, message))


async def run_job(store: JobStore, job_id: int, scanner) -> Job:
    """Drive one job through the scanner, recording progress and outcome."""
    job = store.mark_running(job_id)
    if job is None:
        raise KeyError(job_id)
    try:
        aggregate = await scanner.run(
            job.url, lambda pct: store.update_progress(job_id, pct))
    except Exception as exc:
        if scanner.logger:
            scanner.logger.fail(f"Job {job_id} failed: {exc}")
        return store.mark_failed(job_id, str(exc) or exc.__class__.__name__)
    return store.update_results(job_id, aggregate)


def submit_scan(store: JobStore, owner_id: int, url: str,
                scanner) -> Tuple[Job, Awaitable[Job]]:
    """
    Validate *url*, create a job and return it with the coroutine that runs it.
    Invalid targets raise InvalidTargetError and create no job.
    """
    Target.parse(url)
    job = store.create(owner_id, url, scanner.profile)
    return job, run_job(store, job.id, scanner)
