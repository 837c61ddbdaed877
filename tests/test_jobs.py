import random
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from webprobe.core.engine import Scanner
from webprobe.core.errors import InvalidTargetError
from webprobe.core.jobs import (
    JobStatus, JobStore, degraded_aggregate, run_job, submit_scan,
)
from webprobe.core.models import Profile

from conftest import TARGET_URL


def test_store_create_get_list():
    store = JobStore()
    a = store.create(1, "https://a.test")
    b = store.create(2, "https://b.test")
    c = store.create(1, "https://c.test", profile="legacy")

    assert (a.id, b.id, c.id) == (1, 2, 3)
    assert a.status is JobStatus.PENDING and a.progress == 0
    assert store.get(2) == b
    assert store.get(99) is None
    assert [j.id for j in store.list_for(1)] == [1, 3]
    assert c.profile is Profile.LEGACY


def test_progress_is_monotonic_and_clamped():
    store = JobStore()
    job = store.create(1, TARGET_URL)
    store.update_progress(job.id, 40)
    store.update_progress(job.id, 20)
    assert store.get(job.id).progress == 40
    store.update_progress(job.id, 250)
    assert store.get(job.id).progress == 100
    assert store.update_progress(42, 10) is None


def test_finished_jobs_reject_further_writes():
    store = JobStore()
    job = store.create(1, TARGET_URL)
    store.mark_failed(job.id, "boom")
    with pytest.raises(RuntimeError):
        store.update_progress(job.id, 50)


@pytest.mark.parametrize("profile,keys", [
    ("legacy", ["ssl", "headers", "xss", "sql"]),
    ("extended", [c.key for c in Profile.EXTENDED.categories]),
])
def test_degraded_aggregate_shape(profile, keys):
    out = degraded_aggregate(profile, "scan crashed")
    assert out["status"] == "failed"
    assert out["error"] == "scan crashed"
    assert [k for k in out if k not in ("status", "error")] == keys
    assert out["ssl"]["valid"] is False
    assert out["ssl"]["issues"] == ["scan crashed"]
    assert out["headers"]["missing"] == []


async def test_run_job_completes(clean_handler):
    store = JobStore()
    scanner = Scanner(profile="legacy", transport=httpx.MockTransport(clean_handler))
    job, task = submit_scan(store, 7, TARGET_URL, scanner)
    assert store.get(job.id).status is JobStatus.PENDING

    done = await task
    assert done.status is JobStatus.COMPLETED
    assert done.progress == 100
    assert done.results["headers"]["secure"] is True
    assert store.list_for(7) == [done]


def test_submit_invalid_target_creates_no_job():
    store = JobStore()
    with pytest.raises(InvalidTargetError):
        submit_scan(store, 1, "gopher://example.com", Scanner())
    assert store.list_for(1) == []


async def test_run_job_records_failure(clean_handler):
    class BrokenScanner(Scanner):
        async def run(self, target_url, on_progress=None):
            on_progress(25)
            raise RuntimeError("worker died")

    store = JobStore()
    scanner = BrokenScanner(profile="legacy", transport=httpx.MockTransport(clean_handler))
    job, task = submit_scan(store, 1, TARGET_URL, scanner)
    failed = await task

    assert failed.status is JobStatus.FAILED
    assert failed.progress == 25
    assert failed.error == "worker died"
    assert failed.results["ssl"]["issues"] == ["worker died"]
    assert set(failed.results) == {"status", "error", "ssl", "headers", "xss", "sql"}


async def test_run_job_unknown_id():
    with pytest.raises(KeyError):
        await run_job(JobStore(), 5, Scanner())


def test_concurrent_progress_never_moves_backwards():
    store = JobStore()
    job = store.create(1, TARGET_URL)
    values = list(range(101))
    random.Random(7).shuffle(values)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda pct: store.update_progress(job.id, pct), values))
    assert store.get(job.id).progress == 100
