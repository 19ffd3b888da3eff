"""
Asynchronous task helpers for background translation jobs.

The UI starts a job, shows a spinner while the job is busy, and polls for
the result. A discarded job is not interrupted: its worker thread runs the
cascade to the end and the result is dropped.
"""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, Optional

from traveltalk.logger import get_logger
from traveltalk.translation.exceptions import TranslationError

logger = get_logger(__name__)


@dataclass
class JobState:
    """In-memory representation of a translation job."""

    job_id: str
    text: str
    source_language: str
    target_language: str
    discard_requested: bool = False
    state: str = "pending"  # pending|running|completed|failed|discarded
    created_at: float = field(default_factory=time.time)
    started_at: Optional[float] = None
    finished_at: Optional[float] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    last_update: float = field(default_factory=time.time)

    @property
    def busy(self) -> bool:
        return self.state in ("pending", "running")

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["busy"] = self.busy
        return payload


_jobs: Dict[str, JobState] = {}
_jobs_lock = threading.Lock()
_JOB_RETENTION_SECONDS = 600  # Retain job info for 10 minutes after completion


def create_translation_job(
    text: str,
    source_language: str,
    target_language: str,
    resolver_factory: Callable[[], Any],
) -> JobState:
    """
    Create and launch a background translation job.

    Args:
        text: Text to translate (already checked to be non-blank)
        source_language: Source language code
        target_language: Target language code
        resolver_factory: Builds the TranslationResolver used by the worker

    Returns:
        JobState for the new job (already registered and running in background).
    """
    job_id = uuid.uuid4().hex
    job_state = JobState(
        job_id=job_id,
        text=text,
        source_language=source_language,
        target_language=target_language,
    )

    with _jobs_lock:
        _cleanup_jobs_locked()
        _jobs[job_id] = job_state

    thread = threading.Thread(
        target=_run_translation_job,
        args=(job_state, resolver_factory),
        name=f"translation-job-{job_id}",
        daemon=True,
    )
    thread.start()
    logger.info(
        "Translation job %s started (%s -> %s, %d chars)",
        job_id,
        source_language,
        target_language,
        len(text),
    )
    return job_state


def get_job(job_id: str) -> Optional[JobState]:
    """Fetch a job by ID (if still retained)."""
    with _jobs_lock:
        job = _jobs.get(job_id)
        if job and job.finished_at and (time.time() - job.finished_at) > _JOB_RETENTION_SECONDS:
            _jobs.pop(job_id, None)
            return None
        return job


def discard_job(job_id: str) -> bool:
    """
    Stop caring about a job.

    A running job keeps going; whatever it produces is thrown away.

    Returns:
        True if the job was known, False otherwise.
    """
    with _jobs_lock:
        job = _jobs.get(job_id)
        if not job:
            return False
        job.discard_requested = True
        job.last_update = time.time()
        if not job.busy:
            _jobs.pop(job_id, None)
        logger.info("Translation job %s discarded", job_id)
        return True


def _run_translation_job(job: JobState, resolver_factory: Callable[[], Any]):
    """Worker function executed in a background thread."""
    with _jobs_lock:
        job.state = "running"
        job.started_at = time.time()
        job.last_update = job.started_at

    result = None
    error = None
    try:
        resolver = resolver_factory()
        result = resolver.resolve_result(job.text, job.source_language, job.target_language)
    except TranslationError as exc:
        error = exc
    except Exception as exc:
        error = exc
        logger.exception("Translation job %s crashed: %s: %s", job.job_id, type(exc).__name__, exc)

    with _jobs_lock:
        job.finished_at = time.time()
        job.last_update = job.finished_at

        if job.discard_requested:
            job.state = "discarded"
            _jobs.pop(job.job_id, None)
            logger.info("Translation job %s finished after discard; result dropped", job.job_id)
            return

        if error is None:
            job.result = result.to_dict()
            job.state = "completed"
            logger.info("Translation job %s completed via %s", job.job_id, result.provider.value)
        else:
            job.state = "failed"
            job.error = str(error)
            job.error_code = getattr(error, "code", None) or type(error).__name__
            logger.info("Translation job %s failed: %s", job.job_id, job.error_code)


def _cleanup_jobs_locked():
    """Remove completed jobs that exceeded retention period (call with lock held)."""
    now = time.time()
    expired = [
        job_id
        for job_id, job in _jobs.items()
        if job.finished_at and (now - job.finished_at) > _JOB_RETENTION_SECONDS
    ]
    for job_id in expired:
        _jobs.pop(job_id, None)
