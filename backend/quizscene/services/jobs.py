"""In-memory queue of background component-generation jobs."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable

from quizscene.models.jobs import GenerationJob

logger = logging.getLogger(__name__)

JobListener = Callable[[list[GenerationJob]], None]


class GenerationQueue:
    """Tracks auto-heal jobs by id. Listeners are told about every change."""

    def __init__(self) -> None:
        self._jobs: dict[str, GenerationJob] = {}
        self._listeners: list[JobListener] = []

    def add_job(self, component_id: str, category: str | None = None) -> str:
        job = GenerationJob(
            id=f"job_{uuid.uuid4().hex[:12]}",
            component_id=component_id,
            category=category,
            created_at=time.time(),
        )
        self._jobs[job.id] = job
        logger.info("Queued generation job %s for %s", job.id, component_id)
        self._notify()
        return job.id

    def update_job(self, job_id: str, **changes: Any) -> GenerationJob | None:
        job = self._jobs.get(job_id)
        if job is None:
            logger.debug("Update ignored: unknown job %s", job_id)
            return None
        job = job.model_copy(update=changes)
        self._jobs[job_id] = job
        self._notify()
        return job

    def get_job(self, job_id: str) -> GenerationJob | None:
        return self._jobs.get(job_id)

    def all_jobs(self) -> list[GenerationJob]:
        """Newest first."""
        return sorted(self._jobs.values(), key=lambda j: j.created_at, reverse=True)

    def active_jobs(self) -> list[GenerationJob]:
        return [j for j in self.all_jobs() if j.active]

    def has_active_job(self, component_id: str) -> bool:
        return any(j.component_id == component_id for j in self.active_jobs())

    def clear_completed(self) -> int:
        """Drop every finished job (completed or error). Returns how many were dropped."""
        finished = [job_id for job_id, job in self._jobs.items() if not job.active]
        for job_id in finished:
            del self._jobs[job_id]
        self._notify()
        return len(finished)

    def subscribe(self, listener: JobListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        jobs = self.all_jobs()
        for listener in list(self._listeners):
            try:
                listener(jobs)
            except Exception as e:
                logger.warning("Job listener failed: %s", e)

    def __len__(self) -> int:
        return len(self._jobs)
