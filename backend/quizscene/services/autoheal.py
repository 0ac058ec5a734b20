"""Auto-heal: generate components a scene references but the catalog lacks.

Each missing id becomes one job in the ``GenerationQueue``. A job walks
pending -> generating (30) -> validating (80) -> completed (100), and on
success the descriptor is added to the registry, which fires the session's
revalidation. Any failure parks the job in ``error`` without touching the
registry.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from quizscene.catalog.registry import CatalogRegistry
from quizscene.catalog.store import ComponentStore
from quizscene.services.designer import GenerateFn, auto_generate_component, infer_category
from quizscene.services.jobs import GenerationQueue

logger = logging.getLogger(__name__)


class AutoHealer:
    def __init__(
        self,
        registry: CatalogRegistry,
        queue: GenerationQueue,
        generate: GenerateFn | None = None,
        store: ComponentStore | None = None,
    ) -> None:
        self.registry = registry
        self.queue = queue
        self.generate = generate
        self.store = store

    def schedule(self, missing_ids: Iterable[str], force: bool = False) -> list[str]:
        """Queue one job per id. Returns the new job ids.

        Ids already in the catalog or with an active job are skipped unless
        ``force`` is set (explicit regeneration of an existing component).
        """
        job_ids = []
        seen = set()
        for component_id in missing_ids:
            if component_id in seen:
                continue
            seen.add(component_id)
            if self.queue.has_active_job(component_id):
                logger.debug("Generation of %s already in progress", component_id)
                continue
            if not force and component_id in self.registry:
                continue
            job_ids.append(self.queue.add_job(component_id, infer_category(component_id)))
        return job_ids

    async def run_job(self, job_id: str, context: str | None = None) -> bool:
        job = self.queue.get_job(job_id)
        if job is None:
            logger.warning("Unknown generation job %s", job_id)
            return False

        try:
            self.queue.update_job(job_id, status="generating", progress=30)
            component = await auto_generate_component(
                job.component_id,
                job.category,
                context,
                generate=self.generate,
            )

            self.queue.update_job(job_id, status="validating", progress=80)
            if self.store is not None:
                saved = self.store.save(component)
                if not saved.success:
                    logger.warning("Could not persist %s: %s", component.id, saved.error)

            self.registry.add(component)
            self.queue.update_job(job_id, status="completed", progress=100, component=component)
            logger.info("Generated component %s (job %s)", component.id, job_id)
            return True
        except Exception as e:
            logger.warning("Generation of %s failed: %s", job.component_id, e)
            self.queue.update_job(job_id, status="error", progress=0, error=str(e) or type(e).__name__)
            return False

    async def run_jobs(self, job_ids: list[str], context: str | None = None) -> list[bool]:
        """Run jobs concurrently; completion order is not defined."""
        return list(await asyncio.gather(*(self.run_job(job_id, context) for job_id in job_ids)))

    async def heal(self, missing_ids: Iterable[str], context: str | None = None) -> list[str]:
        """Schedule and run generation for ``missing_ids``. Returns the job ids."""
        job_ids = self.schedule(missing_ids)
        await self.run_jobs(job_ids, context)
        return job_ids
