"""Background component generation job model."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from quizscene.models.catalog import ComponentDescriptor

JobStatus = Literal["pending", "generating", "validating", "completed", "error"]

ACTIVE_STATUSES: frozenset[str] = frozenset({"pending", "generating", "validating"})


class GenerationJob(BaseModel):
    id: str
    component_id: str
    category: str | None = None
    status: JobStatus = "pending"
    progress: int = 0  # 0-100
    component: ComponentDescriptor | None = None
    error: str | None = None
    created_at: float = 0.0

    @property
    def active(self) -> bool:
        return self.status in ACTIVE_STATUSES
