"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from quizscene.models.jobs import GenerationJob
from quizscene.models.validation import ValidationIssue


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    components_registered: int = 0


class ValidationResponse(BaseModel):
    valid: bool
    errors: list[ValidationIssue] = Field(default_factory=list)
    missing_components: list[str] = Field(default_factory=list)


class RenderedBlockResponse(BaseModel):
    block_id: str
    type: str
    kind: str
    svg: str
    placeholder: bool = False
    missing_components: list[str] = Field(default_factory=list)


class RenderResponse(BaseModel):
    svg: str
    blocks: list[RenderedBlockResponse] = Field(default_factory=list)
    missing_components: list[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0


class SceneStateResponse(BaseModel):
    scene: dict[str, Any]
    text: str
    errors: list[str] = Field(default_factory=list)
    missing_components: list[str] = Field(default_factory=list)


class ChatResponse(BaseModel):
    message: str
    scene_updated: bool = False
    missing_components: list[str] = Field(default_factory=list)
    jobs: list[str] = Field(default_factory=list)
    error: str | None = None


class SaveResponse(BaseModel):
    id: str
    saved: bool = False
    file_path: str | None = None
    error: str | None = None


class JobsResponse(BaseModel):
    jobs: list[GenerationJob] = Field(default_factory=list)
    active: int = 0
