"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from quizscene.dependencies import get_session
from quizscene.models.responses import HealthResponse
from quizscene.services.session import EditorSession

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(session: EditorSession = Depends(get_session)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        components_registered=len(session.registry),
    )


@router.get("/prompts")
async def prompts() -> dict[str, str]:
    from quizscene.llm.prompts import get_all_templates

    return get_all_templates()
