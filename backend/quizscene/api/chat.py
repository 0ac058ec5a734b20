"""POST /api/chat: Scene-Director round trip + background auto-heal."""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends

from quizscene.config import settings
from quizscene.dependencies import get_session
from quizscene.models.requests import ChatRequest
from quizscene.models.responses import ChatResponse
from quizscene.services.session import EditorSession

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat(
    req: ChatRequest,
    background_tasks: BackgroundTasks,
    session: EditorSession = Depends(get_session),
) -> ChatResponse:
    outcome = await session.chat(req.message)

    job_ids: list[str] = []
    if outcome.missing and settings.auto_heal_enabled:
        job_ids = session.healer.schedule(outcome.missing)
        if job_ids:
            background_tasks.add_task(session.healer.run_jobs, job_ids, req.message)

    return ChatResponse(
        message=outcome.message,
        scene_updated=outcome.scene_updated,
        missing_components=outcome.missing,
        jobs=job_ids,
        error=outcome.error,
    )
