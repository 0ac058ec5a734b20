"""/api/jobs: auto-heal progress."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from quizscene.dependencies import get_session
from quizscene.models.responses import JobsResponse
from quizscene.services.session import EditorSession

router = APIRouter()


@router.get("/jobs", response_model=JobsResponse)
async def list_jobs(session: EditorSession = Depends(get_session)) -> JobsResponse:
    queue = session.queue
    return JobsResponse(jobs=queue.all_jobs(), active=len(queue.active_jobs()))


@router.delete("/jobs/completed")
async def clear_completed(session: EditorSession = Depends(get_session)) -> dict[str, int]:
    return {"cleared": session.queue.clear_completed()}
