"""/api/components: catalog browsing, editing and validation."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from quizscene.catalog.registry import ComponentNotFound
from quizscene.catalog.store import ComponentStore
from quizscene.dependencies import get_session, get_store
from quizscene.models.requests import ComponentValidateRequest
from quizscene.models.responses import SaveResponse, ValidationResponse
from quizscene.services.session import EditorSession

logger = logging.getLogger(__name__)

router = APIRouter()


def _validated(raw: Any):
    from quizscene.validation.schema import parse_component, validate_component

    result = validate_component(raw)
    if not result.valid:
        raise HTTPException(
            status_code=422,
            detail=[issue.model_dump() for issue in result.errors or []],
        )
    return parse_component(raw)


def _save(component, store: ComponentStore) -> SaveResponse:
    saved = store.save(component)
    if not saved.success:
        logger.warning("Component %s kept in memory only: %s", component.id, saved.error)
    return SaveResponse(id=component.id, saved=saved.success, file_path=saved.file_path, error=saved.error)


@router.get("/components")
async def list_components(
    category: str | None = None,
    session: EditorSession = Depends(get_session),
) -> list[dict[str, Any]]:
    registry = session.registry
    components = registry.list_by_category(category) if category else registry.list()
    return [c.to_document() for c in components]


@router.post("/components/validate", response_model=ValidationResponse)
async def validate_component_endpoint(req: ComponentValidateRequest) -> ValidationResponse:
    from quizscene.validation.schema import validate_component

    result = validate_component(req.component)
    return ValidationResponse(valid=result.valid, errors=result.errors or [])


@router.get("/components/{component_id}")
async def get_component(component_id: str, session: EditorSession = Depends(get_session)) -> dict[str, Any]:
    try:
        return session.registry.require(component_id).to_document()
    except ComponentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post("/components", response_model=SaveResponse)
async def create_component(
    component: dict[str, Any],
    session: EditorSession = Depends(get_session),
    store: ComponentStore = Depends(get_store),
) -> SaveResponse:
    descriptor = _validated(component)
    session.registry.add(descriptor)
    return _save(descriptor, store)


@router.put("/components/{component_id}", response_model=SaveResponse)
async def update_component(
    component_id: str,
    component: dict[str, Any],
    session: EditorSession = Depends(get_session),
    store: ComponentStore = Depends(get_store),
) -> SaveResponse:
    descriptor = _validated({**component, "id": component_id})
    if not session.registry.update(descriptor):
        raise HTTPException(status_code=404, detail=f"Component not found: {component_id}")
    return _save(descriptor, store)


@router.delete("/components/{component_id}")
async def delete_component(
    component_id: str,
    session: EditorSession = Depends(get_session),
    store: ComponentStore = Depends(get_store),
) -> dict[str, Any]:
    if not session.delete_component(component_id):
        raise HTTPException(status_code=404, detail=f"Component not found: {component_id}")
    file_removed = store.delete(component_id)
    return {"deleted": component_id, "file_removed": file_removed, "missing_components": session.missing}


@router.post("/components/{component_id}/regenerate")
async def regenerate_component(
    component_id: str,
    background_tasks: BackgroundTasks,
    session: EditorSession = Depends(get_session),
) -> dict[str, list[str]]:
    job_ids = session.regenerate_component(component_id)
    if job_ids:
        background_tasks.add_task(session.healer.run_jobs, job_ids)
    return {"jobs": job_ids}
