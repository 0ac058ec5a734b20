"""/api/scene: validate, render and edit the session scene."""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.responses import Response

from quizscene.dependencies import get_session
from quizscene.engine.scene import SceneRender
from quizscene.models.requests import SceneRasterRequest, SceneRenderRequest, SceneTextRequest, SceneValidateRequest
from quizscene.models.responses import RenderedBlockResponse, RenderResponse, SceneStateResponse, ValidationResponse
from quizscene.services.session import EditorSession

router = APIRouter()


def _state(session: EditorSession) -> SceneStateResponse:
    return SceneStateResponse(
        scene=session.scene,
        text=session.scene_text,
        errors=session.errors,
        missing_components=session.missing,
    )


def _render(req: SceneRenderRequest, session: EditorSession) -> SceneRender:
    if req.scene is None:
        return session.render()
    return session.renderer.render(req.scene)


@router.post("/scene/validate", response_model=ValidationResponse)
async def validate_scene(req: SceneValidateRequest, session: EditorSession = Depends(get_session)) -> ValidationResponse:
    from quizscene.validation.references import validate_scene_with_catalog

    result = validate_scene_with_catalog(req.scene, session.registry, strict=req.strict)
    return ValidationResponse(
        valid=result.valid,
        errors=result.errors or [],
        missing_components=result.missing_component_ids,
    )


@router.post("/scene/render", response_model=RenderResponse)
async def render_scene(req: SceneRenderRequest, session: EditorSession = Depends(get_session)) -> RenderResponse:
    rendered = _render(req, session)
    return RenderResponse(
        svg=rendered.to_svg(title=req.title),
        blocks=[
            RenderedBlockResponse(
                block_id=b.block_id,
                type=b.type,
                kind=b.kind,
                svg=b.svg,
                placeholder=b.placeholder,
                missing_components=b.missing,
            )
            for b in rendered.blocks
        ],
        missing_components=rendered.missing_components,
        processing_time_ms=rendered.processing_time_ms,
    )


@router.post("/scene/render.png")
async def render_scene_png(req: SceneRasterRequest, session: EditorSession = Depends(get_session)) -> Response:
    from quizscene.svg.rasterizer import render_svg_to_png

    svg = _render(req, session).to_svg(title=req.title)
    try:
        png = render_svg_to_png(svg, width=req.width, height=req.height)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"PNG rendering failed: {e}") from e
    return Response(content=png, media_type="image/png")


@router.get("/scene", response_model=SceneStateResponse)
async def get_scene(session: EditorSession = Depends(get_session)) -> SceneStateResponse:
    return _state(session)


@router.put("/scene", response_model=SceneStateResponse)
async def put_scene(req: SceneTextRequest, session: EditorSession = Depends(get_session)) -> SceneStateResponse:
    session.apply_scene_text(req.text)
    return _state(session)


@router.post("/scene/replay")
async def replay_scene(background_tasks: BackgroundTasks, session: EditorSession = Depends(get_session)) -> dict[str, list[str]]:
    job_ids = session.replay()
    if job_ids:
        background_tasks.add_task(session.healer.run_jobs, job_ids)
    return {"jobs": job_ids, "missing_components": session.missing}
