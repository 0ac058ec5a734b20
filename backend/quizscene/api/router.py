"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from quizscene.api import chat, components, health, jobs, scene

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(components.router)
api_router.include_router(scene.router)
api_router.include_router(chat.router)
api_router.include_router(jobs.router)
