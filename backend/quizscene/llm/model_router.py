"""Task → model selection. Mid-tier for scene direction and component design."""

from __future__ import annotations

from quizscene.config import settings

_TASK_MODEL_MAP = {
    "scene": "mid",
    "component": "mid",
}


def get_model_for_task(task: str) -> str:
    tier = _TASK_MODEL_MAP.get(task, "cheap")
    if tier == "cheap":
        return settings.model_cheap
    elif tier == "mid":
        return settings.model_mid
    else:
        return settings.model_frontier
