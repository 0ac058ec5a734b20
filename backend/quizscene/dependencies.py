"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from quizscene.catalog.loader import BUILTIN_COMPONENTS_DIR, load_catalog
from quizscene.catalog.store import ComponentStore
from quizscene.config import settings
from quizscene.services.autoheal import AutoHealer
from quizscene.services.jobs import GenerationQueue
from quizscene.services.session import EditorSession


def get_settings():
    return settings


@lru_cache(maxsize=1)
def get_store() -> ComponentStore:
    return ComponentStore(settings.component_store_dir)


@lru_cache(maxsize=1)
def get_session() -> EditorSession:
    """The process-wide editor session: built-in catalog, then extra and saved components."""
    directories = [BUILTIN_COMPONENTS_DIR]
    for extra in (settings.catalog_dir, settings.component_store_dir):
        if extra and Path(extra).is_dir():
            directories.append(Path(extra))
    registry = load_catalog(*directories)

    queue = GenerationQueue()
    healer = AutoHealer(registry, queue, store=get_store())
    return EditorSession(registry, queue, healer, strict=settings.strict_references)
