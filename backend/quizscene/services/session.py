"""Editor session: the current scene, its validation state and the chat loop."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from quizscene.catalog.registry import CatalogRegistry, RegistryChange
from quizscene.engine.scene import SceneRender, SceneRenderer
from quizscene.llm.extraction import JSONExtractionError, extract_json
from quizscene.models.validation import ValidationResult
from quizscene.services.autoheal import AutoHealer
from quizscene.services.jobs import GenerationQueue
from quizscene.validation.references import validate_scene_with_catalog

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON syntax"

# Async callable (request, catalog, current_scene, history) -> raw LLM answer.
DirectFn = Callable[..., Awaitable[str]]


@dataclass
class ChatOutcome:
    message: str
    missing: list[str] = field(default_factory=list)
    scene_updated: bool = False
    error: str | None = None


def empty_scene() -> dict[str, Any]:
    return {"id": "scene_001", "version": 1, "metadata": {}, "blocks": []}


class EditorSession:
    """Owns one scene document, replaced wholesale on every accepted edit.

    The session subscribes to the registry, so adding or removing a component
    (by hand or through auto-heal) re-runs validation of the current scene.
    """

    def __init__(
        self,
        registry: CatalogRegistry,
        queue: GenerationQueue | None = None,
        healer: AutoHealer | None = None,
        scene: dict[str, Any] | None = None,
        strict: bool = False,
    ) -> None:
        self.registry = registry
        self.queue = queue or GenerationQueue()
        self.healer = healer or AutoHealer(registry, self.queue)
        self.strict = strict
        self.renderer = SceneRenderer(registry)

        self.scene: dict[str, Any] = scene if scene is not None else empty_scene()
        self.scene_text = json.dumps(self.scene, indent=2)
        self.errors: list[str] = []
        self.missing: list[str] = []
        self.history: list[dict[str, str]] = []

        self._unsubscribe = registry.subscribe(self._on_registry_change)
        self.revalidate()

    def close(self) -> None:
        self._unsubscribe()

    # -- scene edits -------------------------------------------------------

    def apply_scene_text(self, text: str) -> list[str]:
        """Manual JSON edit. The scene only changes when the text is fully valid."""
        self.scene_text = text
        try:
            raw = json.loads(text)
        except json.JSONDecodeError:
            self.errors = [INVALID_JSON_MESSAGE]
            return self.errors

        result = self._validate(raw)
        if result.valid:
            self.scene = raw
            self.errors = []
            self.missing = []
        else:
            self.errors = result.messages
            self.missing = result.missing_component_ids
        return self.errors

    def apply_llm_response(self, raw_text: str) -> ChatOutcome:
        """Adopt the scene in a Scene-Director answer, even when it has errors."""
        try:
            raw = extract_json(raw_text)
        except JSONExtractionError as e:
            logger.warning("Could not extract a scene from the LLM answer: %s", e)
            return ChatOutcome(message=raw_text, error=str(e))

        result = self._validate(raw)
        self.scene = raw
        self.scene_text = json.dumps(raw, indent=2)
        self.errors = result.messages
        self.missing = result.missing_component_ids

        if self.missing:
            message = (
                f"Scene generated, but {len(self.missing)} component(s) are missing. "
                "Generating them in the background..."
            )
        elif not result.valid:
            message = "Scene has errors:\n" + "\n".join(self.errors)
        else:
            message = "Scene updated."
        return ChatOutcome(message=message, missing=list(self.missing), scene_updated=True)

    async def chat(self, request: str, direct: DirectFn | None = None) -> ChatOutcome:
        """One Scene-Director round trip. History is kept for follow-up turns."""
        if direct is None:
            from quizscene.llm.client import generate_scene as direct

        raw_text = await direct(request, self.registry.list(), self.scene, list(self.history))
        outcome = self.apply_llm_response(raw_text)
        self.history.append({"role": "user", "content": request})
        self.history.append({"role": "assistant", "content": raw_text})
        return outcome

    # -- catalog -----------------------------------------------------------

    def delete_component(self, component_id: str) -> bool:
        return self.registry.remove(component_id)

    def regenerate_component(self, component_id: str) -> list[str]:
        """Queue a fresh generation of ``component_id``, even if it exists."""
        if component_id not in self.missing:
            self.missing.append(component_id)
        return self.healer.schedule([component_id], force=True)

    def replay(self) -> list[str]:
        """Re-validate and queue generation for whatever is still missing."""
        self.revalidate()
        if not self.missing:
            return []
        return self.healer.schedule(self.missing)

    def revalidate(self) -> ValidationResult:
        result = self._validate(self.scene)
        self.errors = result.messages
        self.missing = result.missing_component_ids
        return result

    def render(self) -> SceneRender:
        return self.renderer.render(self.scene)

    def _validate(self, raw: Any) -> ValidationResult:
        return validate_scene_with_catalog(raw, self.registry, strict=self.strict)

    def _on_registry_change(self, change: RegistryChange) -> None:
        logger.debug("Catalog %s %s, revalidating scene", change.action, change.component_id)
        self.revalidate()
