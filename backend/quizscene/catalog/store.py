"""Directory-backed component store: the sink generated components are saved to."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from quizscene.models.catalog import ComponentDescriptor
from quizscene.validation.schema import validate_component

logger = logging.getLogger(__name__)


@dataclass
class SaveResult:
    success: bool
    file_path: str | None = None
    error: str | None = None


def component_file_path(component_id: str, directory: Path | str) -> Path:
    return Path(directory) / f"{component_id}.json"


def prepare_component_for_save(component: ComponentDescriptor | dict[str, Any]) -> tuple[bool, str | None, list[str]]:
    """Validate and pretty-print. Returns ``(valid, json_text, errors)``."""
    raw = component.to_document() if isinstance(component, ComponentDescriptor) else component
    result = validate_component(raw)
    if not result.valid:
        return False, None, [str(e) for e in result.errors or []]
    return True, json.dumps(raw, indent=2, ensure_ascii=False), []


def manual_save_instructions(component: ComponentDescriptor, directory: Path | str) -> str:
    path = component_file_path(component.id, directory)
    content = json.dumps(component.to_document(), indent=2, ensure_ascii=False)
    return (
        "To save the component manually:\n\n"
        f"1. Create the file: {path}\n"
        "2. Paste this content:\n\n"
        f"{content}\n\n"
        "3. Restart the server to load it into the catalog"
    )


class ComponentStore:
    """Writes one ``<id>.json`` per component. Never raises from ``save``."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def save(self, component: ComponentDescriptor | dict[str, Any]) -> SaveResult:
        valid, text, errors = prepare_component_for_save(component)
        if not valid or text is None:
            return SaveResult(success=False, error=f"Validation failed: {', '.join(errors)}")

        component_id = component.id if isinstance(component, ComponentDescriptor) else component["id"]
        path = component_file_path(component_id, self.directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write component %s: %s", component_id, e)
            return SaveResult(success=False, error=str(e))

        logger.info("Saved component %s to %s", component_id, path)
        return SaveResult(success=True, file_path=str(path))

    def save_batch(self, components: list[ComponentDescriptor]) -> list[SaveResult]:
        return [self.save(c) for c in components]

    def delete(self, component_id: str) -> bool:
        path = component_file_path(component_id, self.directory)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning("Could not delete component file %s: %s", path, e)
            return False
        logger.info("Deleted component file %s", path)
        return True
