"""Eager catalog loading: one descriptor per JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from quizscene.catalog.registry import CatalogRegistry
from quizscene.models.catalog import ComponentDescriptor
from quizscene.validation.schema import parse_component, validate_component

logger = logging.getLogger(__name__)

BUILTIN_COMPONENTS_DIR = Path(__file__).parent / "components"


def load_descriptor(path: Path) -> ComponentDescriptor | None:
    """Read and validate one component file. Invalid files are logged and skipped."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Skipping component file %s: %s", path.name, e)
        return None

    result = validate_component(raw)
    if not result.valid:
        logger.warning(
            "Skipping invalid component file %s: %s",
            path.name,
            "; ".join(str(err) for err in result.errors or []),
        )
        return None

    descriptor = parse_component(raw)
    if descriptor.id != path.stem:
        logger.debug("Component file %s declares id %s", path.name, descriptor.id)
    return descriptor


def load_descriptors(directory: Path | str = BUILTIN_COMPONENTS_DIR) -> list[ComponentDescriptor]:
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Catalog directory %s does not exist", directory)
        return []
    descriptors = []
    for path in sorted(directory.glob("*.json")):
        descriptor = load_descriptor(path)
        if descriptor is not None:
            descriptors.append(descriptor)
    return descriptors


def load_catalog(*directories: Path | str) -> CatalogRegistry:
    """Build a registry from the given directories (the built-in catalog by default).

    Later directories override earlier ones on id collisions.
    """
    registry = CatalogRegistry()
    for directory in directories or (BUILTIN_COMPONENTS_DIR,):
        for descriptor in load_descriptors(directory):
            registry.add(descriptor)
    logger.info("Catalog loaded: %d component(s)", registry.count)
    return registry
