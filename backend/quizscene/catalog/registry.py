"""Catalog registry: the editor session's store of component descriptors.

Usage:
    registry = CatalogRegistry()
    unsubscribe = registry.subscribe(lambda change: revalidate())
    registry.add(descriptor)          # listener fires before add() returns
    registry.get("vehicle_sedan")

The registry is owned by a session and passed by reference; there is no
module-level instance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Literal, Mapping

from quizscene.models.catalog import ComponentDescriptor

logger = logging.getLogger(__name__)

ChangeAction = Literal["add", "update", "remove"]


@dataclass(frozen=True)
class RegistryChange:
    action: ChangeAction
    component_id: str


Listener = Callable[[RegistryChange], None]


class ComponentNotFound(LookupError):
    def __init__(self, component_id: str) -> None:
        super().__init__(f"Component not found: {component_id}")
        self.component_id = component_id


class CatalogRegistry:
    """In-memory mapping of component id -> descriptor with change notification."""

    def __init__(self, descriptors: Iterable[ComponentDescriptor] = ()) -> None:
        self._components: dict[str, ComponentDescriptor] = {}
        self._listeners: list[Listener] = []
        for descriptor in descriptors:
            self._components[descriptor.id] = descriptor

    def get(self, component_id: str) -> ComponentDescriptor | None:
        return self._components.get(component_id)

    def require(self, component_id: str) -> ComponentDescriptor:
        descriptor = self._components.get(component_id)
        if descriptor is None:
            raise ComponentNotFound(component_id)
        return descriptor

    def list(self) -> list[ComponentDescriptor]:
        return list(self._components.values())

    def list_by_category(self, category: str) -> list[ComponentDescriptor]:
        return [c for c in self._components.values() if c.category == category]

    def add(self, descriptor: ComponentDescriptor) -> None:
        replaced = descriptor.id in self._components
        self._components[descriptor.id] = descriptor
        logger.debug(
            "%s component %s (%s)",
            "Replaced" if replaced else "Registered",
            descriptor.id,
            descriptor.category,
        )
        self._notify(RegistryChange("add", descriptor.id))

    def update(self, descriptor: ComponentDescriptor) -> bool:
        """Replace an existing descriptor. Unknown ids are ignored, never inserted."""
        if descriptor.id not in self._components:
            logger.debug("Update ignored: unknown component %s", descriptor.id)
            return False
        self._components[descriptor.id] = descriptor
        self._notify(RegistryChange("update", descriptor.id))
        return True

    def remove(self, component_id: str) -> bool:
        if self._components.pop(component_id, None) is None:
            return False
        logger.debug("Removed component %s", component_id)
        self._notify(RegistryChange("remove", component_id))
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> Mapping[str, ComponentDescriptor]:
        """Read-only view of the current contents, for one validation or render pass."""
        return MappingProxyType(dict(self._components))

    def _notify(self, change: RegistryChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception as e:
                logger.warning("Registry listener failed on %s %s: %s", change.action, change.component_id, e)

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._components

    def __len__(self) -> int:
        return len(self._components)

    @property
    def count(self) -> int:
        return len(self._components)
