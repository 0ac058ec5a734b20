"""Component descriptor models: one catalog entry per reusable SVG component."""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ComponentType = Literal["primitive", "composite", "logic"]
ComponentCategory = Literal[
    "vehicle",
    "pedestrian",
    "sign",
    "road_surface",
    "infrastructure",
    "icon",
    "abstract",
    "ui",
]
LayerType = Literal["path", "circle", "rect", "text", "image"]

COMPONENT_CATEGORIES: tuple[str, ...] = (
    "vehicle",
    "pedestrian",
    "sign",
    "road_surface",
    "infrastructure",
    "icon",
    "abstract",
    "ui",
)

PropValue = Union[bool, int, float, str]


class RenderLayer(BaseModel):
    """A single tagged shape primitive drawn from the merged props."""

    type: LayerType
    props: dict[str, Any] = Field(default_factory=dict)
    condition: str | None = None  # Prop name; layer drawn only when truthy


class RenderSpec(BaseModel):
    svg: str | None = None
    layers: list[RenderLayer] | None = None


class ChildOffset(BaseModel):
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0


class CompositeChild(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    component_id: str = Field(..., alias="componentId")
    offset: ChildOffset | None = None
    # child prop -> parent prop expression
    props_mapping: dict[str, str] | None = Field(default=None, alias="propsMapping")


class ComponentDescriptor(BaseModel):
    """A catalog entry. Wire names keep the document's camelCase spelling."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    version: str
    type: ComponentType
    category: ComponentCategory
    name: str
    description: str
    tags: list[str] | None = None
    props_schema: dict[str, Any] = Field(..., alias="propsSchema")
    default_props: dict[str, PropValue] = Field(..., alias="defaultProps")
    render: RenderSpec | None = None
    children: list[CompositeChild] | None = None

    @property
    def has_visual(self) -> bool:
        if self.children:
            return True
        if self.render is None:
            return False
        return bool(self.render.svg) or bool(self.render.layers)

    def to_document(self) -> dict[str, Any]:
        """Dump back to the on-disk JSON shape."""
        return self.model_dump(by_alias=True, exclude_none=True)
