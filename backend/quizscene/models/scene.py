"""Scene document models.

A scene is an ordered list of blocks. Each block is one variant of a tagged
union keyed by ``type``; the variant fixes the shape of ``content``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

BLOCK_TYPES: tuple[str, ...] = (
    "road_scene",
    "definition_card",
    "gauge",
    "timeline",
    "comparison_table",
    "cause_effect",
    "icon_grid",
)


class SceneMetadata(BaseModel):
    question_text: str | None = None
    tags: list[str] | None = None
    difficulty: float | None = None


class BlockLayout(BaseModel):
    """Placement inside the container, in percent (0-100)."""

    x: float
    y: float
    w: float
    h: float


class Transform(BaseModel):
    x: float
    y: float
    rotation: float | None = None
    scale: float | None = None
    z_index: int | None = None


class SceneObject(BaseModel):
    id: str
    component_id: str
    transform: Transform
    props: dict[str, Any] | None = None


# ── Content variants ──


class RoadSceneContent(BaseModel):
    background: str | None = None
    objects: list[SceneObject]


class DefinitionCardContent(BaseModel):
    title: str | None = None
    text: str
    image_component_id: str | None = None


class GaugeZone(BaseModel):
    min: float
    max: float
    color: str


class GaugeContent(BaseModel):
    value: float
    max: float
    min: float = 0.0
    label: str | None = None
    unit: str = ""
    zones: list[GaugeZone] = Field(default_factory=list)


class TimelineEvent(BaseModel):
    id: str
    time: str | None = None
    title: str
    description: str | None = None
    icon: str | None = None


class TimelineContent(BaseModel):
    events: list[TimelineEvent]
    orientation: Literal["horizontal", "vertical"] = "vertical"


class ComparisonRow(BaseModel):
    label: str
    values: list[str]


class ComparisonTableContent(BaseModel):
    headers: list[str]
    rows: list[ComparisonRow]


class FreeformContent(BaseModel):
    """Payload of block types the renderer only acknowledges."""

    model_config = ConfigDict(extra="allow")


# ── Block variants ──


class _BlockBase(BaseModel):
    id: str
    title: str | None = None
    layout: BlockLayout | None = None


class RoadSceneBlock(_BlockBase):
    type: Literal["road_scene"]
    content: RoadSceneContent


class DefinitionCardBlock(_BlockBase):
    type: Literal["definition_card"]
    content: DefinitionCardContent


class GaugeBlock(_BlockBase):
    type: Literal["gauge"]
    content: GaugeContent


class TimelineBlock(_BlockBase):
    type: Literal["timeline"]
    content: TimelineContent


class ComparisonTableBlock(_BlockBase):
    type: Literal["comparison_table"]
    content: ComparisonTableContent


class CauseEffectBlock(_BlockBase):
    type: Literal["cause_effect"]
    content: FreeformContent


class IconGridBlock(_BlockBase):
    type: Literal["icon_grid"]
    content: FreeformContent


SceneBlock = Annotated[
    Union[
        RoadSceneBlock,
        DefinitionCardBlock,
        GaugeBlock,
        TimelineBlock,
        ComparisonTableBlock,
        CauseEffectBlock,
        IconGridBlock,
    ],
    Field(discriminator="type"),
]


class SceneJSON(BaseModel):
    id: str
    version: Union[int, str]
    metadata: SceneMetadata | None = None
    blocks: list[SceneBlock]

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)
