"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SceneValidateRequest(BaseModel):
    scene: Any = Field(..., description="Scene document to validate")
    strict: bool = Field(default=False, description="Also check definition_card image components")


class SceneRenderRequest(BaseModel):
    scene: Any = Field(default=None, description="Scene document; the session scene when omitted")
    title: str = Field(default="", description="Optional <title> for the SVG document")


class SceneRasterRequest(SceneRenderRequest):
    width: int = Field(default=800, description="PNG width in pixels")
    height: int = Field(default=800, description="PNG height in pixels")


class SceneTextRequest(BaseModel):
    text: str = Field(..., description="Raw scene JSON text, as typed in the editor")


class ComponentValidateRequest(BaseModel):
    component: Any = Field(..., description="Component descriptor to validate")


class ChatRequest(BaseModel):
    message: str = Field(..., description="Instruction for the Scene-Director")
