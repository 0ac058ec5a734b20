"""QuizScene render engine."""

from quizscene.engine.config import RenderConfig
from quizscene.engine.layout import Rect, resolve_layout
from quizscene.engine.scene import SceneRender, SceneRenderer, render_scene
from quizscene.engine.template import merge_props, render_template

__all__ = [
    "RenderConfig",
    "Rect",
    "resolve_layout",
    "SceneRender",
    "SceneRenderer",
    "render_scene",
    "merge_props",
    "render_template",
]
