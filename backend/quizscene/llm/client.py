"""LangChain ChatAnthropic wrapper for the Scene-Director and Component-Designer."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from quizscene.config import settings
from quizscene.llm.model_router import get_model_for_task
from quizscene.llm.prompts import COMPONENT_DESIGNER_PROMPT, build_scene_director_prompt
from quizscene.models.catalog import ComponentDescriptor

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "[LLM not configured: set ANTHROPIC_API_KEY in .env]"


async def get_chat_response(
    system_prompt: str,
    request: str,
    history: list[dict[str, str]],
    task: str,
) -> str:
    """Get LLM response using LangChain."""
    if not settings.anthropic_api_key:
        return NOT_CONFIGURED_MESSAGE

    from langchain_anthropic import ChatAnthropic
    from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

    model_id = get_model_for_task(task)
    llm = ChatAnthropic(
        model=model_id,
        api_key=settings.anthropic_api_key,
        max_tokens=8192,
    )

    messages: list = [SystemMessage(content=system_prompt)]
    for msg in history:
        if msg.get("role") == "user":
            messages.append(HumanMessage(content=msg["content"]))
        elif msg.get("role") == "assistant":
            messages.append(AIMessage(content=msg["content"]))

    messages.append(HumanMessage(content=request))

    logger.info("LLM %s request (%s, %d history message(s))", task, model_id, len(history))
    response = await llm.ainvoke(messages)
    return str(response.content)


async def generate_scene(
    request: str,
    catalog: Iterable[ComponentDescriptor],
    current_scene: Any | None = None,
    history: list[dict[str, str]] | None = None,
) -> str:
    """Ask the Scene-Director for a full scene. Returns the raw response text."""
    system_prompt = build_scene_director_prompt(catalog, current_scene)
    return await get_chat_response(system_prompt, request, history or [], task="scene")


async def generate_component(request: str, history: list[dict[str, str]] | None = None) -> str:
    """Ask the Component-Designer for one descriptor. Returns the raw response text."""
    return await get_chat_response(COMPONENT_DESIGNER_PROMPT, request, history or [], task="component")
