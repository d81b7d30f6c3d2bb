"""
AI flows used by the site actions.

Provides two flows and the boundary that calls them:
- linux_cybersecurity_networking_qa(QAInput) -> QAOutput
- conversational_chat(ChatInput) -> ChatOutput
- run_flow(flow, payload, output_model) -> FlowResult   # never raises
"""

from __future__ import annotations

import logging
import traceback
from typing import Any, Awaitable, Callable, List, Optional, Type

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel

import app.prompts as prompts
from app.config import get_settings
from app.models import ChatInput, ChatMessage, ChatOutput, QAInput, QAOutput
from app.state import FlowResult

logger = logging.getLogger(__name__)

Flow = Callable[[Any], Awaitable[Any]]


class FlowError(RuntimeError):
    """Raised when a flow cannot produce a usable answer."""


def build_llm(temperature: Optional[float] = None) -> ChatOpenAI:
    settings = get_settings()
    temp = settings.LLM_TEMPERATURE if temperature is None else float(temperature)
    return ChatOpenAI(
        model=settings.LLM_MODEL,
        temperature=temp,
        max_tokens=settings.LLM_MAX_TOKENS,
    )


def _reply_text(resp: Any) -> str:
    content = getattr(resp, "content", resp)
    if isinstance(content, list):
        # multi-part content: keep the text parts only
        content = "".join(
            part.get("text", "") if isinstance(part, dict) else str(part) for part in content
        )
    text = (content or "").strip() if isinstance(content, str) else ""
    if not text:
        raise FlowError("Model returned an empty reply")
    return text


def to_langchain_messages(history: List[ChatMessage]) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    for turn in history:
        if turn.role == "user":
            messages.append(HumanMessage(content=turn.content))
        else:
            messages.append(AIMessage(content=turn.content))
    return messages


async def linux_cybersecurity_networking_qa(payload: QAInput, llm=None) -> QAOutput:
    llm = llm or build_llm()
    messages = [
        SystemMessage(content=prompts.QA_SYSTEM_PROMPT),
        HumanMessage(content=prompts.qa_user_prompt(payload.question)),
    ]
    resp = await llm.ainvoke(messages)
    return QAOutput(answer=_reply_text(resp))


async def conversational_chat(payload: ChatInput, llm=None) -> ChatOutput:
    llm = llm or build_llm()
    messages: List[BaseMessage] = [SystemMessage(content=prompts.CHAT_SYSTEM_PROMPT)]
    messages.extend(to_langchain_messages(payload.history))
    messages.append(HumanMessage(content=payload.current_message))
    resp = await llm.ainvoke(messages)
    return ChatOutput(response=_reply_text(resp))


async def run_flow(flow: Flow, payload: Any, output_model: Type[BaseModel]) -> FlowResult:
    """Await `flow(payload)` and turn the outcome into a FlowResult.

    The output is validated against `output_model` so a malformed reply is
    reported as a failure rather than passed through.
    """
    try:
        raw = await flow(payload)
        value = raw if isinstance(raw, output_model) else output_model.model_validate(raw)
    except Exception as exc:
        logger.debug("Flow %s failed: %s", getattr(flow, "__name__", flow), exc)
        return FlowResult.failure(exc, traceback.format_exc())
    return FlowResult.success(value)
