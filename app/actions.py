"""
Server actions called by the portfolio front end.

Provides three public entry points:
- submit_contact_form(prev_state, form_data) -> ContactFormState
- ask_ai(payload) -> QAOutput | ActionError
- send_chat_message(current_message, history) -> ChatOutput | ActionError

None of them raise for bad input or upstream failures; the outcome is always
returned as data.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

import app.config as cfg
from app.flows import Flow, conversational_chat, linux_cybersecurity_networking_qa, run_flow
from app.logging import EventRecorder, default_recorder
from app.models import (
    ActionError,
    ChatInput,
    ChatMessage,
    ChatOutput,
    ContactFormState,
    ContactSubmission,
    FrontendChatMessage,
    QAInput,
    QAOutput,
)

CONTACT_FIELDS = ("name", "email", "message")

# pydantic error types reported with pydantic's own wording
_PASSTHROUGH_ERROR_TYPES = {"missing", "string_type"}


def flatten_field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Group validation errors by top-level field, keeping their order."""
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        loc = err.get("loc") or ("",)
        field = str(loc[0])
        if err.get("type") in _PASSTHROUGH_ERROR_TYPES or field not in cfg.FIELD_MESSAGES:
            msg = err.get("msg", "Invalid value.")
        else:
            msg = cfg.FIELD_MESSAGES[field]
        errors.setdefault(field, []).append(msg)
    return errors


async def submit_contact_form(
    prev_state: Optional[ContactFormState],
    form_data: Mapping[str, Any],
    *,
    recorder: Optional[EventRecorder] = None,
    delay: Optional[float] = None,
) -> ContactFormState:
    # prev_state only exists for progressive-enhancement form re-rendering
    rec = recorder or default_recorder
    raw = {field: form_data.get(field) for field in CONTACT_FIELDS}
    try:
        submission = ContactSubmission.model_validate(raw)
    except ValidationError as exc:
        return ContactFormState(
            message=cfg.CONTACT_VALIDATION_FAILED,
            errors=flatten_field_errors(exc),
            success=False,
        )

    # No mail or storage backend yet: the submission is only logged.
    rec.record(
        {
            "event": "contact_form.submitted",
            "name": submission.name,
            "email": str(submission.email),
            "message": submission.message,
        }
    )

    wait = cfg.get_settings().CONTACT_SUBMIT_DELAY_SECONDS if delay is None else delay
    if wait > 0:
        await asyncio.sleep(wait)

    return ContactFormState(message=cfg.CONTACT_THANK_YOU, success=True)


def _record_failure(rec: EventRecorder, event: str, result) -> None:
    rec.record(
        {
            "event": event,
            "level": "error",
            "error_type": type(result.error).__name__,
            "error": str(result.error),
            "traceback": result.traceback,
        }
    )


async def ask_ai(
    payload: QAInput,
    *,
    flow: Optional[Flow] = None,
    recorder: Optional[EventRecorder] = None,
) -> Union[QAOutput, ActionError]:
    rec = recorder or default_recorder
    result = await run_flow(flow or linux_cybersecurity_networking_qa, payload, QAOutput)
    if not result.ok:
        _record_failure(rec, "ask_ai.failed", result)
        return ActionError(error=cfg.ASK_AI_ERROR)
    return result.value


def to_flow_history(history: Sequence[FrontendChatMessage]) -> List[ChatMessage]:
    """Rename sender/text to role/content, turn for turn and in order."""
    return [
        ChatMessage(role="user" if msg.sender == "user" else "model", content=msg.text)
        for msg in history
    ]


async def send_chat_message(
    current_message: str,
    history: Sequence[FrontendChatMessage],
    *,
    flow: Optional[Flow] = None,
    recorder: Optional[EventRecorder] = None,
) -> Union[ChatOutput, ActionError]:
    rec = recorder or default_recorder
    payload = ChatInput(current_message=current_message, history=to_flow_history(history))
    result = await run_flow(flow or conversational_chat, payload, ChatOutput)
    if not result.ok:
        # Detail goes to the log only, never into the client message.
        _record_failure(rec, "send_chat_message.failed", result)
        return ActionError(error=cfg.CHAT_ERROR)
    return result.value
