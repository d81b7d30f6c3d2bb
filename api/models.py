from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.models import FrontendChatMessage


class AskRequest(BaseModel):
    question: str = Field(..., description="User question")


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_message: str = Field(..., alias="currentMessage", description="Latest user message")
    history: List[FrontendChatMessage] = Field(
        default_factory=list, description="Earlier turns as held by the browser"
    )


class ErrorEnvelope(BaseModel):
    code: str
    message: str
    details: Optional[dict] = None
