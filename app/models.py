"""Payload shapes shared by the handlers and the AI flows."""

from __future__ import annotations
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.config import MESSAGE_MIN_LENGTH, NAME_MIN_LENGTH


class ContactSubmission(BaseModel):
    name: str = Field(..., min_length=NAME_MIN_LENGTH)
    email: EmailStr
    message: str = Field(..., min_length=MESSAGE_MIN_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def bare_address(cls, v):
        # EmailStr alone also takes "Name <addr>" and one-letter TLDs
        if isinstance(v, str):
            if any(ch in v for ch in "<> \t"):
                raise ValueError("expected a bare email address")
            domain = v.rpartition("@")[2]
            if "." in domain and len(domain.rpartition(".")[2]) < 2:
                raise ValueError("top-level domain is too short")
        return v


class ContactFormState(BaseModel):
    message: str
    success: bool
    errors: Optional[Dict[str, List[str]]] = None


class FrontendChatMessage(BaseModel):
    """A chat turn as the browser keeps it."""

    id: str
    sender: Literal["user", "ai"]
    text: str


class ChatMessage(BaseModel):
    """A chat turn as the conversational flow expects it."""

    role: Literal["user", "model"]
    content: str


class QAInput(BaseModel):
    question: str = Field(..., description="Linux, cybersecurity or networking question")


class QAOutput(BaseModel):
    answer: str


class ChatInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_message: str = Field(..., alias="currentMessage")
    history: List[ChatMessage] = Field(default_factory=list)


class ChatOutput(BaseModel):
    response: str


class ActionError(BaseModel):
    error: str
