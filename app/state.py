"""Explicit result of calling an AI flow."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class FlowResult:
    """Either the flow's validated output or the error it raised."""

    value: Optional[Any] = None
    error: Optional[BaseException] = None
    traceback: str = ""  # formatted stack of `error`, empty on success

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "FlowResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException, traceback: str = "") -> "FlowResult":
        return cls(error=error, traceback=traceback)
