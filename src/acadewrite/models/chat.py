"""Pydantic models for the chat sidebar."""

from __future__ import annotations

import time
import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ChatRole = Literal["user", "model"]


class ChatMessage(BaseModel):
    """One conversation turn. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: ChatRole
    content: str
    timestamp: float = Field(default_factory=time.time)
