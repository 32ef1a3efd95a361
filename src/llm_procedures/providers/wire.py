"""OpenAI wire shapes, as far as this layer depends on them."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from llm_procedures.types import ModelDescription, Role

FUNCTION_CALL_FINISH_REASON = "function_call"


class WireFunctionCall(BaseModel):
    name: str | None = None
    # JSON-encoded by the model, not guaranteed to be valid
    arguments: str | None = None


class WireResponseMessage(BaseModel):
    role: Role
    content: str | None = None
    function_call: WireFunctionCall | None = None


class WireChoice(BaseModel):
    index: int = 0
    message: WireResponseMessage
    finish_reason: str | None = None


class WireChatCompletion(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    model: str | None = None
    choices: list[WireChoice] = []


class WireModelList(BaseModel):
    model_config = ConfigDict(extra="allow")

    data: list[ModelDescription] | None = None


class WireErrorDetail(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: str | None = None


class WireErrorEnvelope(BaseModel):
    """Provider error body: ``{"error": {"message": ...}}`` or ``{"error": "..."}``."""

    model_config = ConfigDict(extra="allow")

    error: WireErrorDetail | str | None = None


def describe_error(body: Any) -> str:
    """Pick the most useful human-readable message out of an error body."""
    try:
        envelope = WireErrorEnvelope.model_validate(body)
    except ValidationError:
        envelope = None

    if envelope is not None:
        if isinstance(envelope.error, WireErrorDetail) and envelope.error.message:
            return envelope.error.message
        if isinstance(envelope.error, str) and envelope.error:
            return envelope.error

    if isinstance(body, str):
        return body or "Unknown error"
    return json.dumps(body) if body else "Unknown error"
