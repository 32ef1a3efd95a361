"""Client-facing request and response models for the procedures."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, JsonValue, StringConstraints

TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
Role = Literal["assistant", "system", "user"]
FinishReason = Literal["stop", "length"]


class AccessConfig(BaseModel):
    """Caller-supplied credentials and host override.

    Empty values fall back to the process-wide ``ProviderDefaults``.
    """

    oai_key: TrimmedStr = ""
    oai_org: TrimmedStr = ""
    oai_host: TrimmedStr = ""
    heli_key: TrimmedStr = ""
    moderation_check: bool = False


class ModelParams(BaseModel):
    """Model id and sampling parameters."""

    id: str
    temperature: float | None = Field(default=None, ge=0, le=1)
    max_tokens: int | None = Field(default=None, ge=1, le=100000)


class ChatMessage(BaseModel):
    """Single chat message."""

    role: Role
    content: str


class FunctionProperty(BaseModel):
    type: Literal["string", "number", "integer", "boolean"]
    description: str | None = None
    enum: list[str] | None = None


class FunctionParameters(BaseModel):
    type: Literal["object"] = "object"
    properties: dict[str, FunctionProperty]
    required: list[str] | None = None


class FunctionDef(BaseModel):
    """JSON-schema function the model may decide to call."""

    name: str
    description: str | None = None
    parameters: FunctionParameters | None = None


class ChatGenerateInput(BaseModel):
    access: AccessConfig
    model: ModelParams
    history: list[ChatMessage]
    functions: list[FunctionDef] | None = None


class ModerationInput(BaseModel):
    access: AccessConfig
    text: str


class MessageOutcome(BaseModel):
    """The model answered with plain content."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    finish_reason: FinishReason | None


class FunctionCallOutcome(BaseModel):
    """The model asked for one of the offered functions to be called."""

    model_config = ConfigDict(frozen=True)

    function_name: str
    function_arguments: dict[str, JsonValue]


ChatOutcome = MessageOutcome | FunctionCallOutcome


class ModelDescription(BaseModel):
    """Catalog entry as returned by the provider; unknown fields are kept."""

    model_config = ConfigDict(extra="allow")

    id: str


class ModerationCategoryResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    flagged: bool
    categories: dict[str, bool] = Field(default_factory=dict)
    category_scores: dict[str, float] = Field(default_factory=dict)


class ModerationResult(BaseModel):
    """Moderation verdicts, passed through from the provider."""

    model_config = ConfigDict(extra="allow")

    id: str
    model: str
    results: list[ModerationCategoryResult]
