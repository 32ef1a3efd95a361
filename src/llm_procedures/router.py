"""Async procedures exposing chat generation, moderation and model listing."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from llm_procedures.catalog import filter_and_sort
from llm_procedures.errors import (
    BadUpstreamRequest,
    ClientDisconnected,
    InvalidInput,
    ProcedureError,
    UpstreamContractViolation,
)
from llm_procedures.outcomes import disambiguate, single_choice
from llm_procedures.providers.openai import (
    CHAT_PATH,
    MODELS_PATH,
    MODERATIONS_PATH,
    OpenAITransport,
    build_chat_payload,
)
from llm_procedures.providers.wire import WireChatCompletion, WireModelList
from llm_procedures.settings import ProviderDefaults, load_defaults
from llm_procedures.types import (
    AccessConfig,
    ChatGenerateInput,
    ChatOutcome,
    ModelDescription,
    ModerationInput,
    ModerationResult,
)

MODERATION_MODEL = "text-moderation-latest"

_ModelT = TypeVar("_ModelT", bound=BaseModel)

logger = logging.getLogger(__name__)


class OpenAIRouter:
    """Entry points for an RPC layer; each call issues at most one HTTP request."""

    def __init__(
        self,
        *,
        defaults: ProviderDefaults | None = None,
        transport: OpenAITransport | None = None,
    ) -> None:
        self._defaults = defaults if defaults is not None else load_defaults()
        self._transport = transport if transport is not None else OpenAITransport(self._defaults)

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> OpenAIRouter:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def chat_generate_with_functions(
        self, request: ChatGenerateInput | Mapping[str, Any]
    ) -> ChatOutcome:
        """Generate one completion, returning either a message or a function call."""
        req = _validate(ChatGenerateInput, request)
        functions_requested = bool(req.functions)

        payload = build_chat_payload(
            req.model,
            req.history,
            req.functions if functions_requested else None,
            n=1,
            stream=False,
        )
        data = await self._transport.post(req.access, payload, CHAT_PATH)
        completion = _parse_wire(WireChatCompletion, data)

        choice = single_choice(completion)
        return disambiguate(choice, functions_requested)

    async def moderation(self, request: ModerationInput | Mapping[str, Any]) -> ModerationResult:
        """Check ``text`` against the provider content policy."""
        req = _validate(ModerationInput, request)
        try:
            data = await self._transport.post(
                req.access,
                {"input": req.text, "model": MODERATION_MODEL},
                MODERATIONS_PATH,
            )
            return ModerationResult.model_validate(data)
        except (ProcedureError, httpx.HTTPError, ValidationError) as exc:
            if _is_connection_reset(exc):
                logger.debug("moderation request closed by the client: %s", exc)
                raise ClientDisconnected() from exc
            logger.error("moderation error: %s", exc)
            raise BadUpstreamRequest(
                f"Error: {str(exc) or type(exc).__name__}",
                status_code=getattr(exc, "status_code", None),
            ) from exc

    async def list_models(self, access: AccessConfig | Mapping[str, Any]) -> list[ModelDescription]:
        """Return the chat-capable models of the provider catalog."""
        acc = _validate(AccessConfig, access)
        data = await self._transport.get(acc, MODELS_PATH)
        models = _parse_wire(WireModelList, data)
        return filter_and_sort(models.data or [])


def _validate(model_cls: type[_ModelT], value: _ModelT | Mapping[str, Any]) -> _ModelT:
    if isinstance(value, model_cls):
        return value
    try:
        return model_cls.model_validate(value)
    except ValidationError as exc:
        raise InvalidInput(str(exc)) from exc


def _parse_wire(model_cls: type[_ModelT], data: Any) -> _ModelT:
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise UpstreamContractViolation(f"[OpenAI Issue] Unexpected response shape: {exc}") from exc


def _is_connection_reset(exc: BaseException) -> bool:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, (ConnectionResetError, httpx.RemoteProtocolError)):
            return True
        current = current.__cause__ or current.__context__
    return False
