"""OpenAI HTTP transport and chat payload mapping."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from llm_procedures.errors import (
    BadUpstreamRequest,
    TransportDecodeError,
    UpstreamTimeout,
    UpstreamTransportError,
)
from llm_procedures.providers.access import resolve_access
from llm_procedures.providers.wire import describe_error
from llm_procedures.settings import ProviderDefaults
from llm_procedures.types import AccessConfig, ChatMessage, FunctionDef, ModelParams

CHAT_PATH = "/v1/chat/completions"
MODERATIONS_PATH = "/v1/moderations"
MODELS_PATH = "/v1/models"


def build_chat_payload(
    model: ModelParams,
    history: Sequence[ChatMessage],
    functions: Sequence[FunctionDef] | None,
    n: int,
    stream: bool,
) -> dict[str, Any]:
    """Map validated request parts onto the chat completions request body."""
    payload: dict[str, Any] = {
        "model": model.id,
        "messages": [_serialize_message(m) for m in history],
    }

    if functions:
        payload["functions"] = [f.model_dump(exclude_none=True) for f in functions]
        payload["function_call"] = "auto"

    # zero means "not set" for both knobs
    if model.temperature:
        payload["temperature"] = model.temperature
    if model.max_tokens:
        payload["max_tokens"] = model.max_tokens

    payload["n"] = n
    payload["stream"] = stream
    return payload


def _serialize_message(message: ChatMessage) -> dict[str, Any]:
    return {"role": message.role, "content": message.content}


class OpenAITransport:
    """Minimal async wrapper performing authenticated GET/POST calls."""

    _logger = logging.getLogger(__name__)

    def __init__(
        self,
        defaults: ProviderDefaults,
        *,
        timeout_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._defaults = defaults
        self._client = httpx.AsyncClient(timeout=timeout_s, transport=transport, follow_redirects=True)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> OpenAITransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def get(self, access: AccessConfig, api_path: str) -> Any:
        """GET ``api_path`` and return the decoded JSON body."""
        return await self._request("GET", access, api_path)

    async def post(self, access: AccessConfig, body: Any, api_path: str) -> Any:
        """POST ``body`` as JSON to ``api_path`` and return the decoded JSON body."""
        return await self._request("POST", access, api_path, body)

    async def _request(self, method: str, access: AccessConfig, api_path: str, body: Any = None) -> Any:
        resolved = resolve_access(access, api_path, self._defaults)
        self._logger.debug("%s %s", method, resolved.url)
        try:
            response = await self._client.request(method, resolved.url, headers=resolved.headers, json=body)
        except httpx.TimeoutException as exc:
            raise UpstreamTimeout(f"[Issue] {method} {api_path} timed out") from exc
        except httpx.TransportError as exc:
            raise UpstreamTransportError(f"[Issue] {method} {api_path}: {exc}") from exc
        return self._json_or_error(response)

    @staticmethod
    def _json_or_error(response: httpx.Response) -> Any:
        if not response.is_success:
            try:
                error_body = response.json()
            except ValueError:
                raise BadUpstreamRequest(
                    f"[Issue] {response.reason_phrase}",
                    status_code=response.status_code,
                ) from None
            raise BadUpstreamRequest(
                f"[OpenAI Issue] {describe_error(error_body)}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise TransportDecodeError(f"[OpenAI Issue] {exc}") from exc
