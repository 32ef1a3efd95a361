"""Normalize chat completion choices into a message or a function call.

The provider signals a function call only through ``finish_reason``; the rest
of the choice has to agree with it. Any disagreement means the provider
behaves differently from what this layer was written against, so every check
here raises instead of guessing.
"""

from __future__ import annotations

import json

from llm_procedures.errors import FunctionArgumentsDecodeError, UpstreamContractViolation
from llm_procedures.providers.wire import (
    FUNCTION_CALL_FINISH_REASON,
    WireChatCompletion,
    WireChoice,
)
from llm_procedures.types import ChatOutcome, FunctionCallOutcome, MessageOutcome


def single_choice(completion: WireChatCompletion) -> WireChoice:
    """Return the only choice of a single-completion response."""
    if len(completion.choices) != 1:
        raise UpstreamContractViolation(
            f"[OpenAI Issue] Expected 1 completion, got {len(completion.choices)}"
        )
    return completion.choices[0]


def disambiguate(choice: WireChoice, functions_requested: bool) -> ChatOutcome:
    """Map a choice to exactly one of ``MessageOutcome`` or ``FunctionCallOutcome``."""
    if choice.finish_reason == FUNCTION_CALL_FINISH_REASON:
        return _function_call_outcome(choice, functions_requested)
    return _message_outcome(choice)


def _function_call_outcome(choice: WireChoice, functions_requested: bool) -> FunctionCallOutcome:
    if not functions_requested:
        raise UpstreamContractViolation(
            "[OpenAI Issue] Received a function call without a function call request"
        )

    message = choice.message
    if message.content is not None:
        raise UpstreamContractViolation("[OpenAI Issue] Expected a function call, got a message")

    call = message.function_call
    if call is None or not call.name or not call.arguments:
        raise UpstreamContractViolation(
            "[OpenAI Issue] Issue with the function call, missing name or arguments"
        )

    try:
        arguments = json.loads(call.arguments)
    except ValueError as exc:
        raise FunctionArgumentsDecodeError(call.arguments) from exc
    if not isinstance(arguments, dict):
        raise FunctionArgumentsDecodeError(call.arguments)

    return FunctionCallOutcome(function_name=call.name, function_arguments=arguments)


def _message_outcome(choice: WireChoice) -> MessageOutcome:
    message = choice.message
    if message.content is None:
        raise UpstreamContractViolation("[OpenAI Issue] Expected a message, got a null message")

    finish_reason = choice.finish_reason
    if finish_reason not in ("stop", "length", None):
        raise UpstreamContractViolation(
            f"[OpenAI Issue] Unexpected finish reason: {finish_reason}"
        )

    return MessageOutcome(role=message.role, content=message.content, finish_reason=finish_reason)
