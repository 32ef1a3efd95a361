import unittest
from typing import Any

from llm_procedures.errors import (
    BadUpstreamRequest,
    FunctionArgumentsDecodeError,
    UpstreamContractViolation,
)
from llm_procedures.outcomes import disambiguate, single_choice
from llm_procedures.providers.wire import WireChatCompletion, WireChoice
from llm_procedures.types import FunctionCallOutcome, MessageOutcome


def _choice(**message: Any) -> WireChoice:
    finish_reason = message.pop("finish_reason", "stop")
    message.setdefault("role", "assistant")
    return WireChoice.model_validate({"index": 0, "message": message, "finish_reason": finish_reason})


def _function_choice(name: Any = "f", arguments: Any = '{"a": 1}', content: Any = None) -> WireChoice:
    return _choice(
        content=content,
        function_call={"name": name, "arguments": arguments},
        finish_reason="function_call",
    )


class SingleChoiceTests(unittest.TestCase):
    def test_exactly_one(self) -> None:
        completion = WireChatCompletion.model_validate(
            {"choices": [{"message": {"role": "assistant", "content": "hi"}, "finish_reason": "stop"}]}
        )
        self.assertEqual(single_choice(completion).message.content, "hi")

    def test_wrong_count_rejected(self) -> None:
        choice = {"message": {"role": "assistant", "content": "hi"}, "finish_reason": "stop"}
        for choices in ([], [choice, choice]):
            with self.subTest(count=len(choices)):
                completion = WireChatCompletion.model_validate({"choices": choices})
                with self.assertRaises(UpstreamContractViolation) as ctx:
                    single_choice(completion)
                self.assertIn(f"got {len(choices)}", str(ctx.exception))


class DisambiguateTests(unittest.TestCase):
    def test_plain_message(self) -> None:
        outcome = disambiguate(_choice(content="Hello"), functions_requested=False)
        self.assertEqual(outcome, MessageOutcome(role="assistant", content="Hello", finish_reason="stop"))

    def test_length_and_null_finish_reason(self) -> None:
        self.assertEqual(disambiguate(_choice(content="x", finish_reason="length"), True).finish_reason, "length")
        self.assertIsNone(disambiguate(_choice(content="x", finish_reason=None), False).finish_reason)

    def test_function_call(self) -> None:
        outcome = disambiguate(_function_choice(), functions_requested=True)
        self.assertIsInstance(outcome, FunctionCallOutcome)
        self.assertEqual(outcome.function_name, "f")
        self.assertEqual(outcome.function_arguments, {"a": 1})

    def test_function_call_without_request(self) -> None:
        with self.assertRaises(UpstreamContractViolation):
            disambiguate(_function_choice(), functions_requested=False)

    def test_function_call_with_content(self) -> None:
        with self.assertRaises(UpstreamContractViolation):
            disambiguate(_function_choice(content="also text"), functions_requested=True)

    def test_function_call_missing_parts(self) -> None:
        for name, arguments in ((None, "{}"), ("", "{}"), ("f", None), ("f", "")):
            with self.subTest(name=name, arguments=arguments):
                with self.assertRaises(UpstreamContractViolation):
                    disambiguate(_function_choice(name=name, arguments=arguments), functions_requested=True)

        choice = _choice(content=None, finish_reason="function_call")
        with self.assertRaises(UpstreamContractViolation):
            disambiguate(choice, functions_requested=True)

    def test_arguments_not_json(self) -> None:
        for arguments in ("not json", "[1, 2]", '"text"'):
            with self.subTest(arguments=arguments):
                with self.assertRaises(FunctionArgumentsDecodeError) as ctx:
                    disambiguate(_function_choice(arguments=arguments), functions_requested=True)
                self.assertIsInstance(ctx.exception, BadUpstreamRequest)
                self.assertEqual(ctx.exception.arguments, arguments)

    def test_null_content_message(self) -> None:
        with self.assertRaises(UpstreamContractViolation):
            disambiguate(_choice(content=None), functions_requested=False)

    def test_unknown_finish_reason(self) -> None:
        with self.assertRaises(UpstreamContractViolation):
            disambiguate(_choice(content="x", finish_reason="content_filter"), functions_requested=False)


if __name__ == "__main__":
    unittest.main()
