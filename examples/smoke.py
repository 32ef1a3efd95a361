import asyncio

from llm_procedures.router import OpenAIRouter
from llm_procedures.settings import ProviderDefaults


async def main() -> None:
    defaults = ProviderDefaults(openai_api_key="", openai_api_org_id="", openai_api_host="https://api.openai.com", helicone_api_key="")

    async with OpenAIRouter(defaults=defaults) as router:
        # Demonstrate credential gating (no key in the defaults nor in the call)
        try:
            await router.chat_generate_with_functions(
                {
                    "access": {},
                    "model": {"id": "gpt-4", "temperature": 0.2},
                    "history": [{"role": "user", "content": "What's the weather in Paris?"}],
                    "functions": [
                        {
                            "name": "get_weather",
                            "parameters": {
                                "type": "object",
                                "properties": {"city": {"type": "string"}},
                                "required": ["city"],
                            },
                        }
                    ],
                }
            )
        except Exception as e:
            print("Expected error:", type(e).__name__, e)


if __name__ == "__main__":
    asyncio.run(main())
