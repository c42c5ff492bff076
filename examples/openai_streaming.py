"""
openai_streaming.py: Streamed chat completion example.

Prints the assistant reply as it grows, one snapshot per received frame.

Usage:
    export OPENAI_API_KEY=sk-...
    python examples/openai_streaming.py
"""

from ai_integrations import ChatMessage, OpenAIClient


async def main() -> None:
    async with OpenAIClient() as client:
        stream = client.create_chat_completion_stream(
            [
                ChatMessage(role="system", content="You are a concise assistant."),
                ChatMessage(role="user", content="Explain event streams in two sentences."),
            ],
            model="gpt-4o-mini",
        )

        printed = 0
        async for snapshot in stream:
            text = snapshot.message.content
            print(text[printed:], end="", flush=True)
            printed = len(text)
        print()


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
