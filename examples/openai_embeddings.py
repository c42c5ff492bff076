"""
openai_embeddings.py: Embedding example.

Embeds a few sentences and prints each vector's size next to its text.

Usage:
    export OPENAI_API_KEY=sk-...
    python examples/openai_embeddings.py
"""

from ai_integrations import OpenAIClient
from ai_integrations.utils import format_token_count


async def main() -> None:
    async with OpenAIClient() as client:
        response = await client.create_embedding(
            ["The cat sat on the mat.", "Stocks rallied on Friday."],
            dimensions=256,
        )
        for row in response.data:
            print(f"{row.index}: {len(row.embedding)} dims  {row.text}")
        if response.usage is not None:
            print(format_token_count(response.usage.total_tokens))


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
