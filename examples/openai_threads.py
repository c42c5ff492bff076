"""
openai_threads.py: Assistant thread example.

Creates an assistant and a thread, starts a run, and waits for it to finish.

Usage:
    export OPENAI_API_KEY=sk-...
    python examples/openai_threads.py
"""

from ai_integrations import OpenAIClient, TimeoutExceededError, configure


async def main() -> None:
    configure(debug=False)

    async with OpenAIClient() as client:
        assistant = await client.create_assistant(
            "gpt-4o-mini",
            name="Math Tutor",
            instructions="Answer math questions step by step.",
        )
        thread = await client.create_thread()
        await client.create_thread_message(thread.id, "What is 17 * 23?")

        run = await client.run_thread(thread.id, assistant.id)
        try:
            run = await client.wait_for_thread_run(
                thread.id, run.id, poll_interval_s=1.0, timeout_s=90.0
            )
        except TimeoutExceededError as error:
            print(f"Gave up: {error} (last status {error.last_status})")
            return

        if run.status != "completed":
            print(f"Run ended as {run.status}")
            return

        for message in await client.list_thread_messages(thread.id):
            print(f"{message.role}: {message.content}")


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
