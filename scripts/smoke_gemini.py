#!/usr/bin/env python
"""
Manual smoke test against a running backend.
Sends a few prompts to /api/gemini and prints the model catalog.
"""
import asyncio
import httpx
from pprint import pprint

API_BASE_URL = "http://localhost:3000"  # Change this to your deployed API URL if needed

TEST_PROMPTS = [
    "What is 2+2?",
    "Write a haiku about autumn",
    "   ",  # expected to be rejected with 400
]


async def test_models_endpoint():
    """Show which models the configured key can use."""
    print("\n=== Model Catalog ===\n")

    async with httpx.AsyncClient() as client:
        response = await client.get(f"{API_BASE_URL}/_models")
        if response.status_code == 200:
            names = [m.get("name") for m in response.json().get("models", [])]
            pprint(names)
        else:
            print(f"Error: {response.status_code} - {response.text}")


async def test_prompt_endpoint():
    """Send each test prompt to /api/gemini."""
    print("\n=== Prompt Endpoint ===\n")

    async with httpx.AsyncClient() as client:
        for prompt in TEST_PROMPTS:
            print(f"Prompt: {prompt!r}")
            response = await client.post(
                f"{API_BASE_URL}/api/gemini",
                json={"prompt": prompt},
                timeout=60.0
            )
            print(f"Status: {response.status_code}")
            pprint(response.json())
            print("\n" + "-" * 70 + "\n")


async def main():
    print("Starting smoke tests...")
    await test_models_endpoint()
    await test_prompt_endpoint()


if __name__ == "__main__":
    asyncio.run(main())
