"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests
- A fake vision client and helpers for multipart uploads
"""

import os
from typing import List, Optional

import pytest


# Set test environment variables BEFORE any imports
# This must happen first to ensure settings load with test values
os.environ["OLLAMA_HOST"] = "http://ollama.test:11434"
os.environ["VISION_MODEL"] = "llava:test"
os.environ["MAX_UPLOAD_BYTES"] = "1024"
os.environ["LOG_JSON"] = "true"


SAMPLE_RESPONSE = """VIRAL_SCORE: 82
DESCRIPTION: A golden retriever wearing sunglasses on a beach at sunset.
The warm colors make it pop.
VERDICT: VIRAL

PLATFORM_SCORES:
Instagram: 90
TikTok: 85
LinkedIn: 20
Twitter: 65

TRENDING_ELEMENTS: Pets in costumes, Golden hour, Beach vibes

IMPROVEMENTS:
1. Add a trending audio clip for Reels
2. Crop tighter on the dog's face
- Post a behind-the-scenes follow-up

HASHTAGS: #dogsofinstagram #goldenhour #beachday, #viral

BEST_TIME: Saturday 10am-12pm local time"""


class FakeVisionClient:
    """Records calls and returns a canned reply (or raises)."""

    def __init__(self, reply: str = SAMPLE_RESPONSE, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[dict] = []

    async def analyze_image(self, image_data_url, prompt, correlation_id=None):
        self.calls.append({
            "image_data_url": image_data_url,
            "prompt": prompt,
            "correlation_id": correlation_id,
        })
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def anyio_backend():
    """
    Configure anyio backend for async tests.

    Returns:
        str: Backend name ("asyncio")
    """
    return "asyncio"


@pytest.fixture
def sample_response() -> str:
    return SAMPLE_RESPONSE


@pytest.fixture
def fake_vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def png_bytes() -> bytes:
    """A few bytes with a PNG signature; the model never sees them in tests."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def vision_client_factory():
    """Build FakeVisionClient instances with a custom reply or error."""
    return FakeVisionClient
