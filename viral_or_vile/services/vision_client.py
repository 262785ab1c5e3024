"""
Ollama Vision Client Implementation.

Talks to a local Ollama server through its OpenAI-compatible API
(<OLLAMA_HOST>/v1) using the openai SDK. One chat completion per image,
with the SDK's own retries turned off: a failed call is reported to the
caller, never repeated.
"""

import logging
import time
import uuid
from typing import Optional

from openai import AsyncOpenAI

from viral_or_vile.core.config import settings
from viral_or_vile.core.exceptions import UpstreamModelError
from viral_or_vile.services.interfaces.vision_client import IVisionClient

logger = logging.getLogger(__name__)


class OllamaVisionClient(IVisionClient):
    """Multimodal client for a local Ollama server (OpenAI-compatible API)"""

    # Ollama ignores the key, but the SDK insists on one
    API_KEY = "ollama"

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url or settings.ollama_openai_base_url
        self.model = model or settings.vision_model
        self.timeout = timeout or settings.model_timeout_seconds

        self.client = AsyncOpenAI(
            api_key=self.API_KEY,
            base_url=self.base_url,
            timeout=self.timeout,
            max_retries=0,
        )

        logger.info(
            "OllamaVisionClient initialized",
            extra={
                "model": self.model,
                "base_url": self.base_url,
                "timeout_seconds": self.timeout,
            }
        )

    async def analyze_image(
        self,
        image_data_url: str,
        prompt: str,
        correlation_id: Optional[str] = None,
    ) -> str:
        """
        Send the prompt and image as a single user message.

        Args:
            image_data_url: The image as a data URL (data:<mime>;base64,...)
            prompt: Instruction text sent alongside the image
            correlation_id: Optional request ID for tracing

        Returns:
            The model's reply text, "" if the model returned no content

        Raises:
            UpstreamModelError: Wrapping whatever the SDK or transport raised
        """
        if correlation_id is None:
            correlation_id = str(uuid.uuid4())

        logger.info(
            "Requesting image analysis",
            extra={
                "correlation_id": correlation_id,
                "model": self.model,
                "prompt_length": len(prompt),
                "image_url_length": len(image_data_url),
            }
        )

        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": image_data_url}},
                ],
            }
        ]

        start_time = time.perf_counter()
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
            )
            text = ""
            if response.choices:
                text = response.choices[0].message.content or ""

        except Exception as e:
            logger.error(
                "Image analysis failed",
                extra={
                    "correlation_id": correlation_id,
                    "model": self.model,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
                exc_info=True
            )
            raise UpstreamModelError(str(e) or type(e).__name__) from e

        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Image analysis completed",
            extra={
                "correlation_id": correlation_id,
                "model": self.model,
                "latency_ms": round(latency_ms, 2),
                "response_length": len(text),
            }
        )

        return text
