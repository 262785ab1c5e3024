"""
Vision Client Interface Contract.

Defines the contract for sending one image plus an instruction prompt to a
multimodal model and getting its free-text reply back. Implementations
make exactly one call per invocation: no retries, no streaming.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IVisionClient(ABC):
    """
    Abstract base class for multimodal model clients.

    Implementations handle:
    - Message formatting (prompt text + attached image)
    - API communication with the model server
    - Translating transport/API failures into UpstreamModelError
    - Structured logging with correlation IDs
    """

    @abstractmethod
    async def analyze_image(
        self,
        image_data_url: str,
        prompt: str,
        correlation_id: Optional[str] = None,
    ) -> str:
        """
        Ask the model about an image.

        Args:
            image_data_url: The image as a data URL (data:<mime>;base64,...)
            prompt: Instruction text sent alongside the image
            correlation_id: Optional request ID for tracing

        Returns:
            The model's raw reply text ("" when the model sent no content)

        Raises:
            UpstreamModelError: For any failure talking to the model
        """
        pass
