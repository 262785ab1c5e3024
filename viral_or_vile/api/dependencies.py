"""
FastAPI dependency functions.

Routes receive their collaborators through Depends(...) so tests can swap
them out with app.dependency_overrides.
"""

from typing import Annotated, Optional

from fastapi import Depends

from viral_or_vile.services.interfaces.vision_client import IVisionClient
from viral_or_vile.services.vision_client import OllamaVisionClient


_vision_client: Optional[IVisionClient] = None


def get_vision_client() -> IVisionClient:
    """
    Shared vision client, built on first use.

    The underlying openai SDK client keeps a connection pool, so one
    instance serves every request.
    """
    global _vision_client
    if _vision_client is None:
        _vision_client = OllamaVisionClient()
    return _vision_client


VisionClient = Annotated[IVisionClient, Depends(get_vision_client)]
