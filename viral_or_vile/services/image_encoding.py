"""
Image encoding helpers.

The model only accepts images inline, so uploads are sent as base64,
wrapped in a data URL for the OpenAI-style message format.
"""

import base64
from typing import Optional

DEFAULT_IMAGE_MIME = "image/jpeg"


def encode_image_base64(image_bytes: bytes) -> str:
    """Return the image bytes as a base64 ASCII string."""
    return base64.b64encode(image_bytes).decode("utf-8")


def encode_data_url(image_bytes: bytes, mime: Optional[str] = None) -> str:
    """
    Wrap image bytes in a data URL.

    Args:
        image_bytes: Raw image file contents
        mime: Content type of the upload; parameters such as
            "; charset=..." are dropped. Anything that is not image/*
            (missing, application/octet-stream) becomes image/jpeg.

    Returns:
        "data:<mime>;base64,<payload>"
    """
    mime_type = (mime or "").split(";", 1)[0].strip().lower()
    if not mime_type.startswith("image/"):
        mime_type = DEFAULT_IMAGE_MIME
    return f"data:{mime_type};base64,{encode_image_base64(image_bytes)}"


def is_image_content_type(content_type: Optional[str]) -> bool:
    """
    True unless the part explicitly declares a non-image type.

    Browsers sometimes omit the type (or send application/octet-stream for
    unknown extensions); those are let through and left to the model.
    """
    if not content_type:
        return True
    mime_type = content_type.split(";", 1)[0].strip().lower()
    return mime_type.startswith("image/") or mime_type == "application/octet-stream"
