"""
Image Analysis Endpoint

Accepts one uploaded image, asks the vision model for a viral potential
assessment with a fixed prompt, and returns the parsed report.

One request in, one model call, one result out: no retries, no caching,
nothing persisted.
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, Request, UploadFile

from viral_or_vile.api.dependencies import VisionClient
from viral_or_vile.core.config import settings
from viral_or_vile.core.exceptions import (
    ImageInputError,
    ImageTooLargeError,
    UnsupportedImageTypeError,
)
from viral_or_vile.prompts import VIRAL_ANALYSIS_PROMPT
from viral_or_vile.schemas.analysis import ErrorResponse, ViralAnalysis
from viral_or_vile.services.image_encoding import encode_data_url, is_image_content_type
from viral_or_vile.services.viral_parser import parse_viral_analysis

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_upload(image: Optional[UploadFile], max_bytes: int) -> bytes:
    """
    Validate the uploaded part and return its bytes.

    Raises:
        ImageInputError: No image part, or an empty one
        UnsupportedImageTypeError: Part declares a non-image content type
        ImageTooLargeError: More than max_bytes of data
    """
    if image is None:
        raise ImageInputError("No image file provided")

    if not is_image_content_type(image.content_type):
        raise UnsupportedImageTypeError(
            f"Uploaded file must be an image (got {image.content_type})"
        )

    if image.size is not None and image.size > max_bytes:
        raise ImageTooLargeError(f"Image exceeds the {max_bytes} byte upload limit")

    # One byte past the limit is enough to know it is too big
    data = await image.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise ImageTooLargeError(f"Image exceeds the {max_bytes} byte upload limit")
    if not data:
        raise ImageInputError("No image file provided")

    return data


@router.post(
    "/analyze",
    response_model=ViralAnalysis,
    summary="Analyze an image's viral potential",
    responses={
        400: {"model": ErrorResponse, "description": "No image supplied"},
        413: {"model": ErrorResponse, "description": "Image too large"},
        415: {"model": ErrorResponse, "description": "Upload is not an image"},
        500: {"model": ErrorResponse, "description": "Model call failed"},
    },
)
async def analyze_image(
    request: Request,
    vision_client: VisionClient,
    image: Optional[UploadFile] = File(None, description="Image to analyze"),
) -> ViralAnalysis:
    """
    Score an uploaded image for viral potential.

    Flow:
    1. Validate and read the multipart "image" field
    2. Encode it as a data URL
    3. Send it with the fixed analysis prompt to the model (single call)
    4. Parse the free-text reply into a structured report

    Failures are rendered as {"error": "..."} by the app's exception
    handlers: 400/413/415 before the model is contacted, 500 if the model
    call itself fails. Parsing never fails.
    """
    request_id = getattr(request.state, "request_id", None)

    data = await read_upload(image, settings.max_upload_bytes)
    image_data_url = encode_data_url(data, image.content_type)

    logger.info(
        "Analyzing uploaded image",
        extra={
            "request_id": request_id,
            "upload_filename": image.filename,
            "content_type": image.content_type,
            "size_bytes": len(data),
        }
    )

    reply = await vision_client.analyze_image(
        image_data_url=image_data_url,
        prompt=VIRAL_ANALYSIS_PROMPT,
        correlation_id=request_id,
    )

    analysis = parse_viral_analysis((reply or "").strip())

    logger.info(
        "Image analysis parsed",
        extra={
            "request_id": request_id,
            "viral_score": analysis.viral_score,
            "verdict": analysis.verdict.value,
        }
    )

    return analysis
