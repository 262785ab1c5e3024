"""
Pydantic schemas for the image analysis endpoint.

Field names are snake_case in Python and camelCase on the wire
(viralScore, platformScores, trendingElements, bestPostingTime,
fullResponse) to match what the results dashboard reads.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Verdict(str, Enum):
    """Overall call on the image's viral potential."""

    VIRAL = "VIRAL"
    MODERATE = "MODERATE"
    VILE = "VILE"


class PlatformScores(BaseModel):
    """
    Per-platform suitability scores.

    Capped at 100 by the parser; no lower bound is enforced. The defaults
    are deliberately uneven (LinkedIn and Twitter start lower).
    """
    instagram: int = Field(default=50, le=100, description="Instagram score")
    tiktok: int = Field(default=50, le=100, description="TikTok score")
    linkedin: int = Field(default=30, le=100, description="LinkedIn score")
    twitter: int = Field(default=40, le=100, description="Twitter score")


class ViralAnalysis(BaseModel):
    """
    Structured viral potential report built from the model's free text.

    Attributes:
        viral_score: Overall score in [0, 100]
        verdict: VIRAL, MODERATE or VILE
        description: Short description of the content
        platform_scores: Per-platform scores
        trending_elements: Up to 6 detected trending elements
        improvements: Up to 5 actionable suggestions
        hashtags: Up to 8 hashtags, each starting with '#'
        best_posting_time: Posting time recommendation
        full_response: The raw model reply, verbatim
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    viral_score: int = Field(default=50, ge=0, le=100)
    verdict: Verdict = Field(default=Verdict.MODERATE)
    description: str
    platform_scores: PlatformScores = Field(default_factory=PlatformScores)
    trending_elements: List[str] = Field(max_length=6)
    improvements: List[str] = Field(max_length=5)
    hashtags: List[str] = Field(max_length=8)
    best_posting_time: str
    full_response: str


class ErrorResponse(BaseModel):
    """Body returned for input and upstream failures."""
    error: str = Field(description="Human readable failure message")
