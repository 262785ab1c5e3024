"""
Viral analysis response parser.

Turns the vision model's free-text reply into a ViralAnalysis. The reply
is expected to follow the labeled layout requested by
prompts.viral.VIRAL_ANALYSIS_PROMPT, but nothing about it is trusted:
every field is extracted independently, numeric fields are clamped, and
anything missing or malformed falls back to a fixed default. Parsing
never raises.

A labeled span starts right after "LABEL:" and runs until the next line
that opens with an upper-case label ("[A-Z_]+:") or the end of the text.
Label lookup itself is case-insensitive, and markdown bold around a label
("**VERDICT:**") is tolerated.
"""

import logging
import re
from typing import Callable, List, Optional, TypeVar

from viral_or_vile.schemas.analysis import PlatformScores, Verdict, ViralAnalysis

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Defaults
DEFAULT_VIRAL_SCORE = 50
DEFAULT_VERDICT = Verdict.MODERATE
DEFAULT_DESCRIPTION = "Content analysis completed"
DEFAULT_BEST_POSTING_TIME = "Best time varies by audience"
DEFAULT_PLATFORM_SCORES = {
    "instagram": 50,
    "tiktok": 50,
    "linkedin": 30,
    "twitter": 40,
}

# Caps
MAX_SCORE = 100
MIN_SCORE = 0
MAX_TRENDING_ELEMENTS = 6
MAX_IMPROVEMENTS = 5
MAX_HASHTAGS = 8
MIN_IMPROVEMENT_LENGTH = 10

# Fallbacks
FALLBACK_TRENDING = ("Aesthetic", "Mood", "Vibes", "Content", "Style")
FALLBACK_TRENDING_COUNT = 3
FALLBACK_IMPROVEMENTS_HIGH = (
    "Add trending audio or music",
    "Optimize caption with hooks",
    "Use better lighting setup",
)
FALLBACK_IMPROVEMENTS_MEDIUM = (
    "Improve image composition",
    "Add more engaging elements",
    "Better timing for posting",
    "Use trending hashtags",
)
FALLBACK_IMPROVEMENTS_LOW = (
    "Completely rethink the concept",
    "Focus on emotional impact",
    "Improve visual quality significantly",
    "Study viral content in your niche",
    "Consider professional photography",
)
FALLBACK_HASHTAGS = ("#viral", "#trending", "#content", "#social", "#creative")

# Platform label -> PlatformScores field
PLATFORM_LABELS = {
    "instagram": "Instagram",
    "tiktok": "TikTok",
    "linkedin": "LinkedIn",
    "twitter": "Twitter",
}

# Next upper-case label line, or end of input. Case-sensitive:
# "Instagram:" inside a block is content, "HASHTAGS:" ends the block.
_SPAN_END = r"(?=\n[ \t]*\**(?-i:[A-Z_]+)\**:|\Z)"
_FLAGS = re.IGNORECASE | re.DOTALL


def _label(name: str) -> str:
    """Regex for "NAME:" with optional markdown bold and trailing spaces."""
    return rf"(?<![A-Za-z_]){re.escape(name)}\**:\**[ \t]*"


def _span_pattern(name: str) -> re.Pattern:
    return re.compile(_label(name) + r"(.*?)" + _SPAN_END, _FLAGS)


def _number_pattern(name: str, signed: bool = False) -> re.Pattern:
    sign = r"[-+]?" if signed else ""
    return re.compile(_label(name) + rf"\[?[ \t]*({sign}\d+)", re.IGNORECASE)


SCORE_PATTERN = _number_pattern("VIRAL_SCORE", signed=True)
VERDICT_PATTERN = re.compile(
    _label("VERDICT") + r"\[?[ \t]*(VIRAL|MODERATE|VILE)\b", re.IGNORECASE
)
DESCRIPTION_PATTERN = _span_pattern("DESCRIPTION")
TRENDING_PATTERN = _span_pattern("TRENDING_ELEMENTS")
IMPROVEMENTS_PATTERN = _span_pattern("IMPROVEMENTS")
HASHTAGS_PATTERN = _span_pattern("HASHTAGS")
BEST_TIME_PATTERN = _span_pattern("BEST_TIME")
PLATFORM_PATTERNS = {
    field: _number_pattern(label) for field, label in PLATFORM_LABELS.items()
}

# Newlines, "•", a line-leading "-" or "*" bullet, "1. " / "2) " markers.
# A "*" inside a line is markdown emphasis, not a bullet.
IMPROVEMENT_SPLIT = re.compile(
    r"\n|•|^[ \t]*[-*][ \t]+|(?<![\w.])\d+[.)](?=[ \t]|$)", re.MULTILINE
)
BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*")
HASHTAG_SPLIT = re.compile(r"[\s,]+")


def clamp_score(value: int, low: Optional[int] = MIN_SCORE, high: int = MAX_SCORE) -> int:
    """Clamp value to [low, high]; pass low=None to cap from above only."""
    value = min(high, value)
    if low is not None:
        value = max(low, value)
    return value


def _parse_int(raw: str) -> int:
    """
    int() for a captured, optionally signed digit run.

    Runs with more than three significant digits saturate at +/-1000, which
    is out of range either way and avoids int()'s digit limit.
    """
    sign = -1 if raw.startswith("-") else 1
    digits = raw.lstrip("+-").lstrip("0") or "0"
    if len(digits) > 3:
        return sign * 1000
    return sign * int(digits)


def _span(pattern: re.Pattern, text: str) -> Optional[str]:
    """Stripped text of a labeled span, None if absent or blank."""
    match = pattern.search(text)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def extract_viral_score(text: str) -> Optional[int]:
    match = SCORE_PATTERN.search(text)
    if not match:
        return None
    return clamp_score(_parse_int(match.group(1)))


def extract_description(text: str) -> Optional[str]:
    return _span(DESCRIPTION_PATTERN, text)


def extract_verdict(text: str) -> Optional[Verdict]:
    match = VERDICT_PATTERN.search(text)
    if not match:
        return None
    return Verdict(match.group(1).upper())


def extract_platform_score(text: str, platform: str) -> Optional[int]:
    """
    Score for one platform ("instagram", "tiktok", "linkedin", "twitter").

    Only capped at 100; the pattern accepts unsigned digits so there is
    nothing to raise from below.
    """
    match = PLATFORM_PATTERNS[platform].search(text)
    if not match:
        return None
    return clamp_score(_parse_int(match.group(1)), low=None)


def extract_trending_elements(text: str) -> List[str]:
    span = _span(TRENDING_PATTERN, text)
    if span is None:
        return []
    items = [item.strip() for item in span.split(",")]
    return [item for item in items if item][:MAX_TRENDING_ELEMENTS]


def extract_improvements(text: str) -> List[str]:
    span = _span(IMPROVEMENTS_PATTERN, text)
    if span is None:
        return []
    items = [BOLD_PATTERN.sub(r"\1", item).strip() for item in IMPROVEMENT_SPLIT.split(span)]
    return [item for item in items if len(item) > MIN_IMPROVEMENT_LENGTH][:MAX_IMPROVEMENTS]


def extract_hashtags(text: str) -> List[str]:
    span = _span(HASHTAGS_PATTERN, text)
    if span is None:
        return []
    tokens = [token.strip() for token in HASHTAG_SPLIT.split(span)]
    return [t for t in tokens if t.startswith("#") and len(t) > 1][:MAX_HASHTAGS]


def extract_best_posting_time(text: str) -> Optional[str]:
    return _span(BEST_TIME_PATTERN, text)


def generate_fallback_trending() -> List[str]:
    return list(FALLBACK_TRENDING[:FALLBACK_TRENDING_COUNT])


def generate_fallback_improvements(score: int) -> List[str]:
    """
    Canned suggestions chosen by score band.

    Args:
        score: Final viral score (extracted or default)

    Returns:
        3 items for score >= 70, 4 for 40-69, 5 below 40
    """
    if score >= 70:
        return list(FALLBACK_IMPROVEMENTS_HIGH)
    if score >= 40:
        return list(FALLBACK_IMPROVEMENTS_MEDIUM)
    return list(FALLBACK_IMPROVEMENTS_LOW)


def generate_fallback_hashtags() -> List[str]:
    return list(FALLBACK_HASHTAGS)


def _guarded(field: str, extract: Callable[[], Optional[T]], default: T) -> T:
    """Run one field extractor; any miss or error yields the default."""
    try:
        value = extract()
    except Exception as e:
        logger.warning(
            "Failed to extract field from model response",
            extra={"field": field, "error": str(e), "error_type": type(e).__name__},
        )
        return default
    return default if value is None else value


def parse_viral_analysis(response: str) -> ViralAnalysis:
    """
    Parse the model's reply into a ViralAnalysis.

    Total function: any input, including "" or text with no labels at all,
    produces a complete report. full_response is the input, unchanged.

    Args:
        response: Raw model reply

    Returns:
        ViralAnalysis with extracted values, defaults and fallbacks
    """
    text = response or ""

    viral_score = _guarded("viral_score", lambda: extract_viral_score(text), DEFAULT_VIRAL_SCORE)
    description = _guarded("description", lambda: extract_description(text), DEFAULT_DESCRIPTION)
    verdict = _guarded("verdict", lambda: extract_verdict(text), DEFAULT_VERDICT)

    platform_scores = {
        platform: _guarded(
            f"platform_scores.{platform}",
            lambda platform=platform: extract_platform_score(text, platform),
            default,
        )
        for platform, default in DEFAULT_PLATFORM_SCORES.items()
    }

    trending_elements = _guarded("trending_elements", lambda: extract_trending_elements(text), [])
    improvements = _guarded("improvements", lambda: extract_improvements(text), [])
    hashtags = _guarded("hashtags", lambda: extract_hashtags(text), [])
    best_posting_time = _guarded(
        "best_posting_time", lambda: extract_best_posting_time(text), DEFAULT_BEST_POSTING_TIME
    )

    fallbacks = []
    if not trending_elements:
        trending_elements = generate_fallback_trending()
        fallbacks.append("trending_elements")
    if not improvements:
        improvements = generate_fallback_improvements(viral_score)
        fallbacks.append("improvements")
    if not hashtags:
        hashtags = generate_fallback_hashtags()
        fallbacks.append("hashtags")

    if fallbacks:
        logger.debug(
            "Substituted fallback values",
            extra={"fields": fallbacks, "viral_score": viral_score},
        )

    return ViralAnalysis(
        viral_score=viral_score,
        verdict=verdict,
        description=description,
        platform_scores=PlatformScores(**platform_scores),
        trending_elements=trending_elements,
        improvements=improvements,
        hashtags=hashtags,
        best_posting_time=best_posting_time,
        full_response=text,
    )
