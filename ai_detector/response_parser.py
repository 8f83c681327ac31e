"""
Best-effort extraction of a structured verdict from a vision model's prose.

Each step is a pure function over the raw text that never raises; when a
pattern is absent the step falls back to a fixed default, so partial or
garbled model output degrades to an "Uncertain" result instead of an error.
"""
import re
import logging
from typing import List, Optional

from .models import REASONS_NOT_FOUND, AILikelihood, AnalysisResult

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_LENGTH = 150
ELLIPSIS = "..."

DEFAULT_SCORE = 0.5

MAX_REASONS = 5
MAX_REASON_LENGTH = 100
REASONS_EMPTY = "Analysis could not determine specific reasons"

# Most restrictive first
LABEL_THRESHOLDS = [
    (0.8, "Very Likely AI-generated"),
    (0.6, "Likely AI-generated"),
    (0.4, "Uncertain"),
    (0.2, "Likely Real"),
]
LOWEST_LABEL = "Very Likely Real"

_FIRST_LINE = re.compile(r"(.+?)(?=\n\n|\n|$)")
_NUMBER = r"\d+(?:\.\d+)?|\.\d+"
_SCORE = re.compile(
    rf"(?:score|likelihood)[^\n]*?(?P<keyword>{_NUMBER})"
    rf"|(?P<suffixed>{_NUMBER})(?=\s*/\s*1|\s*%)",
    re.IGNORECASE,
)
_REASONS_SECTION = re.compile(
    r"\b(?:reasons|features|evidence|indicators|signs)[ \t]*(?::|includes?\b:?|(?=\n))(?P<body>[\s\S]+)",
    re.IGNORECASE,
)
_LIST_ITEM_SPLIT = re.compile(r"\n-|\n\d+\.|\n\*")


def extract_description(text: str) -> str:
    match = _FIRST_LINE.match(text)
    if not match:
        return ""

    first_line = match.group(1).rstrip("\r")
    if len(first_line) > DESCRIPTION_MAX_LENGTH:
        return first_line[:DESCRIPTION_MAX_LENGTH] + ELLIPSIS
    return first_line


def extract_score(text: str) -> Optional[float]:
    """Return the first score mentioned in the text, normalised to [0, 1]"""
    match = _SCORE.search(text)
    if not match:
        return None

    score = float(match.group("keyword") or match.group("suffixed"))
    # Convert percentage to decimal if needed
    if 1 < score <= 100:
        score = score / 100
    return min(max(score, 0.0), 1.0)


def label_for_score(score: float) -> str:
    for threshold, label in LABEL_THRESHOLDS:
        if score >= threshold:
            return label
    return LOWEST_LABEL


def extract_reasons(text: str) -> List[str]:
    section = _REASONS_SECTION.search(text)
    if not section:
        return [REASONS_NOT_FOUND]

    candidates = (piece.strip() for piece in _LIST_ITEM_SPLIT.split(section.group("body")))
    reasons = [r for r in candidates if 0 < len(r) < MAX_REASON_LENGTH][:MAX_REASONS]
    return reasons or [REASONS_EMPTY]


def parse_analysis_text(text: Optional[str]) -> AnalysisResult:
    """
    Convert free-form model output into an AnalysisResult.

    Args:
        text (str): Raw model response; None or empty yields default fields

    Returns:
        AnalysisResult: Always structurally valid
    """
    text = text or ""
    logger.debug(f"Full model response: {text}")

    score = extract_score(text)
    if score is None:
        score = DEFAULT_SCORE

    return AnalysisResult(
        description=extract_description(text),
        ai_likelihood=AILikelihood(score=score, label=label_for_score(score)),
        reasons=extract_reasons(text),
    )
