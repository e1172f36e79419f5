"""Coerce any candidate deep-tier result into a valid ``EnrichedAnalysis``.

``normalize_enriched`` is total: whatever the candidate holds, the return value
satisfies the persisted schema. Applying it to its own output is a no-op.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from annotator.analysis.schemas import ApiStatus, EnrichedAnalysis, SentimentLabel
from annotator.config import AnalysisPolicy

_TOPIC_KEYS = ("topic", "name")
_WARNING_KEYS = ("type", "warning")


def _field(candidate: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in candidate:
            return candidate[key]
    return None


def coerce_sentiment(value: Any, qualifiers: tuple[str, ...]) -> SentimentLabel:
    """Map a free-form label onto the enum, dropping qualifiers like "very"."""
    if isinstance(value, SentimentLabel):
        return value
    if not isinstance(value, str):
        return SentimentLabel.neutral
    words = [w for w in value.strip().lower().split() if w not in qualifiers]
    label = " ".join(words)
    if label in SentimentLabel.__members__:
        return SentimentLabel(label)
    return SentimentLabel.neutral


def coerce_score(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    score = float(value)
    if not math.isfinite(score):
        return 0.0
    return max(-1.0, min(1.0, score))


def coerce_strings(value: Any, keys: tuple[str, ...]) -> list[str]:
    """Keep plain strings; pull a known field out of mapping entries; drop the rest."""
    if not isinstance(value, (list, tuple)):
        return []
    items: list[str] = []
    for entry in value:
        if isinstance(entry, Mapping):
            entry = _field(entry, *keys)
        if isinstance(entry, str) and entry.strip():
            items.append(entry.strip())
    return items


def excerpt(text: str, policy: AnalysisPolicy) -> str:
    """Leading slice of the source text, or the placeholder when there is none."""
    stripped = text.strip()
    if not stripped:
        return policy.summary_placeholder
    limit = policy.summary_excerpt_length
    if len(stripped) <= limit:
        return stripped
    return stripped[:limit] + "..."


def coerce_summary(value: Any, source_text: str, policy: AnalysisPolicy) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return excerpt(source_text, policy)


def coerce_status(value: Any) -> ApiStatus:
    if isinstance(value, ApiStatus):
        return value
    if isinstance(value, str):
        for status in ApiStatus:
            if value.strip().lower() == status.value.lower():
                return status
    return ApiStatus.success


def normalize_enriched(
    candidate: Mapping[str, Any] | EnrichedAnalysis | None,
    *,
    source_text: str = "",
    api_status: ApiStatus | None = None,
    policy: AnalysisPolicy | None = None,
) -> EnrichedAnalysis:
    policy = policy or AnalysisPolicy()
    if isinstance(candidate, EnrichedAnalysis):
        candidate = candidate.model_dump()
    elif not isinstance(candidate, Mapping):
        candidate = {}

    status = api_status if api_status is not None else coerce_status(
        _field(candidate, "api_status", "apiStatus")
    )
    topics = coerce_strings(candidate.get("topics"), _TOPIC_KEYS)[: policy.max_topics]

    return EnrichedAnalysis(
        sentiment=coerce_sentiment(candidate.get("sentiment"), policy.sentiment_qualifiers),
        sentiment_score=coerce_score(_field(candidate, "sentiment_score", "sentimentScore")),
        topics=topics,
        content_warnings=coerce_strings(
            _field(candidate, "content_warnings", "contentWarnings"), _WARNING_KEYS
        ),
        summary=coerce_summary(candidate.get("summary"), source_text, policy),
        api_status=status,
    )


def default_enriched(
    source_text: str = "", policy: AnalysisPolicy | None = None
) -> EnrichedAnalysis:
    """Neutral deep-tier result used when deep analysis does not run."""
    return normalize_enriched({}, source_text=source_text, policy=policy)
