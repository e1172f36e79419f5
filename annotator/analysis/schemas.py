"""Shared schemas for the analysis pipeline.

Both annotation variants are frozen: a result is computed once per text unit
and never patched in place. Fields are snake_case in Python and camelCase on
the wire.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from operator import add
from typing import Annotated, Any, TypedDict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SentimentLabel(StrEnum):
    positive = "positive"
    negative = "negative"
    neutral = "neutral"


class ContextLabel(StrEnum):
    good_news = "good_news"
    bad_news = "bad_news"
    neutral = "neutral"


class ApiStatus(StrEnum):
    success = "Success"
    failure = "Failure"


class AnalysisStage(StrEnum):
    pending = "PENDING"
    quick_done = "QUICK_DONE"
    deep_skipped = "DEEP_SKIPPED"
    deep_local = "DEEP_LOCAL"
    deep_external = "DEEP_EXTERNAL"
    final = "FINAL"


class _AnnotationModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class BasicSentiment(_AnnotationModel):
    score: float = 0.0
    label: SentimentLabel = SentimentLabel.neutral


class BasicAnalysis(_AnnotationModel):
    sentiment: BasicSentiment = Field(default_factory=BasicSentiment)
    context_label: ContextLabel = ContextLabel.neutral
    is_flagged: bool = False


class EnrichedAnalysis(_AnnotationModel):
    sentiment: SentimentLabel = SentimentLabel.neutral
    sentiment_score: float = Field(default=0.0, ge=-1.0, le=1.0)
    topics: list[str] = Field(default_factory=list)
    content_warnings: list[str] = Field(default_factory=list)
    summary: str = Field(min_length=1)
    api_status: ApiStatus = ApiStatus.success


class ContentAnalysis(_AnnotationModel):
    basic: BasicAnalysis
    enriched: EnrichedAnalysis


# ---------------------------------------------------------------------------
# External model output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Valid:
    payload: dict[str, Any]


@dataclass(frozen=True)
class Invalid:
    reason: str


ParseOutcome = Valid | Invalid


# ---------------------------------------------------------------------------
# Orchestrator graph state
# ---------------------------------------------------------------------------


class AnalysisState(TypedDict, total=False):
    text: str
    path: Annotated[list[AnalysisStage], add]
    basic: BasicAnalysis
    local: EnrichedAnalysis
    candidate: EnrichedAnalysis
    enriched: EnrichedAnalysis


@dataclass
class AnalysisRun:
    """A finished pipeline run together with the stages it went through."""

    result: ContentAnalysis
    path: list[AnalysisStage] = field(default_factory=list)
