"""Merge-heuristic backend.

The local result goes into the prompt as the current analysis; well-typed
fields from the reply replace the local ones field by field. Any failure
silently returns the local result, still reported as ``Success``.
"""

import json

import structlog

from annotator.analysis.external.base import ExternalAnalyzer, parse_json_object
from annotator.analysis.normalizer import normalize_enriched
from annotator.analysis.schemas import ApiStatus, EnrichedAnalysis, Invalid, ParseOutcome

logger = structlog.get_logger()

MERGE_PROMPT = """Analyze this text and provide a JSON response with:
- sentiment (ONLY "positive", "negative", or "neutral")
- sentiment_score (number between -1 and 1)
- topics (array of topic strings)
- content_warnings (array of warning strings)
- summary (single string)

Text: "{text}"

Current analysis: {current}

Respond with the JSON object only."""


def parse_merge_payload(raw: str) -> ParseOutcome:
    outcome = parse_json_object(raw)
    if isinstance(outcome, Invalid):
        return outcome
    if not isinstance(outcome.payload.get("sentiment"), str):
        return Invalid("missing required field: sentiment")
    return outcome


def merge_with_local(payload: dict, local_result: EnrichedAnalysis) -> dict:
    """Take each reply field that has the right type; otherwise keep the local value."""
    score = payload.get("sentiment_score")
    topics = payload.get("topics")
    warnings = payload.get("content_warnings")
    summary = payload.get("summary")
    return {
        "sentiment": payload["sentiment"],
        "sentiment_score": (
            score
            if isinstance(score, (int, float)) and not isinstance(score, bool)
            else local_result.sentiment_score
        ),
        "topics": (
            [t for t in topics if isinstance(t, str)]
            if isinstance(topics, list)
            else local_result.topics
        ),
        "content_warnings": (
            [w for w in warnings if isinstance(w, str)]
            if isinstance(warnings, list)
            else local_result.content_warnings
        ),
        "summary": (
            summary if isinstance(summary, str) and summary.strip() else local_result.summary
        ),
    }


class HeuristicExternalAnalyzer(ExternalAnalyzer):
    name = "heuristic"

    def build_prompt(self, text: str, local_result: EnrichedAnalysis) -> str:
        current = local_result.model_dump(mode="json", exclude={"api_status"})
        return MERGE_PROMPT.format(
            text=text[: self._policy.heuristic_prompt_char_limit],
            current=json.dumps(current),
        )

    async def analyze_external(
        self, text: str, local_result: EnrichedAnalysis
    ) -> EnrichedAnalysis:
        fallback = local_result.model_copy(update={"api_status": ApiStatus.success})

        try:
            raw = await self._invoke(self.build_prompt(text, local_result))
        except Exception as exc:
            logger.info(
                "external_call_failed",
                backend=self.name,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return fallback

        outcome = parse_merge_payload(raw)
        if isinstance(outcome, Invalid):
            logger.info("external_parse_invalid", backend=self.name, reason=outcome.reason)
            return fallback

        logger.info("external_analysis_merged", backend=self.name)
        return normalize_enriched(
            merge_with_local(outcome.payload, local_result),
            source_text=text,
            api_status=ApiStatus.success,
            policy=self._policy,
        )
