"""Strict-contract backend.

The model must answer with exactly the five-field JSON object. Anything else,
including a transport error or timeout, yields the local result marked
``Failure``.
"""

import structlog

from annotator.analysis.external.base import ExternalAnalyzer, parse_json_object
from annotator.analysis.normalizer import normalize_enriched
from annotator.analysis.schemas import ApiStatus, EnrichedAnalysis, Invalid, ParseOutcome, Valid

logger = structlog.get_logger()

STRICT_PROMPT = """You are a sentiment analysis expert. Your task is to analyze the following text \
and respond with a JSON object.

Rules:
1. Respond ONLY with a JSON object
2. Do not include any other text, markdown formatting, or explanations
3. The JSON must exactly follow this structure:
{{
    "sentiment": one of ["positive", "negative", "neutral"],
    "sentiment_score": number between -1 and 1,
    "topics": array of strings,
    "content_warnings": array of strings,
    "summary": string
}}

Text to analyze: "{text}"
"""


def parse_strict_payload(raw: str) -> ParseOutcome:
    outcome = parse_json_object(raw)
    if isinstance(outcome, Invalid):
        return outcome

    payload = outcome.payload
    sentiment = payload.get("sentiment")
    if not isinstance(sentiment, str) or not sentiment.strip():
        return Invalid("missing required field: sentiment")
    score = payload.get("sentiment_score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return Invalid("sentiment_score is not numeric")
    if not isinstance(payload.get("topics"), list):
        return Invalid("topics is not an array")
    return Valid(payload)


class StrictExternalAnalyzer(ExternalAnalyzer):
    name = "strict"

    def build_prompt(self, text: str) -> str:
        return STRICT_PROMPT.format(text=text)

    async def analyze_external(
        self, text: str, local_result: EnrichedAnalysis
    ) -> EnrichedAnalysis:
        fallback = local_result.model_copy(update={"api_status": ApiStatus.failure})

        try:
            raw = await self._invoke(self.build_prompt(text))
        except Exception as exc:
            logger.warning(
                "external_call_failed",
                backend=self.name,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return fallback

        outcome = parse_strict_payload(raw)
        if isinstance(outcome, Invalid):
            logger.warning("external_parse_invalid", backend=self.name, reason=outcome.reason)
            return fallback

        logger.info("external_analysis_accepted", backend=self.name)
        return normalize_enriched(
            outcome.payload,
            source_text=text,
            api_status=ApiStatus.success,
            policy=self._policy,
        )
