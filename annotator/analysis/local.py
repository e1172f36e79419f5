"""Enhanced local tier.

Blends two lexicon scorers, extracts frequency topics, detects warning words
and builds an extractive summary. Output is already in the persisted shape and
is the fallback value for every external backend.
"""

from __future__ import annotations

from collections import Counter

import structlog
from textblob import TextBlob

from annotator.analysis.basic import label_for_score
from annotator.analysis.lexicon import Lexicon
from annotator.analysis.normalizer import default_enriched, normalize_enriched
from annotator.analysis.preprocessing import Preprocessor
from annotator.analysis.schemas import ApiStatus, EnrichedAnalysis
from annotator.config import AnalysisPolicy

logger = structlog.get_logger()


class EnhancedLocalAnalyzer:
    def __init__(self, lexicon: Lexicon, policy: AnalysisPolicy | None = None) -> None:
        self._lexicon = lexicon
        self._policy = policy or AnalysisPolicy()
        self._preprocessor = Preprocessor(lexicon, correct_spelling=False)

    def analyze(self, text: str) -> EnrichedAnalysis:
        if not text.strip():
            return default_enriched(text, self._policy)

        tokens = self._preprocessor.tokens(text)
        filtered = self._preprocessor.remove_stopwords(tokens)
        score = self.composite_score(text)

        result = normalize_enriched(
            {
                "sentiment": label_for_score(score, self._policy.sentiment_threshold),
                "sentiment_score": score,
                "topics": self.extract_topics(filtered),
                "content_warnings": self.detect_warnings(tokens),
                "summary": self.summarize(filtered),
            },
            source_text=text,
            api_status=ApiStatus.success,
            policy=self._policy,
        )
        logger.debug(
            "local_analysis_done",
            score=result.sentiment_score,
            topics=result.topics,
            warnings=len(result.content_warnings),
        )
        return result

    def composite_score(self, text: str) -> float:
        general = self._lexicon.intensity.polarity_scores(text)["compound"]
        polarity = TextBlob(text).sentiment.polarity
        weights = self._policy.general_weight + self._policy.polarity_weight
        if weights <= 0:
            return 0.0
        blended = (
            general * self._policy.general_weight + polarity * self._policy.polarity_weight
        ) / weights
        return max(-1.0, min(1.0, blended))

    def extract_topics(self, tokens: list[str]) -> list[str]:
        # Counter keeps insertion order, so equal counts stay in first-seen order.
        counts = Counter(t for t in tokens if len(t) >= self._policy.min_topic_length)
        return [topic for topic, _ in counts.most_common(self._policy.max_topics)]

    def detect_warnings(self, tokens: list[str]) -> list[str]:
        sensitive = set(self._policy.sensitive_keywords)
        return [f"sensitive_content_{token}" for token in tokens if token in sensitive]

    def summarize(self, tokens: list[str]) -> str:
        summary = " ".join(tokens[: self._policy.summary_token_count]).strip()
        return summary or self._policy.summary_placeholder
