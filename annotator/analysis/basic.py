"""Quick tier: lexicon sentiment, keyword context label and keyword safety flag.

Pure computation over the shared lexicon. No network, no failure path.
"""

from __future__ import annotations

import structlog

from annotator.analysis.lexicon import Lexicon
from annotator.analysis.preprocessing import Preprocessor
from annotator.analysis.schemas import BasicAnalysis, BasicSentiment, ContextLabel, SentimentLabel
from annotator.config import AnalysisPolicy

logger = structlog.get_logger()


def label_for_score(score: float, threshold: float) -> SentimentLabel:
    if score > threshold:
        return SentimentLabel.positive
    if score < -threshold:
        return SentimentLabel.negative
    return SentimentLabel.neutral


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


class BasicAnalyzer:
    def __init__(
        self,
        lexicon: Lexicon,
        policy: AnalysisPolicy | None = None,
        *,
        correct_spelling: bool = True,
    ) -> None:
        self._lexicon = lexicon
        self._policy = policy or AnalysisPolicy()
        self._preprocessor = Preprocessor(lexicon, correct_spelling=correct_spelling)

    def analyze(self, text: str) -> BasicAnalysis:
        if not text:
            return BasicAnalysis()

        cleaned = self._preprocessor.clean(text)
        tokens = self._preprocessor.normalize(text)
        score = self.score_tokens(tokens)
        label = label_for_score(score, self._policy.sentiment_threshold)

        result = BasicAnalysis(
            sentiment=BasicSentiment(score=score, label=label),
            context_label=self._context_label(label, cleaned),
            is_flagged=_contains_any(cleaned, self._policy.forbidden_keywords),
        )
        logger.debug(
            "basic_analysis_done",
            score=score,
            label=label,
            context_label=result.context_label,
            is_flagged=result.is_flagged,
        )
        return result

    def score_tokens(self, tokens: list[str]) -> float:
        """Average valence over all tokens; unmatched tokens count as zero."""
        if not tokens:
            return 0.0
        valence = self._lexicon.valence
        return sum(valence.get(token, 0.0) for token in tokens) / len(tokens)

    def _context_label(self, label: SentimentLabel, cleaned: str) -> ContextLabel:
        if label == SentimentLabel.positive:
            if _contains_any(cleaned, self._policy.good_news_keywords):
                return ContextLabel.good_news
        elif label == SentimentLabel.negative:
            if _contains_any(cleaned, self._policy.bad_news_keywords):
                return ContextLabel.bad_news
        return ContextLabel.neutral
