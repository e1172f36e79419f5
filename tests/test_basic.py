import math

import pytest

from annotator.analysis.basic import BasicAnalyzer, label_for_score
from annotator.analysis.schemas import BasicAnalysis, ContextLabel, SentimentLabel
from annotator.config import AnalysisPolicy


@pytest.fixture(scope="module")
def analyzer(lexicon):
    return BasicAnalyzer(lexicon)


def test_empty_text_returns_neutral_default(analyzer):
    result = analyzer.analyze("")
    assert result == BasicAnalysis()
    assert result.sentiment.score == 0
    assert result.sentiment.label == SentimentLabel.neutral
    assert result.context_label == ContextLabel.neutral
    assert result.is_flagged is False


def test_forbidden_keyword_sets_flag(analyzer):
    assert analyzer.analyze("I will kill this project").is_flagged is True


def test_forbidden_keywords_match_as_substrings(analyzer):
    assert analyzer.analyze("That was a skillful move").is_flagged is True


def test_clean_text_is_not_flagged(analyzer):
    assert analyzer.analyze("What a lovely garden party").is_flagged is False


def test_positive_text_with_good_news_keyword(analyzer):
    result = analyzer.analyze("Great news, the scan is clear and I am so happy")
    assert result.sentiment.label == SentimentLabel.positive
    assert result.sentiment.score > 0.1
    assert result.context_label == ContextLabel.good_news


def test_negative_text_with_bad_news_keyword(analyzer):
    result = analyzer.analyze("Terrible day, the diagnosis came back and I feel awful")
    assert result.sentiment.label == SentimentLabel.negative
    assert result.context_label == ContextLabel.bad_news


def test_polarized_text_without_keyword_keeps_neutral_context(analyzer):
    result = analyzer.analyze("What a wonderful and happy afternoon")
    assert result.sentiment.label == SentimentLabel.positive
    assert result.context_label == ContextLabel.neutral


def test_neutral_sentiment_never_gets_context(analyzer):
    result = analyzer.analyze("The remission meeting is on Tuesday")
    assert result.sentiment.label == SentimentLabel.neutral
    assert result.context_label == ContextLabel.neutral


@pytest.mark.parametrize(
    "text",
    [
        "   ",
        "!!! ??? 1234",
        "the and of",
        "I'm SO hAPPy!!! :)",
        "asdkjh qwpoei zmxncb",
    ],
)
def test_score_is_finite_and_label_valid(analyzer, text):
    result = analyzer.analyze(text)
    assert math.isfinite(result.sentiment.score)
    assert result.sentiment.label in set(SentimentLabel)


def test_score_tokens_averages_valence(plain_lexicon):
    analyzer = BasicAnalyzer(plain_lexicon)
    valence = plain_lexicon.valence
    expected = (valence["great"] + valence["sad"]) / 3
    assert analyzer.score_tokens(["great", "sad", "table"]) == pytest.approx(expected)
    assert analyzer.score_tokens([]) == 0.0


def test_label_thresholds():
    assert label_for_score(0.11, 0.1) == SentimentLabel.positive
    assert label_for_score(0.1, 0.1) == SentimentLabel.neutral
    assert label_for_score(-0.1, 0.1) == SentimentLabel.neutral
    assert label_for_score(-0.11, 0.1) == SentimentLabel.negative


def test_keyword_lists_come_from_policy(plain_lexicon):
    policy = AnalysisPolicy(forbidden_keywords=("spoiler",))
    analyzer = BasicAnalyzer(plain_lexicon, policy)
    assert analyzer.analyze("Spoiler alert for tonight").is_flagged is True
    assert analyzer.analyze("I will kill this project").is_flagged is False
