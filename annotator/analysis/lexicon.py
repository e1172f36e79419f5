"""Read-only lexical resources shared by every analysis request.

The lexicon is built once at process start (``init_shared_lexicon``) and then
only read. Building it is the one place the pipeline can fail hard.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import structlog
from textblob import Word
from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from annotator.exceptions import LexiconUnavailableError

logger = structlog.get_logger()

SpellCorrector = Callable[[str], str]

# ---------------------------------------------------------------------------
# Static word lists
# ---------------------------------------------------------------------------

STOPWORDS = frozenset(
    {
        "a", "about", "above", "after", "again", "against", "all", "am", "an",
        "and", "any", "are", "as", "at", "be", "because", "been", "before",
        "being", "below", "between", "both", "but", "by", "can", "could", "did",
        "do", "does", "doing", "down", "during", "each", "few", "for", "from",
        "further", "had", "has", "have", "having", "he", "her", "here", "hers",
        "herself", "him", "himself", "his", "how", "i", "if", "in", "into", "is",
        "it", "its", "itself", "just", "me", "more", "most", "my", "myself", "no",
        "nor", "not", "now", "of", "off", "on", "once", "only", "or", "other",
        "our", "ours", "ourselves", "out", "over", "own", "same", "she", "should",
        "so", "some", "such", "than", "that", "the", "their", "theirs", "them",
        "themselves", "then", "there", "these", "they", "this", "those",
        "through", "to", "too", "under", "until", "up", "very", "was", "we",
        "were", "what", "when", "where", "which", "while", "who", "whom", "why",
        "will", "with", "would", "you", "your", "yours", "yourself",
        "yourselves", "cannot", "shall", "might", "must", "also", "s", "t",
    }
)

CONTRACTIONS: Mapping[str, str] = MappingProxyType(
    {
        "ain't": "is not",
        "can't": "cannot",
        "couldn't've": "could not have",
        "let's": "let us",
        "ma'am": "madam",
        "o'clock": "of the clock",
        "shan't": "shall not",
        "won't": "will not",
        "wouldn't've": "would not have",
        "y'all": "you all",
        "it's": "it is",
        "he's": "he is",
        "she's": "she is",
        "that's": "that is",
        "there's": "there is",
        "what's": "what is",
        "where's": "where is",
        "who's": "who is",
        "how's": "how is",
        "here's": "here is",
    }
)

# Generic suffix rules, applied when a word is not in CONTRACTIONS.
CONTRACTION_SUFFIXES: tuple[tuple[str, str], ...] = (
    ("n't", " not"),
    ("'re", " are"),
    ("'ve", " have"),
    ("'ll", " will"),
    ("'d", " would"),
    ("'m", " am"),
    ("'s", ""),
)


@dataclass(frozen=True)
class Lexicon:
    valence: Mapping[str, float]
    stopwords: frozenset[str]
    contractions: Mapping[str, str]
    intensity: SentimentIntensityAnalyzer
    corrector: SpellCorrector


def textblob_correct(token: str) -> str:
    return str(Word(token).correct())


def load_lexicon(corrector: SpellCorrector | None = None) -> Lexicon:
    """Build a fresh lexicon. Raises LexiconUnavailableError if a resource cannot be loaded."""
    try:
        intensity = SentimentIntensityAnalyzer()
        valence = MappingProxyType(dict(intensity.lexicon))
        if corrector is None:
            corrector = textblob_correct
            # Forces TextBlob to read its spelling dictionary now instead of mid-request.
            corrector("lexicon")
    except Exception as exc:
        logger.error("lexicon_load_failed", error=str(exc))
        raise LexiconUnavailableError(f"Failed to load lexical resources: {exc}") from exc

    logger.info("lexicon_loaded", valence_entries=len(valence), stopwords=len(STOPWORDS))
    return Lexicon(
        valence=valence,
        stopwords=STOPWORDS,
        contractions=CONTRACTIONS,
        intensity=intensity,
        corrector=corrector,
    )


_shared: Lexicon | None = None


def init_shared_lexicon() -> Lexicon:
    """Install the process-wide lexicon. Later calls return the same instance."""
    global _shared
    if _shared is None:
        _shared = load_lexicon()
    return _shared


def shared_lexicon() -> Lexicon:
    if _shared is None:
        raise LexiconUnavailableError("Lexicon has not been initialised")
    return _shared
