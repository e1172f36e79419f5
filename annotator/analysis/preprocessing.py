"""Text preprocessing: contraction expansion, cleaning, tokenizing, spelling and stopwords.

Each step is a plain function so the tiers can compose only the steps they need.
Token streams are generators; ``Preprocessor`` materializes them.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping

import structlog

from annotator.analysis.lexicon import CONTRACTION_SUFFIXES, Lexicon, SpellCorrector

logger = structlog.get_logger()

_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "`": "'"})
_CONTRACTED_WORD = re.compile(r"[A-Za-z]+(?:'[A-Za-z]+)+")
_NON_ALPHA = re.compile(r"[^a-z\s]+")
_WORD = re.compile(r"[a-z]+")


def expand_contractions(text: str, contractions: Mapping[str, str]) -> str:
    """Rewrite contracted words ("don't" -> "do not"). Other text is left untouched."""

    def _expand(match: re.Match[str]) -> str:
        word = match.group(0)
        lowered = word.lower()
        if lowered in contractions:
            return contractions[lowered]
        for suffix, replacement in CONTRACTION_SUFFIXES:
            if lowered.endswith(suffix):
                return word[: -len(suffix)] + replacement
        return word

    return _CONTRACTED_WORD.sub(_expand, text.translate(_APOSTROPHES))


def clean_text(text: str, contractions: Mapping[str, str]) -> str:
    """Expanded, lowercased, alphabetic-only text; keyword search runs against this."""
    return _NON_ALPHA.sub("", expand_contractions(text, contractions).lower())


def tokenize(cleaned: str) -> Iterator[str]:
    for match in _WORD.finditer(cleaned):
        yield match.group(0)


def correct_tokens(tokens: Iterable[str], corrector: SpellCorrector) -> Iterator[str]:
    for token in tokens:
        try:
            corrected = corrector(token)
        except Exception as exc:
            logger.debug("spell_correction_failed", token=token, error=str(exc))
            yield token
            continue
        yield corrected.lower() if corrected else token


def remove_stopwords(tokens: Iterable[str], stopwords: frozenset[str]) -> Iterator[str]:
    return (token for token in tokens if token not in stopwords)


class Preprocessor:
    def __init__(self, lexicon: Lexicon, *, correct_spelling: bool = True) -> None:
        self._lexicon = lexicon
        self._correct_spelling = correct_spelling

    def clean(self, text: str) -> str:
        return clean_text(text, self._lexicon.contractions)

    def tokens(self, text: str) -> list[str]:
        """Cleaned tokens with no spelling correction and no stopword removal."""
        return list(tokenize(self.clean(text)))

    def normalize(self, text: str) -> list[str]:
        tokens: Iterable[str] = tokenize(self.clean(text))
        if self._correct_spelling:
            tokens = correct_tokens(tokens, self._lexicon.corrector)
        return list(remove_stopwords(tokens, self._lexicon.stopwords))

    def remove_stopwords(self, tokens: Iterable[str]) -> list[str]:
        return list(remove_stopwords(tokens, self._lexicon.stopwords))
