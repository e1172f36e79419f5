import pytest

from annotator.analysis import lexicon as lexicon_module
from annotator.analysis.lexicon import load_lexicon, shared_lexicon
from annotator.exceptions import LexiconUnavailableError


def test_valence_table_is_read_only(plain_lexicon):
    assert plain_lexicon.valence["good"] > 0
    with pytest.raises(TypeError):
        plain_lexicon.valence["good"] = -4.0


def test_contractions_are_read_only(plain_lexicon):
    with pytest.raises(TypeError):
        plain_lexicon.contractions["can't"] = "can"


def test_real_corrector_fixes_common_typos(lexicon):
    assert lexicon.corrector("speling") == "spelling"


def test_load_failure_is_reported_as_unavailable(monkeypatch):
    def broken_analyzer():
        raise OSError("vader_lexicon.txt not found")

    monkeypatch.setattr(lexicon_module, "SentimentIntensityAnalyzer", broken_analyzer)

    with pytest.raises(LexiconUnavailableError) as exc_info:
        load_lexicon()
    assert exc_info.value.code == "LEXICON_UNAVAILABLE"
    assert "vader_lexicon.txt" in exc_info.value.message


def test_shared_lexicon_requires_initialisation(monkeypatch):
    monkeypatch.setattr(lexicon_module, "_shared", None)
    with pytest.raises(LexiconUnavailableError):
        shared_lexicon()


def test_init_shared_lexicon_is_idempotent(monkeypatch, plain_lexicon):
    monkeypatch.setattr(lexicon_module, "_shared", plain_lexicon)
    assert lexicon_module.init_shared_lexicon() is plain_lexicon
    assert shared_lexicon() is plain_lexicon
