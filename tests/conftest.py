import pytest

from annotator.analysis.lexicon import load_lexicon


@pytest.fixture(scope="session")
def lexicon():
    """Lexicon with the real TextBlob spelling corrector."""
    return load_lexicon()


@pytest.fixture(scope="session")
def plain_lexicon():
    """Lexicon whose corrector leaves every token alone, for exact token assertions."""
    return load_lexicon(corrector=lambda token: token)
