import pydantic
import pytest

from annotator.analysis.external.factory import build_external_analyzer
from annotator.analysis.external.heuristic import HeuristicExternalAnalyzer
from annotator.analysis.external.strict import StrictExternalAnalyzer
from annotator.config import AnalysisPolicy, Settings
from annotator.exceptions import AppError


def test_defaults_match_documented_policy():
    config = Settings(_env_file=None)
    assert config.external_backend == "none"
    assert config.timeout_ms == 10_000
    assert config.min_length_for_external == 100
    assert config.policy == AnalysisPolicy()
    assert config.policy.sentiment_threshold == 0.1
    assert config.policy.max_topics == 3


def test_settings_read_prefixed_and_nested_env(monkeypatch):
    monkeypatch.setenv("ANN_EXTERNAL_BACKEND", "heuristic")
    monkeypatch.setenv("ANN_TIMEOUT_MS", "2500")
    monkeypatch.setenv("ANN_POLICY__SENTIMENT_THRESHOLD", "0.2")

    config = Settings(_env_file=None)

    assert config.external_backend == "heuristic"
    assert config.timeout_ms == 2500
    assert config.policy.sentiment_threshold == 0.2


def test_unknown_backend_is_rejected():
    with pytest.raises(pydantic.ValidationError):
        Settings(_env_file=None, external_backend="gemini")


def test_policy_is_immutable():
    policy = AnalysisPolicy()
    with pytest.raises(pydantic.ValidationError):
        policy.max_topics = 5


def test_backend_none_disables_external():
    assert build_external_analyzer(Settings(_env_file=None, external_backend="none")) is None


def test_strict_backend_uses_primary_provider():
    config = Settings(_env_file=None, external_backend="strict", openai_api_key="sk-test")
    analyzer = build_external_analyzer(config)
    assert isinstance(analyzer, StrictExternalAnalyzer)


def test_heuristic_backend_uses_its_own_provider():
    config = Settings(
        _env_file=None,
        external_backend="heuristic",
        heuristic_llm_provider="anthropic",
        heuristic_llm_model="claude-3-5-haiku-latest",
        anthropic_api_key="test-key",
    )
    analyzer = build_external_analyzer(config)
    assert isinstance(analyzer, HeuristicExternalAnalyzer)


def test_missing_api_key_is_a_config_error():
    config = Settings(_env_file=None, external_backend="strict", openai_api_key="")
    with pytest.raises(AppError) as exc_info:
        build_external_analyzer(config)
    assert exc_info.value.code == "LLM_CONFIG_ERROR"
