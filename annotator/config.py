from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings


class AnalysisPolicy(BaseModel):
    """Tunable thresholds and keyword lists shared by every analysis tier."""

    model_config = ConfigDict(frozen=True)

    sentiment_threshold: float = Field(default=0.1, ge=0.0, le=1.0)
    max_topics: int = Field(default=3, ge=0)
    min_topic_length: int = Field(default=4, ge=1)
    summary_token_count: int = Field(default=10, ge=1)
    summary_excerpt_length: int = Field(default=100, ge=1)
    summary_placeholder: str = Field(default="No summary available", min_length=1)
    general_weight: float = Field(default=0.5, ge=0.0)
    polarity_weight: float = Field(default=0.5, ge=0.0)
    heuristic_prompt_char_limit: int = Field(default=500, ge=1)
    sentiment_qualifiers: tuple[str, ...] = (
        "very",
        "extremely",
        "slightly",
        "somewhat",
        "mostly",
        "quite",
    )
    good_news_keywords: tuple[str, ...] = (
        "remission",
        "clear",
        "negative",
        "recovered",
        "stable",
        "improving",
        "good news",
    )
    bad_news_keywords: tuple[str, ...] = (
        "diagnosis",
        "diagnosed",
        "relapse",
        "recurrence",
        "metastasis",
        "struggling",
        "worsening",
        "bad news",
    )
    forbidden_keywords: tuple[str, ...] = ("kill", "attack", "hate", "stupid")
    sensitive_keywords: tuple[str, ...] = (
        "hate",
        "violence",
        "threat",
        "harm",
        "abuse",
        "death",
        "kill",
    )


class Settings(BaseSettings):
    model_config = {
        "env_prefix": "ANN_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",
    }

    external_backend: str = Field(default="none", pattern=r"^(strict|heuristic|none)$")
    deep_analysis_enabled: bool = Field(default=True)
    timeout_ms: int = Field(default=10_000, gt=0)
    min_length_for_external: int = Field(default=100, ge=0)
    spell_correct: bool = Field(default=True)

    # Strict-contract backend
    llm_provider: str = Field(default="openai", pattern=r"^(openai|anthropic)$")
    llm_model: str = Field(default="gpt-4o")
    strict_max_tokens: int = Field(default=1024, gt=0)

    # Merge-heuristic backend
    heuristic_llm_provider: str = Field(default="openai", pattern=r"^(openai|anthropic)$")
    heuristic_llm_model: str = Field(default="gpt-4o-mini")
    heuristic_max_tokens: int = Field(default=128, gt=0)

    llm_temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    llm_base_url: str = Field(default="")
    openai_api_key: str = Field(default="")
    anthropic_api_key: str = Field(default="")

    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json", pattern=r"^(json|console)$")
    cors_origins: str = Field(default="http://localhost:3000")
    max_batch_size: int = Field(default=50, gt=0)

    policy: AnalysisPolicy = Field(default_factory=AnalysisPolicy)


settings = Settings()
