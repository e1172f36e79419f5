from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from annotator.config import Settings, settings
from annotator.exceptions import AppError
from annotator.llm.config import LLMProvider


class LLMFactory:
    @staticmethod
    def create(
        provider: str | None = None,
        model: str | None = None,
        *,
        config: Settings | None = None,
        **kwargs: object,
    ) -> BaseChatModel:
        config = config or settings
        provider = provider or config.llm_provider
        model = model or config.llm_model

        # Each analysis request calls the backend at most once.
        kwargs.setdefault("max_retries", 0)
        if config.llm_base_url:
            kwargs.setdefault("base_url", config.llm_base_url)

        match provider:
            case LLMProvider.OPENAI:
                api_key = config.openai_api_key
                if not api_key:
                    raise AppError("OpenAI API key is not configured", code="LLM_CONFIG_ERROR")
                return ChatOpenAI(model=model, api_key=api_key, **kwargs)  # type: ignore[arg-type]

            case LLMProvider.ANTHROPIC:
                api_key = config.anthropic_api_key
                if not api_key:
                    raise AppError("Anthropic API key is not configured", code="LLM_CONFIG_ERROR")
                return ChatAnthropic(model=model, api_key=api_key, **kwargs)  # type: ignore[arg-type]

            case _:
                raise AppError(f"Unknown LLM provider: '{provider}'", code="LLM_CONFIG_ERROR")
