import structlog

from annotator.analysis.external.base import ExternalAnalyzer
from annotator.analysis.external.heuristic import HeuristicExternalAnalyzer
from annotator.analysis.external.strict import StrictExternalAnalyzer
from annotator.config import Settings, settings
from annotator.exceptions import AppError
from annotator.llm.config import ExternalBackend
from annotator.llm.factory import LLMFactory

logger = structlog.get_logger()


def build_external_analyzer(config: Settings | None = None) -> ExternalAnalyzer | None:
    """Pick the configured backend variant; ``none`` disables external enrichment."""
    config = config or settings

    match config.external_backend:
        case ExternalBackend.NONE:
            return None

        case ExternalBackend.STRICT:
            llm = LLMFactory.create(
                config.llm_provider,
                config.llm_model,
                config=config,
                temperature=config.llm_temperature,
                max_tokens=config.strict_max_tokens,
                timeout=config.timeout_ms / 1000,
            )
            analyzer: ExternalAnalyzer = StrictExternalAnalyzer(
                llm, timeout_ms=config.timeout_ms, policy=config.policy
            )

        case ExternalBackend.HEURISTIC:
            llm = LLMFactory.create(
                config.heuristic_llm_provider,
                config.heuristic_llm_model,
                config=config,
                temperature=config.llm_temperature,
                max_tokens=config.heuristic_max_tokens,
                timeout=config.timeout_ms / 1000,
            )
            analyzer = HeuristicExternalAnalyzer(
                llm, timeout_ms=config.timeout_ms, policy=config.policy
            )

        case _:
            raise AppError(
                f"Unknown external backend: '{config.external_backend}'", code="LLM_CONFIG_ERROR"
            )

    logger.info("external_backend_configured", backend=analyzer.name)
    return analyzer
