from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from annotator.analysis.external.factory import build_external_analyzer
from annotator.analysis.lexicon import shared_lexicon
from annotator.analysis.orchestrator import AnalysisOrchestrator
from annotator.config import settings


@lru_cache(maxsize=1)
def get_analysis_orchestrator() -> AnalysisOrchestrator:
    return AnalysisOrchestrator.from_settings(
        shared_lexicon(), settings, external=build_external_analyzer(settings)
    )


AnalysisOrchestratorDep = Annotated[AnalysisOrchestrator, Depends(get_analysis_orchestrator)]
