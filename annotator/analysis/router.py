"""Analysis endpoints: single text and batch."""

from fastapi import APIRouter
from pydantic import BaseModel

from annotator.analysis.schemas import ContentAnalysis
from annotator.config import settings
from annotator.dependencies import AnalysisOrchestratorDep
from annotator.exceptions import ValidationError

router = APIRouter()


class AnalyzeRequest(BaseModel):
    text: str = ""


class AnalyzeBatchRequest(BaseModel):
    texts: list[str]


@router.post("", response_model=ContentAnalysis)
async def analyze(
    request: AnalyzeRequest, orchestrator: AnalysisOrchestratorDep
) -> ContentAnalysis:
    return await orchestrator.analyze(request.text)


@router.post("/batch", response_model=list[ContentAnalysis])
async def analyze_batch(
    request: AnalyzeBatchRequest, orchestrator: AnalysisOrchestratorDep
) -> list[ContentAnalysis]:
    if len(request.texts) > settings.max_batch_size:
        raise ValidationError(f"Maximum {settings.max_batch_size} texts allowed per request")
    return await orchestrator.analyze_many(request.texts)
