import asyncio
import json
import re
from abc import ABC, abstractmethod

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage

from annotator.analysis.schemas import EnrichedAnalysis, Invalid, ParseOutcome, Valid
from annotator.config import AnalysisPolicy


def _parse_llm_json(text: str) -> object:
    """Parse JSON from LLM response, stripping markdown code block markers if present."""
    cleaned = text.strip()
    match = re.search(r"```(?:json)?\s*(.*?)```", cleaned, re.DOTALL)
    if match:
        cleaned = match.group(1).strip()
    return json.loads(cleaned)


def parse_json_object(raw: str) -> ParseOutcome:
    try:
        payload = _parse_llm_json(raw)
    except json.JSONDecodeError as exc:
        return Invalid(f"response is not valid JSON: {exc.msg}")
    except (ValueError, RecursionError) as exc:
        # Oversized integer literals and very deep nesting fail outside JSONDecodeError.
        return Invalid(f"response could not be decoded: {type(exc).__name__}")
    if not isinstance(payload, dict):
        return Invalid(f"expected a JSON object, got {type(payload).__name__}")
    return Valid(payload)


class ExternalAnalyzer(ABC):
    """One outbound model call per text; never raises past ``analyze_external``."""

    name: str = "external"

    def __init__(
        self,
        llm: BaseChatModel,
        *,
        timeout_ms: int,
        policy: AnalysisPolicy | None = None,
    ) -> None:
        self._llm = llm
        self._timeout = timeout_ms / 1000
        self._policy = policy or AnalysisPolicy()

    @abstractmethod
    async def analyze_external(
        self, text: str, local_result: EnrichedAnalysis
    ) -> EnrichedAnalysis: ...

    async def _invoke(self, prompt: str) -> str:
        """Send one prompt; raises TimeoutError when the backend exceeds the timeout."""
        response = await asyncio.wait_for(
            self._llm.ainvoke([HumanMessage(content=prompt)]),
            timeout=self._timeout,
        )
        raw = response.content
        return raw if isinstance(raw, str) else str(raw)
