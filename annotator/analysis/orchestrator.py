"""Analysis orchestrator graph.

  run_quick -> (skip_deep | run_local -> [run_external]) -> finalize -> END

The quick tier always runs. The deep tier runs the local analyzer, optionally
followed by one external call that uses the local result as its fallback, and
whatever comes out is normalized before it is returned. Every node appends its
stage to ``path`` so callers and logs can see which route was taken.
"""

import asyncio
from collections.abc import Iterable

import structlog
from langgraph.graph import END, START, StateGraph

from annotator.analysis.basic import BasicAnalyzer
from annotator.analysis.external.base import ExternalAnalyzer
from annotator.analysis.lexicon import Lexicon
from annotator.analysis.local import EnhancedLocalAnalyzer
from annotator.analysis.normalizer import default_enriched, normalize_enriched
from annotator.analysis.schemas import (
    AnalysisRun,
    AnalysisStage,
    AnalysisState,
    ContentAnalysis,
)
from annotator.config import AnalysisPolicy, Settings

logger = structlog.get_logger()


class AnalysisOrchestrator:
    """Single entry point for analysing one text unit (a post or a comment)."""

    def __init__(
        self,
        lexicon: Lexicon,
        *,
        policy: AnalysisPolicy | None = None,
        external: ExternalAnalyzer | None = None,
        deep_analysis_enabled: bool = True,
        min_length_for_external: int = 100,
        correct_spelling: bool = True,
    ) -> None:
        self._policy = policy or AnalysisPolicy()
        self._basic = BasicAnalyzer(lexicon, self._policy, correct_spelling=correct_spelling)
        self._local = EnhancedLocalAnalyzer(lexicon, self._policy)
        self._external = external
        self._deep_enabled = deep_analysis_enabled
        self._min_length = min_length_for_external
        self._graph = self._build_graph()

    @classmethod
    def from_settings(
        cls,
        lexicon: Lexicon,
        config: Settings,
        external: ExternalAnalyzer | None = None,
    ) -> "AnalysisOrchestrator":
        return cls(
            lexicon,
            policy=config.policy,
            external=external,
            deep_analysis_enabled=config.deep_analysis_enabled,
            min_length_for_external=config.min_length_for_external,
            correct_spelling=config.spell_correct,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def analyze(self, text: str) -> ContentAnalysis:
        run = await self.run(text)
        return run.result

    async def analyze_many(self, texts: Iterable[str]) -> list[ContentAnalysis]:
        """Analyse independent text units concurrently; output order matches input order."""
        return list(await asyncio.gather(*(self.analyze(text) for text in texts)))

    async def run(self, text: str) -> AnalysisRun:
        text = text or ""
        state = await self._graph.ainvoke({"text": text, "path": [AnalysisStage.pending]})
        result = ContentAnalysis(basic=state["basic"], enriched=state["enriched"])
        path = list(state["path"])

        logger.info(
            "analysis_completed",
            text_length=len(text),
            path=[str(stage) for stage in path],
            sentiment=result.basic.sentiment.label,
            flagged=result.basic.is_flagged,
            api_status=result.enriched.api_status,
        )
        return AnalysisRun(result=result, path=path)

    def is_external_eligible(self, text: str) -> bool:
        return self._external is not None and len(text) > self._min_length

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    async def run_quick(self, state: AnalysisState) -> dict:
        return {
            "basic": self._basic.analyze(state["text"]),
            "path": [AnalysisStage.quick_done],
        }

    async def skip_deep(self, state: AnalysisState) -> dict:
        return {
            "candidate": default_enriched(state["text"], self._policy),
            "path": [AnalysisStage.deep_skipped],
        }

    async def run_local(self, state: AnalysisState) -> dict:
        local = self._local.analyze(state["text"])
        return {
            "local": local,
            "candidate": local,
            "path": [AnalysisStage.deep_local],
        }

    async def run_external(self, state: AnalysisState) -> dict:
        if self._external is None:
            return {"candidate": state["local"]}
        candidate = await self._external.analyze_external(state["text"], state["local"])
        return {
            "candidate": candidate,
            "path": [AnalysisStage.deep_external],
        }

    async def finalize(self, state: AnalysisState) -> dict:
        enriched = normalize_enriched(
            state["candidate"], source_text=state["text"], policy=self._policy
        )
        return {"enriched": enriched, "path": [AnalysisStage.final]}

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def route_after_quick(self, state: AnalysisState) -> str:
        if not self._deep_enabled or not state["text"].strip():
            return "skip_deep"
        return "run_local"

    def route_after_local(self, state: AnalysisState) -> str:
        if self.is_external_eligible(state["text"]):
            return "run_external"
        return "finalize"

    # ------------------------------------------------------------------
    # Graph
    # ------------------------------------------------------------------

    def _build_graph(self):
        workflow = StateGraph(AnalysisState)

        workflow.add_node("run_quick", self.run_quick)
        workflow.add_node("skip_deep", self.skip_deep)
        workflow.add_node("run_local", self.run_local)
        workflow.add_node("run_external", self.run_external)
        workflow.add_node("finalize", self.finalize)

        workflow.add_edge(START, "run_quick")
        workflow.add_conditional_edges(
            "run_quick",
            self.route_after_quick,
            {
                "skip_deep": "skip_deep",
                "run_local": "run_local",
            },
        )
        workflow.add_conditional_edges(
            "run_local",
            self.route_after_local,
            {
                "run_external": "run_external",
                "finalize": "finalize",
            },
        )
        workflow.add_edge("skip_deep", "finalize")
        workflow.add_edge("run_external", "finalize")
        workflow.add_edge("finalize", END)

        return workflow.compile()
