"""Multi-agent pipeline orchestration.

A pipeline runs its agents in order with the same input, threading an
accumulating context between them. It stops at the first failing stage and
never rolls back context deltas already merged.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Sequence

from agent_orchestrator.agents.agent import Agent
from agent_orchestrator.agents.history import History
from agent_orchestrator.agents.types import (
    Context,
    HistoryEntry,
    HistoryKind,
    Result,
    Status,
)
from agent_orchestrator.pipelines.types import PipelineConfig, PipelineResult

logger = logging.getLogger(__name__)

PREVIOUS_RESULT_KEY = "previous_result"


class Pipeline:
    """An ordered sequence of agents with fail-fast semantics.

    Attributes:
        agents: The stages, in execution order
        config: Pipeline configuration
        history: Audit trail with one entry per executed stage
    """

    def __init__(
        self,
        agents: Sequence[Agent],
        config: PipelineConfig | None = None,
        history: History | None = None,
    ) -> None:
        self.agents: tuple[Agent, ...] = tuple(agents)
        self.config = config or PipelineConfig()
        self.history = history if history is not None else History(HistoryKind.CONVERSATION)

        if self.config.strategy != "sequential":
            logger.warning(
                f"Unsupported orchestration strategy {self.config.strategy!r}, "
                "running sequentially"
            )

    async def execute(self, input: Any, context: Context | None = None) -> PipelineResult:
        """Run every stage in order.

        Args:
            input: Raw input, passed unchanged to every stage
            context: Initial context (copied, never mutated)

        Returns:
            PipelineResult: SUCCESS with all stage results and the final
            context, or FAILURE with the results gathered before the failing
            stage, the context as of that stage, and its index.
        """
        running: Context = dict(context or {})
        stage_results: list[Result] = []
        logger.info(f"Starting sequential pipeline with {len(self.agents)} stages")

        for index, agent in enumerate(self.agents):
            logger.debug(f"Pipeline stage {index}: {agent.name}")
            result = await agent.execute(input, dict(running))

            self.history.append(
                HistoryEntry(
                    input=input,
                    result=result.snapshot(),
                    timestamp=datetime.now(timezone.utc),
                    agent_name=agent.name,
                )
            )

            if result.status is Status.FAILURE:
                logger.warning(
                    f"Pipeline aborted at stage {index} ({agent.name}): {result.message}"
                )
                return PipelineResult(
                    status=Status.FAILURE,
                    stage_results=stage_results,
                    final_context=running,
                    failed_at=index,
                    error=result,
                )

            running = merge_context(running, result.context_delta)
            if self.config.carry_previous_result:
                running[PREVIOUS_RESULT_KEY] = result.value
            stage_results.append(result)

        logger.info(f"Pipeline completed: {len(stage_results)} stages succeeded")
        return PipelineResult(
            status=Status.SUCCESS,
            stage_results=stage_results,
            final_context=running,
        )


def merge_context(context: Context, delta: Context | None) -> Context:
    """Return a new context with delta merged in; delta keys win."""
    merged = dict(context)
    if delta:
        merged.update(delta)
    return merged


def create_pipeline(
    agents: Sequence[Agent],
    config: PipelineConfig | None = None,
    history: History | None = None,
) -> Pipeline:
    """Create a pipeline from an ordered sequence of agents.

    Args:
        agents: Stages in execution order
        config: Pipeline configuration (default: sequential)
        history: Audit trail store (default: a new conversation store)

    Returns:
        Pipeline: The new pipeline
    """
    return Pipeline(agents, config, history)
