"""Data types for pipeline orchestration."""

from dataclasses import dataclass, field

from agent_orchestrator.agents.types import Context, Result, Status


@dataclass
class PipelineConfig:
    """Configuration for a pipeline.

    Attributes:
        strategy: Orchestration strategy. Only "sequential" exists; other
                  values log a warning and run sequentially.
        carry_previous_result: When True, each successful stage also writes
                  its value to the context under "previous_result".
    """

    strategy: str = "sequential"
    carry_previous_result: bool = False


@dataclass
class PipelineResult:
    """Outcome of a pipeline run.

    Attributes:
        status: SUCCESS if every stage succeeded
        stage_results: Results of the successful stages, in order
        final_context: Context after the last merged delta
        failed_at: Index of the failing stage, if any
        error: The failing stage's result, if any
    """

    status: Status
    stage_results: list[Result] = field(default_factory=list)
    final_context: Context = field(default_factory=dict)
    failed_at: int | None = None
    error: Result | None = None

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS
