"""State of one workflow execution."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from stock_agent.exceptions import WorkflowError
from stock_agent.schemas.report import KeyMetricsSummary


class Step(str, Enum):
    INIT = "init"
    VALIDATE_INPUT = "validate_input"
    PARALLEL_PROCESSING = "parallel_processing"
    PARSE_RESPONSE = "parse_response"
    ENRICH_REPORT = "enrich_report"
    ERROR = "error"
    COMPLETE = "complete"

    @property
    def is_terminal(self) -> bool:
        return self is Step.COMPLETE


# Fields that may be written once and never replaced
_SET_ONCE = ("key_metrics", "raw_model_output", "parsed_report", "final_report")


class AnalysisState(BaseModel):
    model_config = ConfigDict(frozen=True)

    input: Any = None
    validated: bool = False
    key_metrics: KeyMetricsSummary | None = None
    raw_model_output: str | None = None
    parsed_report: dict[str, Any] | None = None
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    step: Step = Step.INIT
    final_report: dict[str, Any] | None = None

    def advance(
        self,
        step: Step,
        errors: list[str] | tuple[str, ...] = (),
        warnings: list[str] | tuple[str, ...] = (),
        **fields: Any,
    ) -> "AnalysisState":
        """
        Build the successor state.

        ``errors`` and ``warnings`` are appended to the existing entries;
        ``fields`` are set on the copy.

        Raises:
            WorkflowError: the state is terminal, a set-once field would be
                overwritten, or final_report does not match the target step
        """
        if self.step.is_terminal:
            raise WorkflowError(f"State is terminal ({self.step.value}); no further transitions")

        for name in fields:
            if name == "input" or name not in type(self).model_fields:
                raise WorkflowError(f"Field cannot be updated: {name}")
            if name in _SET_ONCE and getattr(self, name) is not None:
                raise WorkflowError(f"Field already set: {name}")

        if step.is_terminal != (fields.get("final_report") is not None):
            raise WorkflowError("final_report must be set exactly when reaching a terminal step")

        return self.model_copy(
            update={
                **fields,
                "step": step,
                "errors": self.errors + tuple(errors),
                "warnings": self.warnings + tuple(warnings),
            }
        )
