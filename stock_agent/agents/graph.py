"""Analysis workflow state machine.

Pipeline flow:
    init
    validate_input ──(invalid)──┐
    parallel_processing         │
        ├── extract_key_metrics │
        └── model invocation    │
    parse_response ─────(fail)──┤
    enrich_report               error
    complete  <─────────────────┘

Every failing step appends to ``errors`` and moves to ``error``, which builds
a degraded report. Exceptions never leave the engine.
"""
import asyncio
import logging
import warnings
from typing import Any, Awaitable, Callable

from stock_agent.agents.enricher import ReportEnricher
from stock_agent.agents.metrics import extract_key_metrics
from stock_agent.agents.parser import parse_json_response
from stock_agent.agents.prompts import build_analysis_prompt
from stock_agent.agents.state import AnalysisState, Step
from stock_agent.config import Settings
from stock_agent.exceptions import OutputValidationWarning, ParseError, WorkflowError
from stock_agent.llm.invoker import ModelInvoker
from stock_agent.llm.provider import InferenceClient, build_provider
from stock_agent.schemas.validation import ValidationResult, validate

logger = logging.getLogger(__name__)

Validator = Callable[[Any, str], ValidationResult]

FAILURE_MESSAGE = "Analysis failed"


def degraded_report(errors: list[str] | tuple[str, ...]) -> dict[str, Any]:
    return {"error": True, "errors": list(errors), "message": FAILURE_MESSAGE}


def is_degraded(report: dict[str, Any] | None) -> bool:
    return bool(report) and report.get("error") is True


class WorkflowEngine:
    def __init__(
        self,
        invoker: ModelInvoker,
        enricher: ReportEnricher,
        validator: Validator = validate,
    ):
        self.invoker = invoker
        self.enricher = enricher
        self.validator = validator

        self._handlers: dict[Step, Callable[[AnalysisState], Awaitable[AnalysisState]]] = {
            Step.INIT: self._init,
            Step.VALIDATE_INPUT: self._validate_input,
            Step.PARALLEL_PROCESSING: self._parallel_processing,
            Step.PARSE_RESPONSE: self._parse_response,
            Step.ENRICH_REPORT: self._enrich_report,
            Step.ERROR: self._error,
        }

    @classmethod
    def from_settings(
        cls,
        config: Settings,
        client: InferenceClient | None = None,
    ) -> "WorkflowEngine":
        """
        Wire the engine from settings.

        Args:
            config: Settings value
            client: Inference client; built from ``config`` when omitted
        """
        client = client or build_provider(config)
        invoker = ModelInvoker.from_settings(client, config)
        enricher = ReportEnricher.from_settings(config, model_name=invoker.model_name)
        return cls(invoker, enricher)

    async def _init(self, state: AnalysisState) -> AnalysisState:
        return state.advance(Step.VALIDATE_INPUT)

    async def _validate_input(self, state: AnalysisState) -> AnalysisState:
        logger.info("Step validate_input: validating input...")

        result = self.validator(state.input, "input")
        if not result.ok:
            errors = result.errors or ["Input validation failed"]
            logger.warning(f"Input validation failed: {errors}")
            return state.advance(Step.ERROR, errors=errors)

        return state.advance(Step.PARALLEL_PROCESSING, validated=True)

    async def _parallel_processing(self, state: AnalysisState) -> AnalysisState:
        logger.info("Step parallel_processing: key metrics + model analysis")

        snapshot = state.input

        async def metrics_task():
            return extract_key_metrics(snapshot)

        async def analysis_task():
            return await self.invoker.invoke(build_analysis_prompt(snapshot))

        # Fan-out / fan-in: both tasks finish before the results are inspected
        key_metrics, raw_output = await asyncio.gather(
            metrics_task(), analysis_task(), return_exceptions=True
        )

        failures = [r for r in (key_metrics, raw_output) if isinstance(r, Exception)]
        if failures:
            errors = [str(f) or type(f).__name__ for f in failures]
            logger.error(f"Parallel processing failed: {errors}")
            return state.advance(Step.ERROR, errors=errors)

        logger.info(
            f"Metrics pass rate {key_metrics.pass_rate}% "
            f"({key_metrics.passed_count}/{key_metrics.total_metrics}); "
            f"model output {len(raw_output)} chars after {self.invoker.attempts} attempt(s)"
        )

        return state.advance(
            Step.PARSE_RESPONSE,
            key_metrics=key_metrics,
            raw_model_output=raw_output,
        )

    async def _parse_response(self, state: AnalysisState) -> AnalysisState:
        logger.info("Step parse_response: parsing model output...")

        try:
            parsed = parse_json_response(state.raw_model_output or "")
        except ParseError as e:
            return state.advance(Step.ERROR, errors=[f"Parse error: {e}"])

        output_check = self.validator(parsed, "output")
        output_warnings = []
        if not output_check.ok:
            output_warnings = [f"Output validation: {err}" for err in output_check.errors]
            logger.warning(f"Output validation warnings: {output_check.errors}")
            warnings.warn(
                f"Report does not match the output schema: {output_check.errors}",
                OutputValidationWarning,
                stacklevel=2,
            )

        return state.advance(
            Step.ENRICH_REPORT,
            parsed_report=parsed,
            warnings=output_warnings,
        )

    async def _enrich_report(self, state: AnalysisState) -> AnalysisState:
        logger.info("Step enrich_report: finalizing report...")

        report = self.enricher.enrich(state.parsed_report, state.key_metrics, state.input)

        logger.info(
            f"Analysis complete: score={report.get('overallScore')}, "
            f"recommendation={report.get('recommendation')}"
        )

        return state.advance(Step.COMPLETE, final_report=report)

    async def _error(self, state: AnalysisState) -> AnalysisState:
        logger.error(f"Workflow error: {list(state.errors)}")
        return state.advance(Step.COMPLETE, final_report=degraded_report(state.errors))

    async def transition(self, state: AnalysisState) -> AnalysisState:
        """
        Run the handler of the current step and return the successor state.

        Raises:
            WorkflowError: ``state`` is terminal
        """
        if state.step.is_terminal:
            raise WorkflowError("Cannot transition from a terminal state")

        handler = self._handlers[state.step]

        try:
            return await handler(state)
        except WorkflowError:
            raise
        except Exception as e:
            if state.step is Step.ERROR:
                raise
            logger.error(f"Unexpected error in step {state.step.value}: {e}", exc_info=True)
            return state.advance(Step.ERROR, errors=[f"{state.step.value}: {e}"])

    async def run(self, data: Any) -> AnalysisState:
        """
        Drive one execution from init to complete.

        Args:
            data: Raw input document

        Returns:
            Terminal AnalysisState (``final_report`` is always set)
        """
        state = AnalysisState(input=data)

        while not state.step.is_terminal:
            state = await self.transition(state)

        return state

    async def execute(self, data: Any) -> dict[str, Any]:
        """Run the workflow and return the final report."""
        logger.info("Starting analysis workflow...")
        state = await self.run(data)
        return state.final_report
