import pytest
from pydantic import ValidationError

from stock_agent.agents.state import AnalysisState, Step
from stock_agent.exceptions import WorkflowError


def test_advance_returns_new_state():
    state = AnalysisState(input={"stock": {}})

    successor = state.advance(Step.VALIDATE_INPUT)

    assert successor is not state
    assert state.step is Step.INIT
    assert successor.step is Step.VALIDATE_INPUT
    assert successor.input is state.input


def test_state_is_frozen():
    state = AnalysisState()

    with pytest.raises(ValidationError):
        state.step = Step.ERROR


def test_errors_are_appended():
    state = AnalysisState().advance(Step.ERROR, errors=["first"])

    state = state.advance(Step.COMPLETE, errors=["second"], final_report={"error": True})

    assert state.errors == ("first", "second")


def test_terminal_state_rejects_transitions():
    state = AnalysisState().advance(Step.COMPLETE, final_report={"ok": True})

    with pytest.raises(WorkflowError):
        state.advance(Step.ERROR, errors=["late"])


def test_final_report_only_on_terminal_step():
    state = AnalysisState()

    with pytest.raises(WorkflowError):
        state.advance(Step.ENRICH_REPORT, final_report={"early": True})

    with pytest.raises(WorkflowError):
        state.advance(Step.COMPLETE)


def test_set_once_fields_cannot_be_replaced():
    state = AnalysisState().advance(Step.PARSE_RESPONSE, raw_model_output="{}")

    with pytest.raises(WorkflowError):
        state.advance(Step.ENRICH_REPORT, raw_model_output="{}")


def test_input_cannot_be_replaced():
    with pytest.raises(WorkflowError):
        AnalysisState(input={}).advance(Step.VALIDATE_INPUT, input={"other": 1})


def test_only_complete_is_terminal():
    assert [step for step in Step if step.is_terminal] == [Step.COMPLETE]
