"""Schema validation behind a validate/errors contract."""

from typing import Any, Literal

from pydantic import BaseModel, ValidationError

from stock_agent.schemas.report import AnalysisReportContent
from stock_agent.schemas.stock import StockInput

SchemaKind = Literal["input", "output"]

_SCHEMAS: dict[str, type[BaseModel]] = {
    "input": StockInput,
    "output": AnalysisReportContent,
}


class ValidationResult(BaseModel):
    ok: bool
    errors: list[str] = []


def _format_error(error: dict) -> str:
    path = ".".join(str(part) for part in error["loc"])
    return f"{path}: {error['msg']}" if path else error["msg"]


def validate(data: Any, kind: SchemaKind) -> ValidationResult:
    """
    Validate a document against the input or output schema.

    Args:
        data: Parsed JSON document
        kind: "input" or "output"

    Returns:
        ValidationResult with one "<dot.path>: <message>" entry per problem
    """
    schema = _SCHEMAS.get(kind)
    if schema is None:
        raise ValueError(f"Unknown schema kind: {kind}")

    try:
        schema.model_validate(data)
    except ValidationError as e:
        return ValidationResult(ok=False, errors=[_format_error(err) for err in e.errors()])

    return ValidationResult(ok=True)


def validate_input(data: Any) -> ValidationResult:
    return validate(data, "input")


def validate_output(data: Any) -> ValidationResult:
    return validate(data, "output")
