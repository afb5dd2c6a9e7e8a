"""Error taxonomy for the analysis pipeline."""


class StockAgentError(Exception):
    """Base class for stock agent errors."""


class InvocationError(StockAgentError):
    """The model call failed on every attempt of its retry budget."""

    def __init__(self, message: str, attempts: int):
        super().__init__(f"Failed after {attempts} attempts: {message}")
        self.last_error_message = message
        self.attempts = attempts


class ParseError(StockAgentError):
    """No recovery strategy could turn the model output into a JSON object."""

    def __init__(self, message: str, excerpt: str = ""):
        super().__init__(f"Invalid JSON response from model: {message}")
        self.excerpt = excerpt


class WorkflowError(StockAgentError):
    """A transition was requested from a state that has none."""


class AnalysisFailedError(StockAgentError):
    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors) or "Analysis failed")
        self.errors = list(errors)


class ConfigurationError(StockAgentError):
    def __init__(self, errors: list[str]):
        super().__init__("Configuration errors:\n" + "\n".join(errors))
        self.errors = list(errors)


class OutputValidationWarning(UserWarning):
    """The finished report does not match the output schema (non-fatal)."""


class EmptyResponseError(StockAgentError):
    """The model returned no content."""
