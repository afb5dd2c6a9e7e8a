from pydantic_settings import BaseSettings, SettingsConfigDict

from stock_agent.exceptions import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # LLM Provider (LiteLLM model string)
    google_api_key: str = ""
    llm_model: str = "gemini/gemini-2.5-flash"

    # Offline mode: deterministic canned response instead of the real model
    mock_mode: bool = False

    # Model parameters
    temperature: float = 0.3
    max_output_tokens: int = 8192
    top_p: float = 0.95
    top_k: int = 40

    # Agent
    max_retries: int = 3
    backoff_base_seconds: float = 1.0
    timeout_seconds: float = 60.0
    report_version: str = "1.0.0"

    # Logging
    log_level: str = "INFO"

    # API
    backend_host: str = "0.0.0.0"
    backend_port: int = 8000


def validate_settings(config: Settings) -> bool:
    """
    Check the settings needed before a real analysis can run.

    Raises:
        ConfigurationError: API key missing outside mock mode, or
            temperature outside [0, 1]
    """
    errors = []

    if not config.mock_mode and not config.google_api_key:
        errors.append("GOOGLE_API_KEY is not set in environment variables")

    if config.temperature < 0 or config.temperature > 1:
        errors.append("TEMPERATURE must be between 0 and 1")

    if errors:
        raise ConfigurationError(errors)

    return True


settings = Settings()
