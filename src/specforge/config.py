"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Input bounds, measured in characters
    min_input_length: int = 20
    max_input_length: int = 12_000

    # Rate limiting (fixed window, per caller address)
    rate_limit_enabled: bool = True
    rate_limit_capacity: int = 30
    rate_limit_window_seconds: int = 60

    # Generation backend
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    generation_model: str = "gpt-4o-2024-08-06"
    generation_timeout_seconds: float = 60.0

    # Post-validation cross-reference warnings
    consistency_checks_enabled: bool = True

    # CORS
    cors_allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    json_logs: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "SPECFORGE_",
    }


settings = Settings()
