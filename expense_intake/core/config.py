from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from expense_intake import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    API_PREFIX, SEED_DATA, STRICT_AMOUNT_TYPE).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Basic app metadata
    app_name: str = "Expense Intake API"
    debug: bool = False
    version: str = __version__

    # Logging
    json_logs: bool = True

    # Routing
    api_prefix: str = "/api"

    # Store behaviour
    seed_data: bool = True
    # Only JSON numbers count as amounts; disable to also accept "12.5"
    strict_amount_type: bool = True

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
