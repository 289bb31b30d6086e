from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    # CORS allowed origins (the dashboard frontend may be served from anywhere)
    allowed_origins: List[str] = ["*"]

    # Runtime
    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=1, le=65535)
    log_level: str = "INFO"

    # MongoDB config
    database_url: str = Field(validation_alias=AliasChoices("database_url", "mongodb_uri"))
    database_name: str = "coinwatch"
    history_collection: str = "histories"
    db_connect_timeout_ms: int = 5000

    # CoinGecko config (API key is optional)
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    coingecko_api_key: str | None = None
    coingecko_timeout_seconds: float = 15.0

    # Load .env file automatically if present
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

# Create a single settings instance
settings = Settings()
