"""
Application Settings

Loaded from environment variables (or a local .env file).
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings


DEFAULT_DB_PATH = Path(__file__).parent / "ingest" / "data" / "benefitscout.db"


class Settings(BaseSettings):
    # Database
    database_path: str = str(DEFAULT_DB_PATH)

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Advisory insights
    insights_max_tokens: int = 500
    insights_temperature: float = 0.7
    recent_transactions_in_prompt: int = 5
    currency_symbol: str = "R$"

    # Offer search
    featured_offers_limit: int = 10
    fallback_result_count: int = 3

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_origins: str = "*"

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
