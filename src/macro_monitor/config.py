"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from macro_monitor.domain.errors import ConfigurationError
from macro_monitor.services.aggregation import AdvisoryThresholds

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-5-mini"
    openai_store: bool = False
    fdc_api_key: str | None = None
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    fdc_page_size: int = 10
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    resolve_concurrency: int = 4
    protein_target_g: float = 145.0
    net_carbs_max_g: float = 40.0
    net_carbs_min_g: float = 30.0
    protein_min_items: int = 2
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def require_credentials(self) -> None:
        """Raise ``ConfigurationError`` if an external-service key is missing."""
        missing = [
            name.upper()
            for name in ("openai_api_key", "fdc_api_key")
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ConfigurationError(f"Missing {', '.join(missing)} env var")

    def advisory_thresholds(self) -> AdvisoryThresholds:
        """Build advisory thresholds from settings."""
        return AdvisoryThresholds(
            protein_target_g=self.protein_target_g,
            net_carbs_max_g=self.net_carbs_max_g,
            net_carbs_min_g=self.net_carbs_min_g,
            protein_min_items=self.protein_min_items,
        )
