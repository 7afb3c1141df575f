from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Calculation settings
    default_currency: str = Field(default="EUR", alias="DEFAULT_CURRENCY")
    settled_epsilon: Decimal = Field(default=Decimal("0.01"), alias="SETTLED_EPSILON")
    strict_exchange_rates: bool = Field(default=False, alias="STRICT_EXCHANGE_RATES")

    # Application settings
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def currency(self) -> str:
        """Default currency, upper-cased."""
        return self.default_currency.upper()


# Global settings instance
settings = Settings()
