"""
config.py — Tax Advisor application settings.

Usage:
    from tax_advisor.config import settings
    print(settings.fiscal_year)

Only the HTTP layer reads settings. Engine functions receive a TaxTables
argument and never look at this module.
"""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore any extra env vars
    )

    # --- Tax tables ---
    # One of the built-in years in tax_tables.TAX_TABLES
    fiscal_year: str = "FY2023-24"
    # Optional path to a JSON TaxTables file; overrides fiscal_year when set
    tax_tables_file: str = ""

    # --- CORS ---
    # Comma-separated list of allowed frontend origins
    cors_origins: str = "http://localhost:3000"

    # --- Application ---
    debug: bool = False
    app_version: str = "0.1.0"

    @property
    def cors_origins_list(self) -> List[str]:
        """Split comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Module-level singleton — import this throughout the HTTP layer
settings = Settings()
