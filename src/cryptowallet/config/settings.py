"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from cryptowallet.domain.models.enums import SellAccounting


DEFAULT_PROXY_URLS = [
    "https://api.allorigins.win/raw?url=",
    "https://corsproxy.io/?",
    "https://cors-anywhere.herokuapp.com/",
]


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".cryptowallet"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "CryptoPro Wallet"
    app_version: str = "0.1.0"

    # Data directory (ledger database lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Upstream price API and relay chain (tried in order)
    price_api_base_url: str = "https://cryptopro.onrender.com"
    price_proxy_urls: list[str] = DEFAULT_PROXY_URLS

    # Resilience tuning
    price_cache_ttl_seconds: float = 10.0
    price_fetch_timeout_seconds: float = 5.0
    price_max_attempts: int = 3
    price_initial_retry_delay_seconds: float = 1.0
    price_max_retry_delay_seconds: float = 30.0

    # Fixed seed makes synthetic prices reproducible
    synthetic_price_seed: Optional[int] = None

    sell_accounting: SellAccounting = SellAccounting.VERBATIM

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "wallet.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
