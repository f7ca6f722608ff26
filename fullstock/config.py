"""Configuration settings for the storefront."""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FULLSTOCK_", env_file=".env", extra="ignore")

    STORE_NAME: str = "Full Stock"

    # Storage
    DATA_PATH: Path = Path("data") / "data.json"
    SEED_IF_MISSING: bool = True

    # The single active cart
    CART_ID: int = 1

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 3000


settings = Settings()