"""Application configuration via environment variables."""

from pathlib import Path
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    trades_file: Path = PROJECT_ROOT / "data" / "TradesList.txt"  # Sierra Chart SavedTradeActivity export
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173"]  # Vite dev server

    model_config = {"env_prefix": "TL_", "env_file": ".env"}


settings = Settings()
