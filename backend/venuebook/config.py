# backend/venuebook/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repository root


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/venuebook.db"
    redis_url: str = "redis://localhost:6379/0"

    log_level: str = "INFO"
    timezone: str = "UTC"

    # Booking policy
    min_lead_minutes: int = 0
    pending_ttl_minutes: int = 15

    # Pending reservation expiry sweep
    sweep_enabled: bool = True
    sweep_interval_seconds: int = 60

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_prefix="VENUEBOOK_",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # Relative SQLite paths are anchored at the repository root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
