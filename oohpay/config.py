from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"

    # =================================================================
    # COMPENSATION DEFAULTS - used when a caller supplies no rates
    # =================================================================
    DEFAULT_WEEKDAY_RATE: float = 50.0  # per qualifying Mon-Thu
    DEFAULT_WEEKEND_RATE: float = 75.0  # per qualifying Fri-Sun

    # Bounds enforced on user-supplied rates (settings form / HTTP layer)
    RATE_MIN: float = 25.0
    RATE_MAX: float = 200.0

    CURRENCY: str = "GBP"
    CURRENCY_SYMBOL: str = "£"

    DEFAULT_TIMEZONE: str = "UTC"

    # Upper bound on schedules accepted by a single multi-schedule report
    MAX_SCHEDULES_PER_REPORT: int = 20

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
