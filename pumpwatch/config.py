"""Central configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class OkxConfig(BaseSettings):
    base_url: str = Field(default="https://www.okx.com", alias="OKX_BASE_URL")
    inst_type: str = Field(default="SWAP", alias="OKX_INST_TYPE")
    suffix_filter: str = Field(default="-USDT-SWAP", alias="OKX_SUFFIX_FILTER")
    http_timeout: float = Field(default=10.0, alias="OKX_HTTP_TIMEOUT")


class TelegramConfig(BaseSettings):
    bot_token: str = Field(default="", alias="TELEGRAM_BOT_TOKEN")
    owner_chat_id: str = Field(default="", alias="CHAT_ID")
    api_base_url: str = Field(default="https://api.telegram.org", alias="TELEGRAM_API_BASE_URL")
    poll_timeout: int = Field(default=30, alias="TELEGRAM_POLL_TIMEOUT")
    chunk_size: int = Field(default=3500, alias="TELEGRAM_CHUNK_SIZE")


class ScanDefaults(BaseSettings):
    """Startup values for the tunable scan parameters.

    These form the default layer of the configuration store. The tunables
    accept raw text so that the store, not settings loading, coerces and
    clamps them: an unparsable or out-of-range environment value falls back
    or is clamped the same way a chat override would be.
    """

    top_n: int | float | str = Field(default=50, alias="TOP_N")
    bar: str = Field(default="1m", alias="BAR")
    window_min: int | float | str = Field(default=5, alias="WINDOW_MIN")
    pump_pct: int | float | str = Field(default=3.0, alias="PUMP_PCT")
    vol_mult: int | float | str = Field(default=3.0, alias="VOL_MULT")
    cooldown_min: int | float | str = Field(default=15, alias="COOLDOWN_MIN")
    daily_pump_pct: int | float | str = Field(default=10.0, alias="DAILY_PUMP_PCT")
    momentum_pct: int | float | str = Field(default=1.5, alias="MOM_PCT")
    timezone: str = Field(default="Asia/Hong_Kong", alias="TIMEZONE")
    fetch_concurrency: int = Field(default=1, alias="FETCH_CONCURRENCY")
    fetch_timeout: float = Field(default=15.0, alias="FETCH_TIMEOUT")
    report_top_k: int = Field(default=10, alias="REPORT_TOP_K")
    cooldown_backend: str = Field(default="memory", alias="COOLDOWN_BACKEND")

    def as_parameters(self) -> dict[str, int | float | str]:
        """Return the tunable values keyed by their public parameter names."""
        return {
            "TOP_N": self.top_n,
            "BAR": self.bar,
            "WINDOW_MIN": self.window_min,
            "PUMP_PCT": self.pump_pct,
            "VOL_MULT": self.vol_mult,
            "COOLDOWN_MIN": self.cooldown_min,
            "DAILY_PUMP_PCT": self.daily_pump_pct,
            "MOM_PCT": self.momentum_pct,
            "TIMEZONE": self.timezone,
        }


class RedisConfig(BaseSettings):
    host: str = Field(default="localhost", alias="REDIS_HOST")
    port: int = Field(default=6379, alias="REDIS_PORT")
    db: int = Field(default=0, alias="REDIS_DB")
    password: str = Field(default="", alias="REDIS_PASSWORD")

    @property
    def url(self) -> str:
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


class LoggingConfig(BaseSettings):
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")


class AppConfig:
    """Aggregated application configuration."""

    def __init__(self) -> None:
        self.okx = OkxConfig()
        self.telegram = TelegramConfig()
        self.scan = ScanDefaults()
        self.redis = RedisConfig()
        self.logging = LoggingConfig()


def get_config() -> AppConfig:
    """Create and return the application configuration."""
    return AppConfig()
