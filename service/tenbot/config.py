from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    # Server
    host: str = "127.0.0.1"
    port: int = 8080

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # Outbound HTTP (seconds)
    http_timeout: float = 10.0

    # Default bot, used by `python -m tenbot.main`
    bot_name: str = "tenbot"
    webhook: str = ""  # WeChat Work group bot webhook URL

    model_config = SettingsConfigDict(
        env_prefix="TENBOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
