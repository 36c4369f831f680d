from typing import Literal

from pydantic_settings import BaseSettings

LogLevel = Literal["critical", "error", "warning", "info", "debug"]


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # e.g. mongodb://localhost:27017/taskboard, database name is the path
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    log_level: LogLevel | None = None  # Defaults to debug or info following `debug`
    access_log: bool = True
    jwt_secret: str  # HMAC key used to sign session tokens
    jwt_ttl_days: int = 30
    bcrypt_rounds: int = 12
    cors_origins: list[str] = []

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TASKBOARD_",
        "extra": "ignore",
    }
