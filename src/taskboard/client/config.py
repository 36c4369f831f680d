from pathlib import Path

from pydantic_settings import BaseSettings


class ClientConfig(BaseSettings):
    """Client configuration loaded from environment variables."""

    api_url: str = "http://localhost:5000/api"  # Base URL of the REST API, including the /api prefix
    token_path: Path = Path.home() / ".taskboard" / "token.json"  # Where the session token survives restarts
    search_debounce_seconds: float = 0.4
    page_limit: int = 6
    verbose_logging: bool = False  # Show debug events on stderr, see taskboard.logging.setup_client_logging

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TASKBOARD_CLIENT_",
        "extra": "ignore",
    }
