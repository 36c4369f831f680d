"""Serve the API with uvicorn, its log lines shaped by the application config."""

import copy
from typing import Any

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from taskboard.app import App
from taskboard.config import Config
from taskboard.web.server import create_fastapi_app

ACCESS_FORMAT = '%(asctime)s "%(request_line)s" %(status_code)s'
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(message)s"
DEBUG_ACCESS_FORMAT = '%(asctime)s %(levelprefix)s %(client_addr)s "%(request_line)s" %(status_code)s'
DEBUG_DEFAULT_FORMAT = "%(asctime)s %(levelprefix)s [%(name)s] %(message)s"


def build_log_config(config: Config) -> dict[str, Any]:
    """Uvicorn logging config: compact lines in production, client address and logger name in debug."""
    log_config = copy.deepcopy(LOGGING_CONFIG)
    formatters = log_config["formatters"]
    formatters["access"]["fmt"] = DEBUG_ACCESS_FORMAT if config.debug else ACCESS_FORMAT
    formatters["default"]["fmt"] = DEBUG_DEFAULT_FORMAT if config.debug else DEFAULT_FORMAT
    return log_config


def uvicorn_log_level(config: Config) -> str:
    return config.log_level or ("debug" if config.debug else "info")


def run_server(app: App, config: Config) -> None:
    fastapi_app = create_fastapi_app(app, config)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=build_log_config(config),
        log_level=uvicorn_log_level(config),
        access_log=config.access_log,
    )
