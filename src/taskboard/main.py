"""Application entry point for the Taskboard API server."""

from taskboard.app import App
from taskboard.config import Config
from taskboard.logging import setup_logging
from taskboard.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug, config.log_level)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
