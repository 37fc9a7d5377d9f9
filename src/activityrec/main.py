"""Application entry point for the activity recordings backend server."""

from activityrec.app import App
from activityrec.config import Config
from activityrec.logging import setup_logging
from activityrec.web.runner import run_server


def main() -> None:
    config = Config()  # Fails fast when the signing secret is not configured
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
