"""Application entry point for the bucketgate server."""

import sys

from bucketgate.app import App
from bucketgate.config import Config
from bucketgate.errors import ConfigurationError
from bucketgate.logging import setup_logging
from bucketgate.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    try:
        app.check_configuration()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)
    run_server(app, config)


if __name__ == "__main__":
    main()
