import logging

import pytest
import structlog

from bucketgate.logging import NOISY_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestSetupLogging:
    def test_store_client_loggers_quieted(self):
        setup_logging(debug=True)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_production_renders_json_with_structured_tracebacks(self):
        setup_logging(debug=False)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert structlog.processors.dict_tracebacks in processors

    def test_debug_renders_console(self):
        setup_logging(debug=True)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert structlog.processors.dict_tracebacks not in processors
