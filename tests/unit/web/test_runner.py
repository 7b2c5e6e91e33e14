from uvicorn.config import LOGGING_CONFIG

from bucketgate.web.runner import ACCESS_LOG_FORMAT, DEFAULT_LOG_FORMAT, build_log_config


class TestBuildLogConfig:
    def test_custom_formats(self):
        log_config = build_log_config()

        assert log_config["formatters"]["access"]["fmt"] == ACCESS_LOG_FORMAT
        assert log_config["formatters"]["default"]["fmt"] == DEFAULT_LOG_FORMAT

    def test_uvicorn_defaults_not_mutated(self):
        before = LOGGING_CONFIG["formatters"]["access"]["fmt"]

        build_log_config()

        assert LOGGING_CONFIG["formatters"]["access"]["fmt"] == before
