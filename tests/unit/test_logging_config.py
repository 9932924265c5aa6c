"""Tests unitarios para la configuración de logging."""

import json
import logging
from unittest.mock import patch

from storefront_sdk.core.config import Settings
from storefront_sdk.core.logging_config import StructuredFormatter, get_logging_configuration, log_api_call


class TestLoggingConfiguration:
    """Tests para get_logging_configuration."""

    def test_console_only_without_log_file(self):
        config = get_logging_configuration(Settings(_env_file=None, LOG_LEVEL="WARNING"))

        assert list(config["handlers"]) == ["console"]
        assert config["root"]["level"] == "WARNING"

    def test_file_handlers_with_log_file(self, tmp_path):
        log_file = str(tmp_path / "storefront.log")

        config = get_logging_configuration(Settings(_env_file=None, LOG_FILE_PATH=log_file))

        assert config["handlers"]["file"]["filename"] == log_file
        assert config["handlers"]["error_file"]["filename"].endswith("storefront_errors.log")
        assert "json_file" not in config["handlers"]

    def test_json_handler_in_production(self, tmp_path):
        settings = Settings(_env_file=None, ENVIRONMENT="production", LOG_FILE_PATH=str(tmp_path / "sdk.log"))

        config = get_logging_configuration(settings)

        assert config["handlers"]["json_file"]["filename"].endswith("sdk.json")
        assert "json_file" in config["root"]["handlers"]


class TestStructuredFormatter:
    """Tests para StructuredFormatter."""

    def test_formats_record_as_json(self):
        formatter = StructuredFormatter(app_name="Storefront SDK", environment="testing")
        record = logging.LogRecord("storefront_sdk.client", logging.INFO, __file__, 10, "Fetched %d products", (3,), None)

        entry = json.loads(formatter.format(record))

        assert entry["message"] == "Fetched 3 products"
        assert entry["level"] == "INFO"
        assert entry["app_name"] == "Storefront SDK"
        assert entry["environment"] == "testing"


class TestLogApiCall:
    """Tests para log_api_call."""

    def test_level_depends_on_status(self):
        with patch.object(logging.getLogger("storefront_sdk.api.call"), "log") as log:
            log_api_call("POST", "https://shop/api/graphql", 200, 0.1)
            log_api_call("POST", "https://shop/api/graphql", 429, 0.1)
            log_api_call("POST", "https://shop/api/graphql", 500, 0.1)

        levels = [call.args[0] for call in log.call_args_list]
        assert levels == [logging.DEBUG, logging.WARNING, logging.ERROR]
