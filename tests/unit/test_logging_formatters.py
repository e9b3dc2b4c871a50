"""Unit tests for log processors and logger setup."""

import pytest
import structlog

from easysms.logging import (
    build_processors,
    configure_logging,
    get_module_logger,
    mask_phone_numbers,
    redact_credentials,
    truncate_large_values,
)


@pytest.mark.unit
class TestRedactCredentials:

    def test_redacts_credential_fields(self):
        processor = redact_credentials()
        event = {
            "event": "gateway_send_failed",
            "access_key_secret": "s3cr3t",
            "api_key": "k",
            "Authorization": "Basic abc",
            "gateway": "aliyun",
        }

        result = processor(None, "info", event)

        assert result["access_key_secret"] == "***REDACTED***"
        assert result["api_key"] == "***REDACTED***"
        assert result["Authorization"] == "***REDACTED***"
        assert result["gateway"] == "aliyun"
        assert result["event"] == "gateway_send_failed"

    def test_redacts_nested_mappings(self):
        event = {
            "event": "creating_gateway",
            "config": {"secret_key": "qc", "region": "ap-guangzhou"},
            "request": {"headers": {"Authorization": "TC3-HMAC-SHA256 ..."}},
        }

        result = redact_credentials()(None, "debug", event)

        assert result["config"] == {
            "secret_key": "***REDACTED***",
            "region": "ap-guangzhou",
        }
        assert result["request"]["headers"]["Authorization"] == "***REDACTED***"
        assert event["config"]["secret_key"] == "qc"

    def test_none_values_left_alone(self):
        result = redact_credentials()(None, "info", {"token": None})

        assert result["token"] is None

    def test_extra_keys_and_mask_value(self):
        processor = redact_credentials(
            mask_value="[hidden]", extra_keys=frozenset({"sdk_app_id"})
        )

        result = processor(None, "info", {"sdk_app_id": "1400", "gateway": "qcloud"})

        assert result == {"sdk_app_id": "[hidden]", "gateway": "qcloud"}


@pytest.mark.unit
class TestMaskPhoneNumbers:

    @pytest.mark.parametrize(
        "number,expected",
        [
            ("+8618888888888", "+*********8888"),
            ("18888888888", "*******8888"),
            ("555-123-4567", "***-***-4567"),
            ("1234", "1234"),
        ],
    )
    def test_masks_recipient(self, number, expected):
        result = mask_phone_numbers()(None, "info", {"to": number})

        assert result["to"] == expected

    def test_other_keys_untouched(self):
        result = mask_phone_numbers()(
            None, "info", {"event": "message_sent", "attempts": 2, "gateway": "a"}
        )

        assert result == {"event": "message_sent", "attempts": 2, "gateway": "a"}

    def test_visible_digits(self):
        result = mask_phone_numbers(visible_digits=2)(None, "info", {"mobile": "13800"})

        assert result["mobile"] == "***00"


@pytest.mark.unit
class TestTruncateLargeValues:

    def test_truncates_long_strings(self):
        processor = truncate_large_values(max_length=10)

        result = processor(None, "info", {"error": "x" * 25, "short": "ok"})

        assert result["error"] == "x" * 10 + "...[15 more chars]"
        assert result["short"] == "ok"

    def test_non_strings_untouched(self):
        result = truncate_large_values(max_length=1)(None, "info", {"attempts": 12345})

        assert result["attempts"] == 12345


@pytest.mark.unit
class TestLoggerSetup:

    def test_build_processors_redacts_before_rendering(self):
        processors = build_processors(json_output=True)
        event = {"event": "sending_message", "to": "18888888888", "api_key": "k"}

        # redact, mask, truncate, then render
        for processor in processors[-4:-1]:
            event = processor(None, "info", event)
        rendered = processors[-1](None, "info", event)

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert "*******8888" in rendered
        assert "18888888888" not in rendered
        assert '"k"' not in rendered

    def test_extra_processors_run_before_renderer(self):
        def marker(logger, method_name, event_dict):
            return event_dict

        processors = build_processors(extra_processors=[marker])

        assert processors[-2] is marker
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_configure_logging_under_pytest_returns_logger(self):
        assert configure_logging(log_level="DEBUG", json_output=True) is not None

    def test_session_logging_is_silenced(self):
        """Tests run with structlog configured and nothing rendered."""
        assert structlog.is_configured()
        assert structlog.get_config()["processors"] == [structlog.stdlib.add_log_level]

    def test_get_module_logger_binds_module_context(self):
        logger = get_module_logger()

        context = structlog.get_context(logger)
        assert context["component"] == "test_logging_formatters"
        assert context["module_path"].endswith("test_logging_formatters")
