"""日志测试：验证 JSON 行携带关联与远端调用字段，且响应头中的凭据被脱敏。"""

from __future__ import annotations

import json
import logging

import pytest

from calamari_spi.infra.logging.context import bind_log_context, get_log_context
from calamari_spi.infra.logging.setup import ContextInjectionFilter, ProviderJsonFormatter, redact_text

_HEADERS_TEXT = "HTTP client error status 401 (Unauthorized): {'authorization': 'Basic abc', 'set-cookie': 'sid=1'}"


def _record(message: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("calamari_spi.providers.base", logging.WARNING, __file__, 1, message, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def _format(record: logging.LogRecord) -> dict:
    formatter = ProviderJsonFormatter(service="calamari-spi", redaction_mode="standard")
    return json.loads(formatter.format(record))


def test_formatter_includes_context_and_call_fields() -> None:
    record = _record(
        "training provider could not be initialized",
        event="provider.initialize.failed",
        op="training.description",
        endpoint="http://worker.local:9000/api/v1.0/training/description",
        status_code=503,
    )
    with bind_log_context(provider="calamari/training", request_id="req-1"):
        ContextInjectionFilter().filter(record)
    entry = _format(record)

    assert entry["provider"] == "calamari/training"
    assert entry["request_id"] == "req-1"
    assert entry["event"] == "provider.initialize.failed"
    assert entry["endpoint"] == "http://worker.local:9000/api/v1.0/training/description"
    assert entry["status_code"] == 503
    assert entry["level"] == "WARNING"
    assert "duration_ms" not in entry
    assert "details" not in entry


def test_error_and_details_are_redacted() -> None:
    """错误文本与 details 中的 Authorization、Set-Cookie 取值被隐藏。"""
    record = _record("start failed", error=_HEADERS_TEXT, details={"calamari/training": _HEADERS_TEXT})

    entry = _format(record)

    assert "Basic abc" not in entry["error"]
    assert "sid=1" not in entry["details"]["calamari/training"]
    assert entry["error"].startswith("HTTP client error status 401 (Unauthorized)")


def test_redaction_can_be_disabled() -> None:
    assert redact_text(_HEADERS_TEXT, "off") == _HEADERS_TEXT
    assert redact_text("Authorization: Bearer secret", "standard") == "Authorization: ***"


def test_log_context_nests_and_restores() -> None:
    with bind_log_context(provider="calamari/recognition"):
        with bind_log_context(request_id="req-2"):
            assert get_log_context() == {"request_id": "req-2", "provider": "calamari/recognition"}
        assert get_log_context() == {"request_id": None, "provider": "calamari/recognition"}
    assert get_log_context() == {"request_id": None, "provider": None}


def test_unknown_context_field_is_rejected() -> None:
    with pytest.raises(TypeError, match="job_id"):
        with bind_log_context(job_id="7"):
            pass
