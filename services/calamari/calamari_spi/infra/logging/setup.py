"""日志初始化：服务提供者与远端调用统一输出为 JSON 行，经队列异步写入文件与 stderr。"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import SimpleQueue
from typing import Any

from calamari_spi.config import Settings
from calamari_spi.infra.logging.context import CONTEXT_FIELDS, get_log_context

LOG_FILE_NAME = "calamari-spi.jsonl"

# 协议错误信息会携带远端响应头，以下头部的取值不落盘。
_SECRET_HEADERS = ("authorization", "proxy-authorization", "cookie", "set-cookie", "x-api-key")
_SECRET_HEADER_PATTERN = re.compile(
    r"(?i)(['\"]?(?:" + "|".join(re.escape(name) for name in _SECRET_HEADERS) + r")['\"]?\s*[:=]\s*['\"]?)[^,;'\"}]+"
)

# 远端调用相关的 extra 字段，按此顺序输出。
_CALL_FIELDS = ("external_service", "op", "endpoint", "status_code", "duration_ms", "error_type")

_listener: QueueListener | None = None


def redact_text(value: str | None, mode: str) -> str | None:
    """隐藏敏感响应头取值；mode=off 原样返回。"""
    if value is None or mode.lower() == "off":
        return value
    return _SECRET_HEADER_PATTERN.sub(r"\1***", str(value))


class ContextInjectionFilter(logging.Filter):
    """入队前把当前上下文写入 record，监听线程中不再可见 contextvars。"""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in get_log_context().items():
            if getattr(record, key, None) is None:
                setattr(record, key, value)
        return True


class ProviderJsonFormatter(logging.Formatter):
    """输出一行 JSON：基础字段、关联字段、远端调用字段与可选 details。"""

    def __init__(self, *, service: str, redaction_mode: str) -> None:
        super().__init__()
        self._service = service
        self._redaction_mode = redaction_mode

    def _redact(self, value: Any) -> str | None:
        return redact_text(None if value is None else str(value), self._redaction_mode)

    def _redact_details(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: self._redact_details(item) for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._redact_details(item) for item in value]
        if isinstance(value, str):
            return self._redact(value)
        return value

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "service": self._service,
            "logger": record.name,
            "event": getattr(record, "event", None),
            "message": self._redact(record.getMessage()),
        }
        for key in CONTEXT_FIELDS:
            entry[key] = getattr(record, key, None)
        for key in _CALL_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value

        error = getattr(record, "error", None)
        if error is None and record.exc_info:
            error = self.formatException(record.exc_info)
        if error is not None:
            entry["error"] = self._redact(error)

        details = getattr(record, "details", None)
        if details is not None:
            entry["details"] = self._redact_details(details)
        return json.dumps(entry, ensure_ascii=False, default=str)


def configure_logging(settings: Settings) -> Path:
    """挂载队列处理器到根 logger，并启动写文件与 stderr(WARNING 及以上) 的监听器。"""
    global _listener
    shutdown_logging()

    log_dir = settings.log_dir if settings.log_dir.is_absolute() else (Path.cwd() / settings.log_dir).resolve()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    formatter = ProviderJsonFormatter(service="calamari-spi", redaction_mode=settings.log_redaction_mode)
    file_handler = RotatingFileHandler(
        str(log_file),
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)

    queue_obj: SimpleQueue[logging.LogRecord] = SimpleQueue()
    queue_handler = QueueHandler(queue_obj)
    queue_handler.addFilter(ContextInjectionFilter())

    root_logger = logging.getLogger()
    for handler in [item for item in root_logger.handlers if isinstance(item, QueueHandler)]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(queue_handler)
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    _listener = QueueListener(queue_obj, file_handler, stderr_handler, respect_handler_level=True)
    _listener.start()

    for name in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(name).setLevel(logging.WARNING)
    return log_file


def shutdown_logging() -> None:
    """停止监听器并关闭文件句柄。"""
    global _listener
    if _listener is None:
        return
    try:
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
    finally:
        _listener = None
