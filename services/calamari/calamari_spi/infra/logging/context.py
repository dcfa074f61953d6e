"""日志上下文：在当前请求/服务提供者范围内携带关联字段。"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

CONTEXT_FIELDS = ("request_id", "provider")

_context: ContextVar[dict[str, str | None]] = ContextVar("calamari_log_context", default={})


def get_log_context() -> dict[str, str | None]:
    """返回当前上下文中全部关联字段，未绑定的字段为 None。"""
    current = _context.get()
    return {key: current.get(key) for key in CONTEXT_FIELDS}


@contextmanager
def bind_log_context(**fields: str | None) -> Iterator[None]:
    """叠加绑定关联字段，退出时恢复外层取值。"""
    unknown = sorted(set(fields) - set(CONTEXT_FIELDS))
    if unknown:
        raise TypeError(f"unknown log context fields: {', '.join(unknown)}")
    token = _context.set({**_context.get(), **fields})
    try:
        yield
    finally:
        _context.reset(token)
