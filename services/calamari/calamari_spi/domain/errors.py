"""服务提供者异常定义：配置错误、HTTP 协议错误、传输错误与描述文档格式错误。"""

from __future__ import annotations

from collections.abc import Mapping


class ProviderError(RuntimeError):
    """服务提供者异常基类。"""


class ConfigurationError(ProviderError):
    """微服务主机未注册或配置非法，初始化直接失败且不重试。"""


class ProtocolError(ProviderError):
    """远端返回非成功 HTTP 状态码。"""

    kind = "HTTP error"

    def __init__(self, status_code: int, reason: str, headers: Mapping[str, str] | None = None) -> None:
        self.status_code = status_code
        self.reason = reason
        self.headers = dict(headers or {})
        super().__init__(f"{self.kind} status {status_code} ({reason}): {self.headers}")


class ClientProtocolError(ProtocolError):
    """远端返回 4xx。"""

    kind = "HTTP client error"


class ServerProtocolError(ProtocolError):
    """远端返回 5xx。"""

    kind = "HTTP server error"


class TransportError(ProviderError):
    """请求未获得任何响应（连接失败、超时等）。"""


class DescriptionFormatError(ProviderError):
    """描述文档不是 JSON 或缺少必需字段。"""
