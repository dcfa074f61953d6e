"""Calamari HTTP 客户端：封装描述文档、连通性探测与作业接口路径，并对 HTTP 结果分类。"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from calamari_spi.domain.enums import ProviderType
from calamari_spi.domain.errors import (
    ClientProtocolError,
    DescriptionFormatError,
    ProtocolError,
    ServerProtocolError,
    TransportError,
)
from calamari_spi.infra.calamari.schemas import DescriptionResponse

API_CONTEXT_PATH = "/api"
API_PREFIX_V1_0 = API_CONTEXT_PATH + "/v1.0/"
SCHEDULER_CONTEXT_PATH = API_PREFIX_V1_0 + "scheduler/"
PING_PATH = SCHEDULER_CONTEXT_PATH + "ping"
SCHEDULER_JOB_PATH = SCHEDULER_CONTEXT_PATH + "job/{id}"
EXPUNGE_JOB_PATH = SCHEDULER_CONTEXT_PATH + "expunge/{id}"


def format_path(template: str, job_id: int | str) -> str:
    """将路径模板中的 {id} 替换为作业 ID。"""
    return template.replace("{id}", str(job_id))


@dataclass(frozen=True, slots=True)
class RequestMappings:
    """某一处理器类型的接口路径集合。"""
    description: str
    execute: str
    job: str
    ping: str = PING_PATH
    scheduler_job: str = SCHEDULER_JOB_PATH
    expunge_job: str = EXPUNGE_JOB_PATH

    @classmethod
    def for_type(cls, provider_type: ProviderType) -> RequestMappings:
        prefix = API_PREFIX_V1_0 + provider_type.value
        return cls(
            description=prefix + "/description",
            execute=prefix + "/execute",
            job=prefix + "/job/{id}",
        )


logger = logging.getLogger(__name__)


class CalamariClient:
    """Calamari 微服务同步 HTTP 客户端封装。"""
    def __init__(
        self,
        base_url: str,
        timeout_seconds: int = 30,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._closed = False
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout_seconds),
            follow_redirects=True,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=5),
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def url(self, path: str) -> str:
        """返回完整请求地址，用于日志与诊断。"""
        return f"{self._base_url}{path}"

    def _client_or_raise(self) -> httpx.Client:
        """返回可用客户端；已关闭时按传输错误处理。"""
        if self._closed:
            raise TransportError(f"calamari client for \"{self._base_url}\" is already closed")
        return self._client

    def close(self) -> None:
        """关闭底层 HTTP 客户端连接池。"""
        if self._closed:
            return
        self._client.close()
        self._closed = True

    def _request(
        self,
        *,
        method: str,
        path: str,
        op: str,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """发送 HTTP 请求，将无响应与非 2xx 状态分别转换为传输错误与协议错误。"""
        started = time.perf_counter()
        status_code: int | None = None
        try:
            try:
                response = self._client_or_raise().request(method, path, headers=headers, json=json_body)
            except httpx.RequestError as exc:
                # 包含重定向循环与响应解码失败。
                raise TransportError(f"I/O error on {method} request for \"{self.url(path)}\": {exc}") from exc
            status_code = response.status_code
            if not response.is_success:
                raise self._protocol_error(response)
        except Exception as exc:
            duration_ms = round((time.perf_counter() - started) * 1000, 2)
            logger.error(
                "calamari request failed",
                extra={
                    "event": "calamari.request.failed",
                    "external_service": "calamari",
                    "op": op,
                    "duration_ms": duration_ms,
                    "status_code": status_code,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                    "endpoint": self.url(path),
                },
            )
            raise
        return response

    @staticmethod
    def _protocol_error(response: httpx.Response) -> ProtocolError:
        """按状态码区间构造协议错误。"""
        headers = dict(response.headers)
        if response.is_client_error:
            return ClientProtocolError(response.status_code, response.reason_phrase, headers)
        if response.is_server_error:
            return ServerProtocolError(response.status_code, response.reason_phrase, headers)
        return ProtocolError(response.status_code, response.reason_phrase, headers)

    def get_description(self, provider_type: ProviderType) -> DescriptionResponse:
        """读取处理器描述文档。"""
        path = RequestMappings.for_type(provider_type).description
        response = self._request(
            method="GET",
            path=path,
            op=f"{provider_type.value}.description",
            headers={"Accept": "application/json"},
        )
        try:
            return DescriptionResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise DescriptionFormatError(
                f"malformed {provider_type.value} description from {self.url(path)}: {exc}"
            ) from exc

    def ping(self) -> None:
        """调用调度器 ping 接口，仅关心状态码。"""
        self._request(method="GET", path=PING_PATH, op="scheduler.ping")
