"""FastAPI 应用入口：启动时拉取服务提供者描述，挂载请求 ID 与路由。"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging
import time
from uuid import uuid4

from fastapi import Depends, FastAPI, Request

from calamari_spi.api.router import api_router
from calamari_spi.api.v1.providers import _registry
from calamari_spi.application.container import get_provider_registry, shutdown_container_resources
from calamari_spi.config import get_settings
from calamari_spi.domain.enums import ProviderState
from calamari_spi.infra.logging.context import bind_log_context
from calamari_spi.infra.logging.setup import configure_logging, shutdown_logging
from calamari_spi.providers.registry import ProviderRegistry

settings = get_settings()
logger = logging.getLogger(__name__)


def provider_states(registry: ProviderRegistry) -> dict[str, str]:
    return {item.provider: item.state.value for item in registry.all()}


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """启动失败的服务提供者只记录日志，前提接口会反映其状态。"""
    configure_logging(settings)
    registry = get_provider_registry()
    failures = registry.start_all()
    logger.info(
        "calamari providers started (%d failed)",
        len(failures),
        extra={"event": "api.startup.providers", "details": provider_states(registry)},
    )
    try:
        yield
    finally:
        shutdown_container_resources()
        shutdown_logging()


app = FastAPI(title=settings.app_name, lifespan=lifespan)


@app.middleware("http")
async def attach_request_id(request: Request, call_next):
    """透传或生成 X-Request-Id，并回写到响应头。"""
    request_id = request.headers.get("X-Request-Id") or uuid4().hex
    started = time.perf_counter()
    with bind_log_context(request_id=request_id):
        response = await call_next(request)
        logger.debug(
            "%s %s -> %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "event": "http.request",
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
    response.headers["X-Request-Id"] = request_id
    return response


@app.get("/health")
def health(registry: ProviderRegistry = Depends(_registry)) -> dict[str, object]:
    """全部服务提供者已启动时为 ok，否则为 degraded；API 本身始终可用。"""
    states = provider_states(registry)
    healthy = all(state == ProviderState.started.value for state in states.values())
    return {"status": "ok" if healthy else "degraded", "providers": states}


app.include_router(api_router)
