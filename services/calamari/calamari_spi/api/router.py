"""API 总路由配置，注册服务提供者子路由。"""

from __future__ import annotations

from fastapi import APIRouter

from calamari_spi.api.v1.providers import router as providers_router
from calamari_spi.config import get_settings

settings = get_settings()

api_router = APIRouter(prefix=settings.api_prefix)
api_router.include_router(providers_router, tags=["providers"])
