"""依赖容器模块，负责单例化创建主机注册表、配置集合与服务提供者注册中心。"""

from __future__ import annotations

from functools import lru_cache

from calamari_spi.config import ProviderConfiguration, get_settings
from calamari_spi.infra.msa.architecture import MicroserviceArchitecture
from calamari_spi.providers.registry import ProviderRegistry


@lru_cache(maxsize=1)
def get_architecture() -> MicroserviceArchitecture:
    """获取微服务主机注册表单例。"""
    return MicroserviceArchitecture.from_settings(get_settings())


@lru_cache(maxsize=1)
def get_provider_configuration() -> ProviderConfiguration:
    """获取服务提供者配置集合单例。"""
    return ProviderConfiguration.from_settings(get_settings())


@lru_cache(maxsize=1)
def get_provider_registry() -> ProviderRegistry:
    """获取服务提供者注册中心单例。
    返回:
    - 尚未启动的注册中心；启动由应用生命周期负责。
    """
    settings = get_settings()
    return ProviderRegistry(
        get_provider_configuration(),
        get_architecture(),
        request_timeout_seconds=settings.msa_request_timeout_seconds,
    )


def shutdown_container_resources() -> None:
    """关闭共享客户端并清理依赖容器缓存。"""
    if get_provider_registry.cache_info().currsize:
        get_provider_registry().close_all()

    # 按依赖顺序清理缓存，确保后续请求可重新构建全新实例。
    for provider in (
        get_provider_registry,
        get_provider_configuration,
        get_architecture,
    ):
        provider.cache_clear()
