"""服务提供者注册中心：管理 Calamari 服务提供者的注册、查询与批量生命周期调用。"""

from __future__ import annotations

import logging

import httpx

from calamari_spi.config import ProviderConfiguration
from calamari_spi.domain.enums import ProviderType
from calamari_spi.domain.errors import ProviderError
from calamari_spi.infra.msa.architecture import MicroserviceArchitecture
from calamari_spi.providers.base import CalamariServiceProvider
from calamari_spi.providers.evaluation import CalamariEvaluation
from calamari_spi.providers.recognition import CalamariRecognition
from calamari_spi.providers.training import CalamariTraining

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """服务提供者注册中心，统一管理三类处理器实例。"""
    def __init__(
        self,
        configuration: ProviderConfiguration,
        architecture: MicroserviceArchitecture,
        *,
        request_timeout_seconds: int = 30,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._providers: dict[ProviderType, CalamariServiceProvider] = {}
        for provider_class in (CalamariEvaluation, CalamariRecognition, CalamariTraining):
            self.register(
                provider_class(
                    configuration,
                    architecture,
                    request_timeout_seconds=request_timeout_seconds,
                    transport=transport,
                )
            )

    def register(self, provider: CalamariServiceProvider) -> None:
        """注册服务提供者实例；同类型重复注册时替换旧实例。
        参数:
        - provider: 待注册的服务提供者。
        """
        self._providers[provider.provider_type] = provider

    def get(self, provider_type: ProviderType | str) -> CalamariServiceProvider:
        """按处理器类型或 provider 标识（calamari/<type>）获取实例。"""
        key = str(provider_type.value if isinstance(provider_type, ProviderType) else provider_type)
        if key.startswith("calamari/"):
            key = key.split("/", 1)[1]
        try:
            return self._providers[ProviderType(key)]
        except (KeyError, ValueError) as exc:
            raise KeyError(f"unknown provider: {provider_type}") from exc

    def all(self) -> list[CalamariServiceProvider]:
        """返回全部已注册实例，按 index 与类型排序。"""
        return sorted(self._providers.values(), key=lambda item: (item.index, item.provider_type.value))

    def start_all(self) -> dict[str, ProviderError]:
        """依次启动全部服务提供者，单个失败不影响其余实例。
        返回:
        - provider 标识到启动异常的映射；全部成功时为空。
        """
        failures: dict[str, ProviderError] = {}
        for provider in self.all():
            try:
                provider.start()
            except ProviderError as exc:
                failures[provider.provider] = exc
        if failures:
            logger.warning(
                "some providers failed to start",
                extra={"event": "provider.start_all.partial", "details": {k: str(v) for k, v in failures.items()}},
            )
        return failures

    def close_all(self) -> None:
        for provider in self._providers.values():
            provider.close()
