"""Calamari 服务提供者抽象基类：管理端点解析、描述文档缓存与 init/start/restart 生命周期。

服务提供者集合 calamari 中的以下键覆盖本地默认值（键: 默认值）:
- msa-host-id: calamari
- msa-host-protocol: http
- msa-timeout-active-processor: 15000
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from calamari_spi.application.premise import check_premise
from calamari_spi.application.schema import build_model
from calamari_spi.config import CollectionKey, ProviderConfiguration
from calamari_spi.domain.enums import ProviderState, ProviderType
from calamari_spi.domain.errors import ConfigurationError
from calamari_spi.domain.models import Endpoint, Model, Premise, ProviderDescriptor, Resolver
from calamari_spi.infra.calamari.client import CalamariClient, RequestMappings
from calamari_spi.infra.calamari.schemas import DescriptionResponse
from calamari_spi.infra.logging.context import bind_log_context
from calamari_spi.infra.msa.architecture import MicroserviceArchitecture, resolve_endpoint

COLLECTION_NAME = "calamari"


class ServiceProviderCollection:
    """calamari 集合的公共键表。"""
    host_id = CollectionKey(COLLECTION_NAME, "msa-host-id", "calamari")
    application_layer_protocol = CollectionKey(COLLECTION_NAME, "msa-host-protocol", "http")
    timeout_active_processor = CollectionKey(COLLECTION_NAME, "msa-timeout-active-processor", "15000")


logger = logging.getLogger(__name__)


class CalamariServiceProvider(ABC):
    """Calamari 服务提供者基类。

    描述文档只由生命周期方法写入，写入后只读，可被并发读取；
    initialize/start/restart 之间不加锁，由宿主保证串行调用。
    """
    provider_type: ProviderType
    version: float = 1.0
    index: int = 100

    def __init__(
        self,
        configuration: ProviderConfiguration,
        architecture: MicroserviceArchitecture,
        *,
        request_timeout_seconds: int = 30,
        resolver: Resolver | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._configuration = configuration
        self._architecture = architecture
        self._request_timeout_seconds = request_timeout_seconds
        self._resolver = resolver
        self._transport = transport

        self.request_mappings = RequestMappings.for_type(self.provider_type)

        self._state = ProviderState.uninitialized
        self._endpoint: Endpoint | None = None
        self._client: CalamariClient | None = None
        self._description: DescriptionResponse | None = None

        timeout = configuration.get_int(ServiceProviderCollection.timeout_active_processor)
        self.timeout_active_processor = timeout if timeout > 0 else 0

    @abstractmethod
    def processor_identifier(self) -> CollectionKey:
        """返回处理器标识对应的集合键。"""

    @abstractmethod
    def processor_description(self) -> CollectionKey:
        """返回处理器描述对应的集合键。"""

    @property
    def provider(self) -> str:
        return f"calamari/{self.provider_type.value}"

    @property
    def state(self) -> ProviderState:
        return self._state

    @property
    def endpoint(self) -> Endpoint | None:
        return self._endpoint

    @property
    def provider_description(self) -> DescriptionResponse | None:
        return self._description

    def get_name(self, locale: str | None = None) -> str:
        return self._configuration.get_value(self.processor_identifier())

    def get_description(self, locale: str | None = None) -> str | None:
        """返回远端描述；尚未获取时使用本地配置的处理器描述。"""
        if self._description is None or self._description.description is None:
            return self._configuration.get_value(self.processor_description())
        return self._description.description

    def get_categories(self) -> list[str] | None:
        return None if self._description is None else self._description.categories

    def get_steps(self) -> list[str] | None:
        return None if self._description is None else self._description.steps

    def get_model(self, target: object | None = None) -> Model | None:
        """基于缓存描述构建配置模型；未初始化时返回 None。"""
        return build_model(self._description, self._resolver)

    def get_premise(self, target: object | None = None) -> Premise:
        """实时探测微服务连通性，不读写描述缓存。"""
        with bind_log_context(provider=self.provider):
            return check_premise(self._client, self.provider_type, self._resolver)

    def descriptor(self, locale: str | None = None) -> ProviderDescriptor:
        """返回服务提供者描述对象。"""
        return ProviderDescriptor(
            provider=self.provider,
            type=self.provider_type.value,
            name=self.get_name(locale),
            description=self.get_description(locale),
            version=self.version,
            index=self.index,
            state=self._state.value,
            categories=self.get_categories(),
            steps=self.get_steps(),
            timeout_active_processor=self.timeout_active_processor,
        )

    def initialize(self) -> None:
        """解析端点、获取描述文档；成功后端点、客户端与描述一并替换。

        失败时状态置为 failed 并向上抛出，之前的缓存（或其缺失）保持不变。
        """
        with bind_log_context(provider=self.provider):
            host_id = self._configuration.get_value(ServiceProviderCollection.host_id)
            protocol = self._configuration.get_value(ServiceProviderCollection.application_layer_protocol)
            try:
                endpoint = resolve_endpoint(self._architecture, host_id, protocol)
            except ConfigurationError as exc:
                self._state = ProviderState.failed
                logger.error(
                    "%s provider could not be initialized - %s",
                    self.provider_type.value,
                    exc,
                    extra={"event": "provider.initialize.failed", "error_type": type(exc).__name__, "error": str(exc)},
                )
                raise

            client = CalamariClient(
                endpoint.base_url,
                timeout_seconds=self._request_timeout_seconds,
                transport=self._transport,
            )
            url = client.url(self.request_mappings.description)
            try:
                description = client.get_description(self.provider_type)
            except Exception as exc:
                self._state = ProviderState.failed
                logger.warning(
                    "%s provider could not be initialized (%s) - %s",
                    self.provider_type.value,
                    url,
                    exc,
                    extra={
                        "event": "provider.initialize.failed",
                        "external_service": "calamari",
                        "op": f"{self.provider_type.value}.description",
                        "endpoint": url,
                        "status_code": getattr(exc, "status_code", None),
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                    },
                )
                if self._description is None:
                    # 尚无缓存时保留新端点，前提检查据此探测当前配置的主机。
                    self._bind(endpoint, client)
                else:
                    client.close()
                raise

            self._bind(endpoint, client)
            self._description = description
            self._state = ProviderState.initialized
            logger.info(
                "%s provider initialized (%s)",
                self.provider_type.value,
                url,
                extra={
                    "event": "provider.initialize.succeeded",
                    "details": {
                        "categories": description.categories,
                        "steps": description.steps,
                        "fields": description.model.descriptor_count() if description.model else None,
                    },
                },
            )

    def start(self) -> None:
        """尚无描述缓存时执行初始化，否则不再请求远端。"""
        if self._description is None:
            self.initialize()
        self._state = ProviderState.started

    def restart(self, force: bool = False) -> None:
        """默认等同 start；force=True 时强制重新获取描述，失败保留旧缓存。"""
        if not force:
            self.start()
            return
        self.initialize()
        self._state = ProviderState.started

    def close(self) -> None:
        """关闭并释放 HTTP 客户端；之后的前提检查视为端点未配置。"""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _bind(self, endpoint: Endpoint, client: CalamariClient) -> None:
        if self._client is not None and self._client is not client:
            self._client.close()
        self._endpoint = endpoint
        self._client = client
