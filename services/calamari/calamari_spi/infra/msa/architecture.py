"""微服务架构主机表：按逻辑 id 查询主机地址，并结合传输协议解析端点。"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from calamari_spi.config import Settings
from calamari_spi.domain.errors import ConfigurationError
from calamari_spi.domain.models import Endpoint

SUPPORTED_PROTOCOLS = frozenset({"http", "https"})


@dataclass(frozen=True, slots=True)
class Host:
    """已注册的微服务主机。"""
    id: str
    url: str


class MicroserviceArchitecture:
    """宿主范围内的微服务主机注册表。"""
    def __init__(self, hosts: Mapping[str, str] | None = None) -> None:
        self._hosts: dict[str, Host] = {}
        for host_id, url in (hosts or {}).items():
            host_id, url = str(host_id).strip(), str(url).strip()
            # 地址为空的主机视为未注册。
            if host_id and url:
                self._hosts[host_id] = Host(id=host_id, url=url.rstrip("/"))

    @classmethod
    def from_settings(cls, settings: Settings) -> MicroserviceArchitecture:
        return cls(settings.msa_hosts)

    def get_host(self, host_id: str) -> Host | None:
        return self._hosts.get(host_id)

    def host_ids(self) -> list[str]:
        return sorted(self._hosts)


def resolve_endpoint(architecture: MicroserviceArchitecture, host_id: str, protocol: str) -> Endpoint:
    """解析端点标识；主机未注册或协议不受支持时抛出 ConfigurationError。"""
    host = architecture.get_host(host_id)
    if host is None:
        raise ConfigurationError(f"unknown host configuration for msa id {host_id}.")
    protocol = protocol.strip().lower()
    if protocol not in SUPPORTED_PROTOCOLS:
        raise ConfigurationError(f"unsupported application layer protocol '{protocol}' for msa id {host_id}.")
    return Endpoint(host_id=host.id, protocol=protocol, address=host.url)
