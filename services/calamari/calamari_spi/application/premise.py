"""调度前提检查：通过调度器 ping 判断 Calamari 微服务是否可达。"""

from __future__ import annotations

import logging

from calamari_spi.domain.enums import ProviderType
from calamari_spi.domain.errors import ProviderError
from calamari_spi.domain.models import LocalizedText, Premise, Resolver
from calamari_spi.infra.calamari.client import CalamariClient

logger = logging.getLogger(__name__)


def check_premise(
    client: CalamariClient | None,
    provider_type: ProviderType,
    resolver: Resolver | None = None,
) -> Premise:
    """探测微服务连通性；失败降级为 block 前提而不抛出异常。"""
    if client is None:
        message = "calamari msa endpoint is not configured"
    else:
        try:
            client.ping()
            return Premise.ready()
        except ProviderError as exc:
            message = f"trouble contacting calamari msa - {exc}"

    logger.warning(
        "%s: %s",
        provider_type.value,
        message,
        extra={"event": "provider.premise.blocked", "external_service": "calamari", "op": "scheduler.ping"},
    )
    return Premise.block(LocalizedText(message, resolver))
