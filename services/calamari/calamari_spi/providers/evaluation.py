"""Calamari 评估处理器服务提供者。

集合 calamari 中的以下键覆盖本地默认值（键: 默认值）:
- evaluation-id: evaluation
- evaluation-description: Calamari evaluation processor
- 其余键见 providers.base
"""

from __future__ import annotations

from calamari_spi.config import CollectionKey
from calamari_spi.domain.enums import ProviderType
from calamari_spi.providers.base import COLLECTION_NAME, CalamariServiceProvider


class CalamariEvaluation(CalamariServiceProvider):
    """Calamari 评估处理器。"""
    provider_type = ProviderType.evaluation

    processor_identifier_key = CollectionKey(COLLECTION_NAME, "evaluation-id", "evaluation")
    processor_description_key = CollectionKey(
        COLLECTION_NAME, "evaluation-description", "Calamari evaluation processor"
    )

    def processor_identifier(self) -> CollectionKey:
        return self.processor_identifier_key

    def processor_description(self) -> CollectionKey:
        return self.processor_description_key
