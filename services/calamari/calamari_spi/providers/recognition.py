"""Calamari 识别处理器服务提供者。

集合 calamari 中的以下键覆盖本地默认值（键: 默认值）:
- recognition-id: recognition
- recognition-description: Calamari recognition processor
- 其余键见 providers.base
"""

from __future__ import annotations

from calamari_spi.config import CollectionKey
from calamari_spi.domain.enums import ProviderType
from calamari_spi.providers.base import COLLECTION_NAME, CalamariServiceProvider


class CalamariRecognition(CalamariServiceProvider):
    """Calamari 识别处理器。"""
    provider_type = ProviderType.recognition

    processor_identifier_key = CollectionKey(COLLECTION_NAME, "recognition-id", "recognition")
    processor_description_key = CollectionKey(
        COLLECTION_NAME, "recognition-description", "Calamari recognition processor"
    )

    def processor_identifier(self) -> CollectionKey:
        return self.processor_identifier_key

    def processor_description(self) -> CollectionKey:
        return self.processor_description_key
