"""服务提供者接口：列出 Calamari 服务提供者，查询配置模型与调度前提。"""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from calamari_spi.api.v1.schemas import EntryItem, ModelResponse, OptionItem, PremiseResponse, ProviderResponse
from calamari_spi.application.container import get_provider_registry
from calamari_spi.domain.models import Entry, SelectField
from calamari_spi.providers.base import CalamariServiceProvider
from calamari_spi.providers.registry import ProviderRegistry

router = APIRouter()


def _registry() -> ProviderRegistry:
    return get_provider_registry()


def _provider(provider_type: str, registry: ProviderRegistry) -> CalamariServiceProvider:
    try:
        return registry.get(provider_type)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _entry_item(entry: Entry, lang: str | None) -> EntryItem:
    """将配置模型条目按 locale 解析为响应结构。"""
    item = EntryItem(
        kind=entry.kind.value,
        argument=entry.argument,
        index=entry.index,
        label=entry.label.resolve(lang),
        description=entry.description.resolve(lang),
        disabled=entry.disabled,
    )
    if isinstance(entry, SelectField):
        item.multiple_options = entry.multiple_options
        item.options = [
            OptionItem(
                value=option.value,
                description=option.description.resolve(lang),
                selected=option.selected,
                disabled=option.disabled,
            )
            for option in entry.options
        ]
        return item

    item.default_value = entry.default_value
    placeholder = getattr(entry, "placeholder", None)
    if placeholder is not None:
        item.placeholder = placeholder.resolve(lang)
    for attribute in ("step", "minimum", "maximum"):
        setattr(item, attribute, getattr(entry, attribute, None))
    return item


@router.get("/providers", response_model=list[ProviderResponse])
def list_providers(
    lang: str | None = None,
    registry: ProviderRegistry = Depends(_registry),
) -> list[ProviderResponse]:
    """返回全部服务提供者元数据。"""
    return [ProviderResponse(**asdict(provider.descriptor(lang))) for provider in registry.all()]


@router.get("/providers/{provider_type}", response_model=ProviderResponse)
def get_provider(
    provider_type: str,
    lang: str | None = None,
    registry: ProviderRegistry = Depends(_registry),
) -> ProviderResponse:
    """返回指定服务提供者的元数据。"""
    return ProviderResponse(**asdict(_provider(provider_type, registry).descriptor(lang)))


@router.get("/providers/{provider_type}/model", response_model=ModelResponse)
def get_model(
    provider_type: str,
    lang: str | None = None,
    registry: ProviderRegistry = Depends(_registry),
) -> ModelResponse:
    """返回配置模型；描述文档尚未获取时返回 503。
    参数:
    - provider_type: 处理器类型或 provider 标识。
    - lang: 文本解析使用的 locale。
    """
    provider = _provider(provider_type, registry)
    model = provider.get_model()
    if model is None:
        raise HTTPException(status_code=503, detail=f"{provider.provider} model is not available")
    return ModelResponse(provider=provider.provider, entries=[_entry_item(entry, lang) for entry in model])


@router.get("/providers/{provider_type}/premise", response_model=PremiseResponse)
def get_premise(
    provider_type: str,
    lang: str | None = None,
    registry: ProviderRegistry = Depends(_registry),
) -> PremiseResponse:
    """实时探测微服务并返回调度前提。"""
    provider = _provider(provider_type, registry)
    premise = provider.get_premise()
    return PremiseResponse(
        provider=provider.provider,
        state=premise.state.value,
        message=premise.message.resolve(lang) if premise.message else None,
    )
