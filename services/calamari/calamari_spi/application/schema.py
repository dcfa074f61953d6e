"""模型转换：将远端字段描述转换为按 index 稳定排序的类型化配置模型。"""

from __future__ import annotations

from calamari_spi.domain.models import (
    BooleanField,
    DecimalField,
    Entry,
    IntegerField,
    LocalizedText,
    Model,
    Option,
    Resolver,
    SelectField,
    StringField,
)
from calamari_spi.infra.calamari.schemas import (
    BooleanFieldDescriptor,
    DecimalFieldDescriptor,
    DescriptionResponse,
    IntegerFieldDescriptor,
    SelectFieldDescriptor,
    StringFieldDescriptor,
)


def _text(value: str | None, resolver: Resolver | None) -> LocalizedText:
    return LocalizedText(value, resolver)


def _boolean(entry: BooleanFieldDescriptor, resolver: Resolver | None) -> BooleanField:
    return BooleanField(
        argument=entry.argument,
        index=entry.index,
        default_value=entry.default_value,
        label=_text(entry.label, resolver),
        description=_text(entry.description, resolver),
        disabled=entry.disabled,
    )


def _decimal(entry: DecimalFieldDescriptor, resolver: Resolver | None) -> DecimalField:
    return DecimalField(
        argument=entry.argument,
        index=entry.index,
        default_value=entry.default_value,
        label=_text(entry.label, resolver),
        description=_text(entry.description, resolver),
        placeholder=_text(entry.placeholder, resolver),
        step=entry.step,
        minimum=entry.minimum,
        maximum=entry.maximum,
        disabled=entry.disabled,
    )


def _integer(entry: IntegerFieldDescriptor, resolver: Resolver | None) -> IntegerField:
    return IntegerField(
        argument=entry.argument,
        index=entry.index,
        default_value=entry.default_value,
        label=_text(entry.label, resolver),
        description=_text(entry.description, resolver),
        placeholder=_text(entry.placeholder, resolver),
        step=entry.step,
        minimum=entry.minimum,
        maximum=entry.maximum,
        disabled=entry.disabled,
    )


def _string(entry: StringFieldDescriptor, resolver: Resolver | None) -> StringField:
    return StringField(
        argument=entry.argument,
        index=entry.index,
        default_value=entry.default_value,
        label=_text(entry.label, resolver),
        description=_text(entry.description, resolver),
        placeholder=_text(entry.placeholder, resolver),
        disabled=entry.disabled,
    )


def _select(entry: SelectFieldDescriptor, resolver: Resolver | None) -> SelectField:
    options = tuple(
        Option(
            value=item.value,
            description=_text(item.description, resolver),
            selected=item.selected,
            disabled=item.disabled,
        )
        for item in entry.items
    )
    return SelectField(
        argument=entry.argument,
        index=entry.index,
        label=_text(entry.label, resolver),
        description=_text(entry.description, resolver),
        multiple_options=entry.multiple_options,
        options=options,
        disabled=entry.disabled,
    )


def build_model(description: DescriptionResponse | None, resolver: Resolver | None = None) -> Model | None:
    """构建配置模型。

    参数:
    - description: 已缓存的描述文档；尚未初始化时为 None。
    - resolver: 可选的本地化解析函数，绑定到每个文本字段，读取时才生效。
    返回:
    - 描述文档或其字段模型缺失时返回 None；零字段时返回空 Model。
    """
    if description is None or description.model is None:
        return None
    schema = description.model

    entries: list[Entry] = []
    # 分组遍历顺序固定，sorted 为稳定排序，index 相同的条目保持此处的收集顺序。
    for entry in schema.booleans or ():
        entries.append(_boolean(entry, resolver))
    for entry in schema.decimals or ():
        entries.append(_decimal(entry, resolver))
    for entry in schema.integers or ():
        entries.append(_integer(entry, resolver))
    for entry in schema.strings or ():
        entries.append(_string(entry, resolver))
    for entry in schema.selects or ():
        entries.append(_select(entry, resolver))

    return Model(entries=tuple(sorted(entries, key=lambda item: item.index)))
