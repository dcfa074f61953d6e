"""领域数据结构定义：本地化文本、调度前提、端点标识与配置模型条目等核心值对象。"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import ClassVar, Union

from calamari_spi.domain.enums import FieldKind, PremiseState

Resolver = Callable[[str, str | None], str]


@dataclass(frozen=True, slots=True)
class LocalizedText:
    """延迟本地化文本：保存原始文本，读取时按 locale 解析。"""
    text: str | None
    resolver: Resolver | None = None

    def resolve(self, locale: str | None = None) -> str | None:
        if self.text is None or self.resolver is None:
            return self.text
        return self.resolver(self.text, locale)

    def __call__(self, locale: str | None = None) -> str | None:
        return self.resolve(locale)


@dataclass(frozen=True, slots=True)
class Premise:
    """作业调度前提：ready 表示无限制，block 需携带可本地化的原因。"""
    state: PremiseState = PremiseState.ready
    message: LocalizedText | None = None

    @classmethod
    def ready(cls) -> Premise:
        return cls()

    @classmethod
    def block(cls, message: LocalizedText) -> Premise:
        return cls(state=PremiseState.block, message=message)

    @property
    def is_ready(self) -> bool:
        return self.state == PremiseState.ready


@dataclass(frozen=True, slots=True)
class Endpoint:
    """解析后的微服务端点标识。"""
    host_id: str
    protocol: str
    address: str

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.address}"


@dataclass(frozen=True, slots=True, kw_only=True)
class BaseField:
    """配置模型条目公共部分。"""
    kind: ClassVar[FieldKind]

    argument: str
    index: int
    label: LocalizedText
    description: LocalizedText
    disabled: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class BooleanField(BaseField):
    kind: ClassVar[FieldKind] = FieldKind.boolean

    default_value: bool | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DecimalField(BaseField):
    kind: ClassVar[FieldKind] = FieldKind.decimal

    default_value: float | None = None
    placeholder: LocalizedText = LocalizedText(None)
    step: float | None = None
    minimum: float | None = None
    maximum: float | None = None
    # 宿主模型中的单位槽位，本适配器不填充。
    unit: LocalizedText | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class IntegerField(BaseField):
    kind: ClassVar[FieldKind] = FieldKind.integer

    default_value: int | None = None
    placeholder: LocalizedText = LocalizedText(None)
    step: int | None = None
    minimum: int | None = None
    maximum: int | None = None
    unit: LocalizedText | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class StringField(BaseField):
    kind: ClassVar[FieldKind] = FieldKind.string

    default_value: str | None = None
    placeholder: LocalizedText = LocalizedText(None)


@dataclass(frozen=True, slots=True)
class Option:
    """选择字段的单个选项。"""
    value: str
    description: LocalizedText
    selected: bool = False
    disabled: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class SelectField(BaseField):
    kind: ClassVar[FieldKind] = FieldKind.select

    multiple_options: bool = False
    options: tuple[Option, ...] = ()


Entry = Union[BooleanField, DecimalField, IntegerField, StringField, SelectField]


@dataclass(frozen=True, slots=True)
class Model:
    """按 index 排序后的配置模型。"""
    entries: tuple[Entry, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def arguments(self) -> list[str]:
        return [entry.argument for entry in self.entries]


@dataclass(slots=True)
class ProviderDescriptor:
    """服务提供者元信息描述对象，用于接口返回与展示。"""
    provider: str
    type: str
    name: str
    description: str | None
    version: float
    index: int
    state: str
    categories: list[str] | None
    steps: list[str] | None
    timeout_active_processor: int
