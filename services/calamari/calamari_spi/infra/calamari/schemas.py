"""Calamari 描述文档数据模型：约束 description 接口返回结构，忽略未知字段以兼容远端演进。"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    """远端 JSON 文档公共配置：camelCase 字段、忽略未知字段、解析后只读。"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class FieldDescriptor(_WireModel):
    """字段描述公共部分；argument 与 index 为必需字段。"""
    argument: str
    index: int
    label: str | None = None
    description: str | None = None
    disabled: bool = False


class BooleanFieldDescriptor(FieldDescriptor):
    default_value: bool | None = None


class DecimalFieldDescriptor(FieldDescriptor):
    default_value: float | None = None
    placeholder: str | None = None
    step: float | None = None
    minimum: float | None = None
    maximum: float | None = None


class IntegerFieldDescriptor(FieldDescriptor):
    default_value: int | None = None
    placeholder: str | None = None
    step: int | None = None
    minimum: int | None = None
    maximum: int | None = None


class StringFieldDescriptor(FieldDescriptor):
    default_value: str | None = None
    placeholder: str | None = None


class SelectItem(_WireModel):
    value: str
    description: str | None = None
    selected: bool = False
    disabled: bool = False


class SelectFieldDescriptor(FieldDescriptor):
    multiple_options: bool = False
    items: list[SelectItem] = []


class FieldSchema(_WireModel):
    """按字段种类分组的参数模型，缺失分组视为空。"""
    booleans: list[BooleanFieldDescriptor] | None = None
    decimals: list[DecimalFieldDescriptor] | None = None
    integers: list[IntegerFieldDescriptor] | None = None
    strings: list[StringFieldDescriptor] | None = None
    selects: list[SelectFieldDescriptor] | None = None

    def descriptor_count(self) -> int:
        groups = (self.booleans, self.decimals, self.integers, self.strings, self.selects)
        return sum(len(group) for group in groups if group)


class DescriptionResponse(_WireModel):
    """description 接口响应模型。"""
    description: str | None = None
    categories: list[str] | None = None
    steps: list[str] | None = None
    model: FieldSchema | None = None
