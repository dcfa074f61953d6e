"""API 响应数据模型定义，约束服务提供者、配置模型与调度前提等接口返回结构。"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ProviderResponse(BaseModel):
    """服务提供者元数据接口响应模型。"""
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


class OptionItem(BaseModel):
    """选择字段选项响应模型。"""
    value: str
    description: str | None
    selected: bool
    disabled: bool


class EntryItem(BaseModel):
    """配置模型条目响应模型；种类专属字段在其他种类上为空。"""
    kind: str
    argument: str
    index: int
    label: str | None
    description: str | None
    disabled: bool
    default_value: Any = None
    placeholder: str | None = None
    step: float | None = None
    minimum: float | None = None
    maximum: float | None = None
    multiple_options: bool | None = None
    options: list[OptionItem] | None = None


class ModelResponse(BaseModel):
    """配置模型接口响应模型。"""
    provider: str
    entries: list[EntryItem]


class PremiseResponse(BaseModel):
    """调度前提接口响应模型。"""
    provider: str
    state: str
    message: str | None
