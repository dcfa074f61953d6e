"""领域枚举定义：统一服务提供者类型、生命周期状态、前提状态与执行终态取值。"""

from __future__ import annotations

from enum import Enum


class ProviderType(str, Enum):
    """Calamari 微服务提供的处理器类型。"""
    evaluation = "evaluation"
    recognition = "recognition"
    training = "training"


class ProviderState(str, Enum):
    """服务提供者生命周期状态枚举。"""
    uninitialized = "uninitialized"
    initialized = "initialized"
    started = "started"
    failed = "failed"


class PremiseState(str, Enum):
    """作业调度前提状态枚举。"""
    ready = "ready"
    block = "block"


class ProcessorState(str, Enum):
    """处理器执行终态枚举。"""
    completed = "completed"
    canceled = "canceled"
    interrupted = "interrupted"


class FieldKind(str, Enum):
    """配置模型字段种类枚举，顺序即描述文档中分组的遍历顺序。"""
    boolean = "boolean"
    decimal = "decimal"
    integer = "integer"
    string = "string"
    select = "select"
