"""执行回调契约：消息、进度、取消查询与完成回调，以及外部进程输出到消息的映射。"""

from __future__ import annotations

from typing import Protocol

from calamari_spi.domain.enums import ProcessorState


class Message(Protocol):
    """消息回调，接收去除首尾空白后的非空文本。"""

    def update(self, content: str) -> None: ...


class Progress(Protocol):
    """进度回调；取值范围由调用方约定，本层不校验。"""

    def update(self, value: float) -> None: ...


class ProcessorRunningState(Protocol):
    """运行状态查询；执行循环在每个处理步骤之间轮询，返回 True 时应尽快停止。"""

    def is_canceled(self) -> bool: ...


class ProcessorExecution(Protocol):
    """完成回调，每个作业只调用一次并返回执行终态。"""

    def complete(self) -> ProcessorState: ...


class SystemProcess(Protocol):
    """外部进程输出的只读视图。"""

    @property
    def standard_output(self) -> str: ...

    @property
    def standard_error(self) -> str: ...


def update_processor_messages(
    process: SystemProcess | None,
    standard_output: Message,
    standard_error: Message,
) -> None:
    """将进程的标准输出与标准错误分别转发给对应消息回调，空白内容不转发。"""
    if process is None:
        return

    message = process.standard_output or ""
    if message.strip():
        standard_output.update(message.strip())

    message = process.standard_error or ""
    if message.strip():
        standard_error.update(message.strip())
