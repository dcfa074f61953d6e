"""全局配置加载模块：从环境变量构建运行参数、微服务主机表与服务提供者配置集合。"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """系统运行配置对象，从环境变量读取并提供类型化访问。"""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Calamari Service Provider"
    api_prefix: str = "/api/v1"
    environment: str = "dev"

    # 微服务架构主机表：逻辑 id -> host:port，例如 {"calamari": "worker.local:9000"}。
    msa_hosts: dict[str, str] = Field(default_factory=dict)
    msa_request_timeout_seconds: int = 30

    # 服务提供者配置集合：集合名 -> {key: value}，覆盖本地默认值。
    provider_collections: dict[str, dict[str, str]] = Field(default_factory=dict)

    log_dir: Path = Field(default=Path("./logs"))
    log_level: str = "INFO"
    log_redaction_mode: str = "standard"
    log_max_bytes: int = 10 * 1024 * 1024
    log_backup_count: int = 5


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """构建并缓存 Settings。"""
    return Settings()


@dataclass(frozen=True, slots=True)
class CollectionKey:
    """服务提供者配置集合中的一个键：集合名、键名与本地默认值。"""
    collection: str
    key: str
    default: str


class ProviderConfiguration:
    """服务提供者配置集合视图。

    集合值读取时去除首尾空白；缺失或空白值不被接受，回退到键的默认值。
    """

    def __init__(self, collections: dict[str, dict[str, str]] | None = None) -> None:
        self._collections: dict[str, dict[str, str]] = {}
        for name, values in (collections or {}).items():
            self._collections[name] = {str(key): str(value) for key, value in values.items()}

    @classmethod
    def from_settings(cls, settings: Settings) -> ProviderConfiguration:
        return cls(settings.provider_collections)

    def get_value(self, key: CollectionKey) -> str:
        """返回集合键的生效值。"""
        value = self._collections.get(key.collection, {}).get(key.key)
        if value is None or not value.strip():
            return key.default.strip()
        return value.strip()

    def get_int(self, key: CollectionKey) -> int:
        """按整数读取集合键；无法解析时回退到默认值。"""
        try:
            return int(self.get_value(key))
        except ValueError:
            return int(key.default)
