from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from bktreex.runtime.config import RuntimeConfig


class DiagnosticsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class RuntimeModel(BaseModel):
    """Validated runtime description; converts to and from :class:`RuntimeConfig`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    metric: str = "levenshtein"
    traversal: Literal["bfs", "dfs"] = "bfs"
    diagnostics: DiagnosticsModel = DiagnosticsModel()

    @field_validator("metric", "traversal", mode="before")
    @classmethod
    def _lower(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("metric")
    @classmethod
    def _non_empty_metric(cls, value: str) -> str:
        if not value:
            raise ValueError("metric name cannot be empty")
        return value

    @classmethod
    def from_env(cls) -> "RuntimeModel":
        return cls.from_legacy_config(RuntimeConfig.from_env())

    @classmethod
    def from_legacy_config(cls, config: RuntimeConfig) -> "RuntimeModel":
        return cls(
            metric=config.metric,
            traversal=config.traversal,
            diagnostics=DiagnosticsModel(
                enabled=config.enable_diagnostics,
                log_level=config.log_level,
            ),
        )

    def to_runtime_config(self) -> RuntimeConfig:
        return RuntimeConfig(
            metric=self.metric,
            traversal=self.traversal,
            enable_diagnostics=self.diagnostics.enabled,
            log_level=self.diagnostics.log_level,
        )


__all__ = ["DiagnosticsModel", "RuntimeModel"]
