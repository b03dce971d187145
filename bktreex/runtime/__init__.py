"""Runtime configuration for bktreex."""

from .config import (
    RuntimeConfig,
    RuntimeContext,
    configure_runtime,
    current_runtime_context,
    describe_runtime,
    reset_runtime_config_cache,
    reset_runtime_context,
    runtime_config,
    runtime_context,
)
from .model import DiagnosticsModel, RuntimeModel

__all__ = [
    "RuntimeConfig",
    "RuntimeContext",
    "RuntimeModel",
    "DiagnosticsModel",
    "configure_runtime",
    "current_runtime_context",
    "describe_runtime",
    "reset_runtime_config_cache",
    "reset_runtime_context",
    "runtime_config",
    "runtime_context",
]
