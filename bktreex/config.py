from __future__ import annotations

from bktreex.runtime.config import (
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

__all__ = [
    "RuntimeConfig",
    "RuntimeContext",
    "configure_runtime",
    "current_runtime_context",
    "describe_runtime",
    "reset_runtime_config_cache",
    "reset_runtime_context",
    "runtime_config",
    "runtime_context",
]
