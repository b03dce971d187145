from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

_LOGGER = logging.getLogger("bktreex")

_SUPPORTED_TRAVERSALS = {"bfs", "dfs"}
_SUPPORTED_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}
_DEFAULT_METRIC = "levenshtein"
_DEFAULT_TRAVERSAL = "bfs"
_DEFAULT_LOG_LEVEL = "INFO"


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _normalise_traversal(value: str | None) -> str:
    if value is None or value.strip() == "":
        return _DEFAULT_TRAVERSAL
    traversal = value.strip().lower()
    if traversal not in _SUPPORTED_TRAVERSALS:
        raise ValueError(
            f"Unsupported traversal '{traversal}'. Expected one of {sorted(_SUPPORTED_TRAVERSALS)}."
        )
    return traversal


def _normalise_log_level(value: str | None) -> str:
    if value is None or value.strip() == "":
        return _DEFAULT_LOG_LEVEL
    level = value.strip().upper()
    if level not in _SUPPORTED_LOG_LEVELS:
        raise ValueError(
            f"Unsupported log level '{value}'. Expected one of {sorted(_SUPPORTED_LOG_LEVELS)}."
        )
    return level


def _normalise_metric(value: str | None) -> str:
    if value is None:
        return _DEFAULT_METRIC
    return value.strip().lower() or _DEFAULT_METRIC


@dataclass(frozen=True)
class RuntimeConfig:
    metric: str = _DEFAULT_METRIC
    traversal: str = _DEFAULT_TRAVERSAL
    enable_diagnostics: bool = True
    log_level: str = _DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        return cls(
            metric=_normalise_metric(os.getenv("BKTREEX_METRIC")),
            traversal=_normalise_traversal(os.getenv("BKTREEX_TRAVERSAL")),
            enable_diagnostics=_bool_from_env(
                os.getenv("BKTREEX_ENABLE_DIAGNOSTICS"), default=True
            ),
            log_level=_normalise_log_level(os.getenv("BKTREEX_LOG_LEVEL")),
        )


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("bktreex")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)


@dataclass
class RuntimeContext:
    """Holds the active configuration and applies its side effects once."""

    config: RuntimeConfig
    _activated: bool = False

    def activate(self) -> None:
        if self._activated:
            return
        _configure_logging(self.config.log_level)
        _LOGGER.debug(
            "Runtime activated: metric=%s traversal=%s diagnostics=%s",
            self.config.metric,
            self.config.traversal,
            self.config.enable_diagnostics,
        )
        self._activated = True


_CONTEXT_CACHE: Optional[RuntimeContext] = None


def runtime_context() -> RuntimeContext:
    """Return the cached runtime context, constructing it from the environment if needed."""

    global _CONTEXT_CACHE
    if _CONTEXT_CACHE is None:
        context = RuntimeContext(config=RuntimeConfig.from_env())
        context.activate()
        _CONTEXT_CACHE = context
    return _CONTEXT_CACHE


def current_runtime_context() -> RuntimeContext | None:
    return _CONTEXT_CACHE


def runtime_config() -> RuntimeConfig:
    return runtime_context().config


def configure_runtime(config: RuntimeConfig) -> RuntimeContext:
    """Force the active runtime context to use ``config`` instead of env defaults."""

    global _CONTEXT_CACHE
    context = RuntimeContext(config=config)
    context.activate()
    _CONTEXT_CACHE = context
    return context


def reset_runtime_context() -> None:
    """Clear the cached runtime context (used in tests)."""

    global _CONTEXT_CACHE
    _CONTEXT_CACHE = None


def reset_runtime_config_cache() -> None:
    reset_runtime_context()


def describe_runtime() -> Dict[str, Any]:
    """Return a serialisable view of the active runtime configuration."""

    config = runtime_config()
    return {
        "metric": config.metric,
        "traversal": config.traversal,
        "enable_diagnostics": config.enable_diagnostics,
        "log_level": config.log_level,
    }


__all__ = [
    "RuntimeConfig",
    "RuntimeContext",
    "runtime_context",
    "current_runtime_context",
    "runtime_config",
    "configure_runtime",
    "reset_runtime_context",
    "reset_runtime_config_cache",
    "describe_runtime",
]
