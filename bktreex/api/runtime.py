from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Sequence, Tuple

from bktreex import config as bx_config
from bktreex.runtime.model import RuntimeModel

_ATTR_TO_PATH: Dict[str, Tuple[str, ...]] = {
    "metric": ("metric",),
    "traversal": ("traversal",),
    "diagnostics": ("diagnostics", "enabled"),
    "log_level": ("diagnostics", "log_level"),
}


def _set_nested(payload: Dict[str, Any], path: Sequence[str], value: Any) -> None:
    if not path:
        raise ValueError("Field path cannot be empty")
    target: Dict[str, Any] = payload
    for key in path[:-1]:
        next_value = target.get(key)
        if not isinstance(next_value, dict):
            next_value = {}
            target[key] = next_value
        target = next_value
    target[path[-1]] = value


@dataclass(frozen=True)
class Runtime:
    """Declarative runtime configuration that can activate a bktreex context.

    Unset fields fall back to the environment (``BKTREEX_*`` variables).
    """

    metric: str | None = None
    traversal: str | None = None
    diagnostics: bool | None = None
    log_level: str | None = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_model(self, base: RuntimeModel | None = None) -> RuntimeModel:
        base_model = base or RuntimeModel.from_env()
        payload = base_model.model_dump()
        for attr, path in _ATTR_TO_PATH.items():
            value = getattr(self, attr)
            if value is None:
                continue
            _set_nested(payload, path, value)
        for key, value in self.extra.items():
            _set_nested(payload, tuple(part for part in key.split(".") if part), value)
        return RuntimeModel(**payload)

    def to_config(self, base: bx_config.RuntimeConfig | None = None) -> bx_config.RuntimeConfig:
        base_model = (
            RuntimeModel.from_env()
            if base is None
            else RuntimeModel.from_legacy_config(base)
        )
        return self.to_model(base=base_model).to_runtime_config()

    def activate(self) -> bx_config.RuntimeContext:
        """Install this runtime as the active global context and return it."""

        return bx_config.configure_runtime(self.to_config())

    def describe(self) -> Dict[str, Any]:
        config = self.to_config()
        return {
            "metric": config.metric,
            "traversal": config.traversal,
            "enable_diagnostics": config.enable_diagnostics,
            "log_level": config.log_level,
        }

    def with_updates(self, **kwargs: Any) -> "Runtime":
        return replace(self, **kwargs)

    @classmethod
    def from_config(cls, config: bx_config.RuntimeConfig) -> "Runtime":
        return cls(
            metric=config.metric,
            traversal=config.traversal,
            diagnostics=config.enable_diagnostics,
            log_level=config.log_level,
        )

    @classmethod
    def from_active(cls) -> "Runtime":
        active = bx_config.current_runtime_context()
        if active is not None:
            return cls.from_config(active.config)
        return cls.from_config(bx_config.RuntimeConfig.from_env())


__all__ = ["Runtime"]
