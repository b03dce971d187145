"""Per-operation resource logging.

Bulk operations wrap their body in :func:`log_operation`, which records wall
time and, when diagnostics are enabled, user CPU time and resident-set growth
of the current process. One INFO record is emitted per operation::

    op=range_query wall_ms=1.204 cpu_user_ms=1.000 rss_delta=0 queries=8 k=2
"""

from __future__ import annotations

import contextlib
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator

import psutil

from bktreex import config as bx_config


@dataclass
class OperationMetrics:
    """Accumulates metadata for one logged operation."""

    name: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, **values: Any) -> None:
        self.metadata.update(values)


@dataclass(frozen=True)
class _ResourceSample:
    wall: float
    cpu_user: float | None
    rss: int | None


def _sample(process: psutil.Process | None) -> _ResourceSample:
    wall = time.perf_counter()
    if process is None:
        return _ResourceSample(wall=wall, cpu_user=None, rss=None)
    return _ResourceSample(
        wall=wall,
        cpu_user=process.cpu_times().user,
        rss=int(process.memory_info().rss),
    )


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


def _render(
    metrics: OperationMetrics,
    start: _ResourceSample,
    end: _ResourceSample,
    *,
    status: str,
) -> str:
    parts = [
        f"op={metrics.name}",
        f"wall_ms={(end.wall - start.wall) * 1e3:.3f}",
    ]
    if start.cpu_user is None or end.cpu_user is None:
        parts.append("cpu_user_ms=NA")
    else:
        parts.append(f"cpu_user_ms={(end.cpu_user - start.cpu_user) * 1e3:.3f}")
    if start.rss is None or end.rss is None:
        parts.append("rss_delta=NA")
    else:
        parts.append(f"rss_delta={end.rss - start.rss}")
    if status != "ok":
        parts.append(f"status={status}")
    parts.extend(f"{key}={_format_value(value)}" for key, value in metrics.metadata.items())
    return " ".join(parts)


@contextlib.contextmanager
def log_operation(logger: logging.Logger, name: str) -> Iterator[OperationMetrics]:
    """Log wall/CPU/RSS usage for the wrapped block under ``op=<name>``."""

    enabled = bx_config.runtime_config().enable_diagnostics
    process = psutil.Process() if enabled else None
    metrics = OperationMetrics(name=name)
    start = _sample(process)
    status = "ok"
    try:
        yield metrics
    except BaseException:
        status = "error"
        raise
    finally:
        end = _sample(process)
        logger.info(_render(metrics, start, end, status=status))


__all__ = ["OperationMetrics", "log_operation"]
