"""Timing spans for service calls.

Off by default; each check is a single ContextVar read. ``--verbose`` turns
collection on, after which every :func:`traced` method records a span tree
(``trace_span`` blocks nest under it) and returns its ServiceResult with the
tree under ``meta["telemetry"]``. The dispatcher copies the caller's
context, so spans work the same on worker threads.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from subjectgraph.services.result import ServiceResult

log = structlog.get_logger("subjectgraph.telemetry")

_enabled: ContextVar[bool] = ContextVar("_telemetry_enabled", default=False)
_active: ContextVar[Span | None] = ContextVar("_active_span", default=None)

_P = ParamSpec("_P")
_R = TypeVar("_R")


@dataclass
class Span:
    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None

    @property
    def duration_ms(self) -> float:
        """Elapsed milliseconds, 0.0 while the span is still open."""
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def child(self, name: str) -> Span:
        span = Span(name=name, parent=self)
        self.children.append(span)
        return span

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.children:
            out["children"] = [c.to_dict() for c in self.children]
        return out


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _active.set(span)
    try:
        yield span
    finally:
        span.end()
        _active.reset(token)


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a block as a child of the running traced call.

    Yields None when telemetry is off or no traced call is active, so
    callers guard annotations with ``if span:``.
    """
    parent = get_current_span()
    if parent is None:
        yield None
        return
    with _activate(parent.child(name)) as span:
        yield span


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Record a root span around a service method."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        try:
            with _activate(span):
                result = func(*args, **kwargs)
        except Exception:
            log.debug("span.failed", span_name=span.name, duration_ms=round(span.duration_ms, 2))
            raise

        log.debug(
            "span.complete",
            span_name=span.name,
            duration_ms=round(span.duration_ms, 2),
            children=len(span.children),
        )
        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """The innermost open span, or None when telemetry is off."""
    if not _enabled.get():
        return None
    return _active.get()
