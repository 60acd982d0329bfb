"""Timing spans for service calls.

Off by default.  ``paramdex -v`` turns tracing on for the process; every
``@traced`` service method then records a span tree (read, deserialize,
discover, parse ...) and returns it under ``ServiceResult.meta["telemetry"]``
where the verbose renderer prints it.
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

from paramdex.services.result import ServiceResult

_tracing: ContextVar[bool] = ContextVar("paramdex_tracing", default=False)
_active: ContextVar[Span | None] = ContextVar("paramdex_active_span", default=None)

_P = ParamSpec("_P")
_R = TypeVar("_R")


@dataclass
class Span:
    """One timed step; children are nested steps in call order."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    started: int = field(default_factory=time.perf_counter_ns)
    finished: int | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) / 1_000_000

    def end(self) -> None:
        self.finished = time.perf_counter_ns()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready tree: ``name``, ``duration_ms`` and non-empty extras."""
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
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
    """Time a nested step of the current traced call.

    Yields None outside a traced call or when tracing is off.
    """
    parent = get_current_span()
    if parent is None:
        yield None
        return
    child = Span(name)
    parent.children.append(child)
    with _activate(child):
        yield child


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Record a root span around a service method.

    A returned :class:`ServiceResult` gets the span tree merged into its
    ``meta``; exceptions propagate after the span is logged.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _tracing.get():
            return func(*args, **kwargs)

        span = Span(func.__qualname__)
        ok = False
        try:
            with _activate(span):
                result = func(*args, **kwargs)
            ok = True
        finally:
            _log_span(span, ok=ok)

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def _log_span(span: Span, *, ok: bool) -> None:
    structlog.get_logger("paramdex.telemetry").debug(
        "span.complete",
        span_name=span.name,
        duration_ms=round(span.duration_ms, 2),
        steps=[child.name for child in span.children],
        ok=ok,
    )


def enable_telemetry() -> None:
    _tracing.set(True)


def disable_telemetry() -> None:
    _tracing.set(False)


def get_current_span() -> Span | None:
    """The innermost active span, or None when tracing is off."""
    if not _tracing.get():
        return None
    return _active.get()
