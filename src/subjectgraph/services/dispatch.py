"""QueryDispatcher — run a graph query off the calling thread.

Queries are pure, so the only contract is isolation: the edge list is
frozen into a tuple before submission, each call runs in a copy of the
caller's ``contextvars`` context (so telemetry and log bindings follow it),
and a submitted query always runs to completion. There is no cancellation
and no partial result.
"""

from __future__ import annotations

import asyncio
import contextvars
import logging
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, ParamSpec, TypeVar

from subjectgraph.domain.types import Edge
from subjectgraph.graph.index import GraphIndex

if TYPE_CHECKING:
    from subjectgraph.domain.types import VertexId

logger = logging.getLogger(__name__)

_P = ParamSpec("_P")
_R = TypeVar("_R")


def freeze_edges(
    edges: Iterable[tuple[VertexId, VertexId]] | GraphIndex,
) -> tuple[Edge, ...] | GraphIndex:
    """Snapshot a mutable edge collection. Indexes are already immutable."""
    if isinstance(edges, GraphIndex | tuple):
        return edges
    return tuple(Edge(s, t) for s, t in edges)


class QueryDispatcher:
    """Thread-pool dispatch for engine and service calls.

    Parameters:
        sync: Run inline on the calling thread (``--sync`` / tests).
        max_workers: ThreadPoolExecutor worker count.
    """

    def __init__(self, *, sync: bool = False, max_workers: int = 2) -> None:
        self._sync = sync
        self._executor: ThreadPoolExecutor | None = (
            None if sync else ThreadPoolExecutor(max_workers=max_workers)
        )

    @property
    def sync(self) -> bool:
        return self._sync

    def submit(self, func: Callable[_P, _R], *args: _P.args, **kwargs: _P.kwargs) -> Future[_R]:
        """Schedule ``func(*args, **kwargs)`` and return its future.

        In sync mode the call runs immediately and the returned future is
        already resolved (or holds the raised exception).
        """
        ctx = contextvars.copy_context()
        if self._executor is None:
            future: Future[_R] = Future()
            try:
                future.set_result(ctx.run(func, *args, **kwargs))
            except Exception as exc:
                future.set_exception(exc)
            return future
        logger.debug("dispatch %s", getattr(func, "__qualname__", func))
        return self._executor.submit(ctx.run, func, *args, **kwargs)

    def submit_query(
        self,
        func: Callable[..., _R],
        vertex: VertexId,
        edges: Iterable[tuple[VertexId, VertexId]] | GraphIndex,
        *args: object,
    ) -> Future[_R]:
        """Submit an engine function of shape ``func(vertex, edges, *args)``."""
        return self.submit(func, vertex, freeze_edges(edges), *args)

    def call(self, func: Callable[_P, _R], *args: _P.args, **kwargs: _P.kwargs) -> _R:
        """Submit and block until the result is ready."""
        return self.submit(func, *args, **kwargs).result()

    async def run(self, func: Callable[_P, _R], *args: _P.args, **kwargs: _P.kwargs) -> _R:
        """Await a dispatched call from asyncio code."""
        return await asyncio.wrap_future(self.submit(func, *args, **kwargs))

    def shutdown(self) -> None:
        """Wait for in-flight queries and stop the workers."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> QueryDispatcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
