"""
Multi-repository fan-out.

MultiCDRClient.query() starts one task per repository right away and hands
back a QueryAggregation. Joining is explicit:

    rows = await multi.query(aql).all().concat()

The join is fail-fast: the first failure is raised and the remaining tasks
are left to finish on their own. Nothing is cancelled, not even when the
caller cancels or times out concat(); late results are discarded.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable, Iterator, List, Sequence, Tuple

from .cdr_client import CDRClient

logger = logging.getLogger("cdr-client.multi")


class ResultFormatter:
    """Exposes the joined per-repository results."""

    def __init__(
        self,
        tasks: Sequence[asyncio.Task],
        on_abandon: Callable[[], None]
    ):
        self._tasks = tuple(tasks)
        self._on_abandon = on_abandon

    async def concat(self) -> List[Any]:
        """
        Wait for every repository and return the results.

        RETURNS:
            One entry per repository, in client order. Entries are not
            merged, flattened or deduplicated.

        RAISES:
            The first exception raised by any repository query.
            Cancelling this coroutine leaves the queries running.
        """
        # Shielded so cancellation of the join stops at the join
        pending = asyncio.gather(*(asyncio.shield(task) for task in self._tasks))
        try:
            results = await pending
        except (Exception, asyncio.CancelledError):
            self._on_abandon()
            raise
        return list(results)


class QueryAggregation:
    """Pending per-repository results, in client order."""

    def __init__(self, tasks: Sequence[asyncio.Task]):
        self._tasks: Tuple[asyncio.Task, ...] = tuple(tasks)
        self._abandoned = False
        for task in self._tasks:
            task.add_done_callback(self._on_task_done)

    @property
    def tasks(self) -> Tuple[asyncio.Task, ...]:
        return self._tasks

    def _abandon(self) -> None:
        self._abandoned = True

    def _on_task_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        # Retrieving the exception keeps asyncio from reporting
        # "Task exception was never retrieved" for discarded failures.
        exc = task.exception()
        if not self._abandoned:
            return
        if exc is not None:
            logger.debug(
                f"Discarding late failure after aborted join: "
                f"{type(exc).__name__}: {exc}"
            )
        else:
            logger.debug("Discarding late result after aborted join")

    def all(self) -> ResultFormatter:
        """
        Join every pending result.

        Nothing is awaited until concat() runs. The join fails with the
        first exception raised by any task.
        """
        return ResultFormatter(self._tasks, self._abandon)


class MultiCDRClient:
    """Fans one AQL query out to an ordered list of CDRClient instances."""

    def __init__(self, clients: Iterable[CDRClient]):
        self._clients: Tuple[CDRClient, ...] = tuple(clients)

    @property
    def clients(self) -> Tuple[CDRClient, ...]:
        return self._clients

    def __len__(self) -> int:
        return len(self._clients)

    def __iter__(self) -> Iterator[CDRClient]:
        return iter(self._clients)

    def query(self, aql: str) -> QueryAggregation:
        """
        Dispatch aql to every repository without waiting.

        ARGS:
            aql: The query text, passed unchanged to each client

        RETURNS:
            QueryAggregation over one task per client

        RAISES:
            RuntimeError: no event loop is running
        """
        loop = asyncio.get_running_loop()
        logger.debug(f"Dispatching query to {len(self._clients)} repositories")

        tasks = [loop.create_task(client.query(aql)) for client in self._clients]
        return QueryAggregation(tasks)

    def __repr__(self) -> str:
        return f"MultiCDRClient({list(self._clients)!r})"
