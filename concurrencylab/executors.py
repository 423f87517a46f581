from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Optional, Protocol

from concurrencylab.errors import DispatchError
from concurrencylab.observation import Observation
from concurrencylab.types import TaskRecord
from concurrencylab.workload import seed_for_task, standard_task

logger = logging.getLogger(__name__)

TaskFn = Callable[[int, Optional[int]], TaskRecord]


def count_series(n_tasks: int, series_size: int) -> int:
    if series_size < 1:
        raise ValueError(f"series_size must be >= 1 (got {series_size})")
    return -(-n_tasks // series_size)


class BatchDispatcher(Protocol):
    def run_batch(
        self, task_count: int, n_cycles: int, series_size: int
    ) -> list[TaskRecord]:
        raise NotImplementedError


@dataclass(frozen=True)
class _PoolDispatcher:
    seed: int | None = None
    task_fn: TaskFn = standard_task

    def _make_pool(self, max_workers: int) -> Executor:
        raise NotImplementedError

    def run_batch(
        self, task_count: int, n_cycles: int, series_size: int
    ) -> list[TaskRecord]:
        """Run `task_count` tasks, at most `series_size` at a time.

        Each series is awaited in full before the next one is released.
        Every task owns one pre-allocated slot of the result list.
        """

        n_series = count_series(task_count, series_size)
        slots: list[TaskRecord | None] = [None] * task_count

        with self._make_pool(min(series_size, max(task_count, 1))) as pool:
            for series_idx in range(n_series):
                first = series_idx * series_size
                last = min(first + series_size, task_count)
                logger.debug(
                    "releasing series %d/%d: tasks %d..%d",
                    series_idx + 1,
                    n_series,
                    first + 1,
                    last,
                )
                futures = {
                    task_idx: pool.submit(
                        self.task_fn, n_cycles, self._task_seed(task_idx)
                    )
                    for task_idx in range(first, last)
                }
                wait(futures.values())
                for task_idx, fut in futures.items():
                    slots[task_idx] = fut.result()

        records = [r for r in slots if r is not None]
        if len(records) != task_count:
            raise DispatchError(
                f"expected {task_count} task records, got {len(records)}"
            )
        return records

    def _task_seed(self, task_idx: int) -> int | None:
        if self.seed is None:
            return None
        return seed_for_task(self.seed, task_idx)


@dataclass(frozen=True)
class ThreadPoolDispatcher(_PoolDispatcher):
    def _make_pool(self, max_workers: int) -> Executor:
        return ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="concurrencylab"
        )


@dataclass(frozen=True)
class ProcessPoolDispatcher(_PoolDispatcher):
    def _make_pool(self, max_workers: int) -> Executor:
        return ProcessPoolExecutor(max_workers=max_workers)


EXECUTOR_NAMES = ("thread", "process")


def dispatcher_for_name(name: str, *, seed: int | None = None) -> BatchDispatcher:
    if name == "thread":
        return ThreadPoolDispatcher(seed=seed)
    if name == "process":
        return ProcessPoolDispatcher(seed=seed)
    raise ValueError(f"Unsupported executor: {name!r}")


def observe(
    *,
    n_tasks: int,
    n_cycles: int,
    series_size: int,
    dispatcher: BatchDispatcher,
) -> Observation:
    return Observation(dispatcher.run_batch(n_tasks, n_cycles, series_size))
