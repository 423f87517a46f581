from __future__ import annotations

import math
import threading
from collections.abc import Iterable, Iterator

from concurrencylab.errors import EmptyObservationError, ZeroSerialDurationError
from concurrencylab.types import TaskRecord


class Observation:
    """Task records of one concurrently run set of tasks.

    Records may be registered from several worker threads at once; the
    container is guarded by a lock. Statistics are true min/max/sum over the
    record set and do not depend on insertion order.
    """

    def __init__(self, records: Iterable[TaskRecord] = ()) -> None:
        self._lock = threading.Lock()
        self._tasks: list[TaskRecord] = list(records)
        self._concurrency_profit: float | None = None

    def register_task(self, record: TaskRecord) -> None:
        with self._lock:
            self._tasks.append(record)

    @property
    def tasks(self) -> tuple[TaskRecord, ...]:
        with self._lock:
            return tuple(self._tasks)

    def __iter__(self) -> Iterator[TaskRecord]:
        return iter(self.tasks)

    def __len__(self) -> int:
        return self.count_tasks()

    def count_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)

    def _require_tasks(self) -> tuple[TaskRecord, ...]:
        tasks = self.tasks
        if not tasks:
            raise EmptyObservationError("observation has no task records")
        return tasks

    def earliest_start(self) -> int:
        return min(t.start_ms for t in self._require_tasks())

    def latest_finish(self) -> int:
        return max(t.finish_ms for t in self._require_tasks())

    def normalize(self) -> None:
        """Rewrite every start relative to the earliest start.

        A second call is a no-op because the earliest start is already 0.
        """

        earliest_start = self.earliest_start()
        with self._lock:
            for task in self._tasks:
                task.shift_start(earliest_start)

    def total_duration(self) -> int:
        return self.latest_finish() - self.earliest_start()

    def sum_duration(self) -> int:
        return sum(t.duration_ms for t in self.tasks)

    def mean_task_duration(self) -> float:
        n = self.count_tasks()
        if n == 0:
            raise EmptyObservationError("mean task duration of an empty observation")
        return self.sum_duration() / n

    def std_deviation(self) -> float:
        """Population standard deviation of task durations."""

        tasks = self._require_tasks()
        mean = self.mean_task_duration()
        dispersion = sum((t.duration_ms - mean) ** 2 for t in tasks)
        return math.sqrt(dispersion / len(tasks))

    @property
    def concurrency_profit(self) -> float | None:
        return self._concurrency_profit

    def calc_concurrency_profit(self, task_duration_min_ms: int) -> float:
        serial_duration = task_duration_min_ms * len(self._require_tasks())
        if serial_duration == 0:
            raise ZeroSerialDurationError(
                f"serial duration is 0 (baseline {task_duration_min_ms} ms, "
                f"{self.count_tasks()} tasks)"
            )
        self._concurrency_profit = 1.0 - self.total_duration() / serial_duration
        return self._concurrency_profit
