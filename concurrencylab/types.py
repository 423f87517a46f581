from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TaskRecord:
    """Timing of one completed task, in milliseconds.

    `start_ms` is an absolute clock reading until the owning Observation
    normalizes it to the batch's earliest start. That rewrite, done through
    `shift_start`, is the only mutation a record ever sees.
    """

    start_ms: int
    duration_ms: int

    @property
    def finish_ms(self) -> int:
        return self.start_ms + self.duration_ms

    def shift_start(self, offset_ms: int) -> None:
        self.start_ms -= offset_ms


@dataclass(frozen=True)
class SysParams:
    cpus: int
    cycles_per_sec: int
