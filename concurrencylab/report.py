from __future__ import annotations

import logging

from concurrencylab.errors import InvalidBaselineError, NoBaselineError
from concurrencylab.observation import Observation

logger = logging.getLogger(__name__)


class Report:
    """Observations of one measurement run, in registration order.

    Observation 0 is the calibration baseline: a single task run on its own.
    Every later Observation is scored against it when registered.
    """

    def __init__(self, *, strict_baseline: bool = True) -> None:
        self._observations: list[Observation] = []
        self._strict_baseline = strict_baseline

    @property
    def observations(self) -> tuple[Observation, ...]:
        return tuple(self._observations)

    def count_observations(self) -> int:
        return len(self._observations)

    def observation(self, index: int) -> Observation:
        return self._observations[index]

    def task_duration_min(self) -> int:
        if not self._observations:
            raise NoBaselineError("no calibration observation registered yet")
        return self._observations[0].total_duration()

    def register_observation(self, obs: Observation) -> int:
        """Normalize, score and append `obs`; return its index.

        The Report is left unchanged if any step fails.
        """

        obs.normalize()

        if self._observations:
            obs.calc_concurrency_profit(self.task_duration_min())
        elif obs.count_tasks() != 1:
            msg = (
                "calibration observation must hold exactly 1 task "
                f"(got {obs.count_tasks()})"
            )
            if self._strict_baseline:
                raise InvalidBaselineError(msg)
            logger.warning("%s; accepting it as baseline anyway", msg)

        self._observations.append(obs)
        index = len(self._observations) - 1
        logger.info(
            "observation %d registered: tasks=%d total=%dms profit=%s",
            index,
            obs.count_tasks(),
            obs.total_duration(),
            obs.concurrency_profit,
        )
        return index
