from __future__ import annotations

"""Synthetic CPU-bound workload.

A task iterates a three-member float sequence where each new member is
`t0 + t1 - t2`, folded back into [-1, 1] by taking its reciprocal when it
escapes. The arithmetic is irrelevant to the measurements; what matters is
that the time spent grows linearly with the number of cycles.
"""

import logging
import math
import os

import numpy as np

from concurrencylab.clock import elapsed_ms, now_ms
from concurrencylab.types import TaskRecord

logger = logging.getLogger(__name__)

Triplet = tuple[float, float, float]

CONVERGENCE_TOLERANCE = 1e-14


def _splitmix64(x: int) -> int:
    x = (x + 0x9E3779B97F4A7C15) & 0xFFFFFFFFFFFFFFFF
    z = x
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & 0xFFFFFFFFFFFFFFFF
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & 0xFFFFFFFFFFFFFFFF
    return z ^ (z >> 31)


def seed_for_task(base_seed: int, task_idx: int) -> int:
    return _splitmix64(
        (base_seed & 0xFFFFFFFFFFFFFFFF) ^ (task_idx & 0xFFFFFFFFFFFFFFFF)
    )


def random_triplet(seed: int | None = None) -> Triplet:
    a, b, c = np.random.default_rng(seed).random(3)
    return float(a), float(b), float(c)


def next_triplet(triplet: Triplet) -> Triplet:
    applicant = triplet[0] + triplet[1] - triplet[2]
    if abs(applicant) <= 1.0:
        return triplet[1], triplet[2], applicant
    return triplet[1], triplet[2], 1.0 / applicant


def is_convergent(triplet: Triplet, following: Triplet) -> bool:
    return all(
        math.isclose(a, b, rel_tol=0.0, abs_tol=CONVERGENCE_TOLERANCE)
        for a, b in zip(triplet, following)
    )


def iterate(initial_triplet: Triplet, n_cycles: int) -> float:
    triplet = initial_triplet
    converged = False

    for step in range(n_cycles):
        following = next_triplet(triplet)

        if not converged and is_convergent(triplet, following):
            logger.debug(
                "sequence converged: %f, %f, %f give %f since step %d",
                *initial_triplet,
                triplet[2],
                step,
            )
            converged = True

        triplet = following

    return triplet[2]


def standard_task(n_cycles: int, seed: int | None = None) -> TaskRecord:
    """Burn CPU for `n_cycles` steps and report when and how long it ran.

    Module-level so process pools can pickle it.
    """

    start = now_ms()
    iterate(random_triplet(seed), n_cycles)
    return TaskRecord(start_ms=start, duration_ms=elapsed_ms(start))


def count_cpus() -> int:
    return os.cpu_count() or 1


def count_cycles_per_sec(*, min_duration_ms: int = 1000) -> int:
    duration = 0
    n_cycles = 1

    while duration < min_duration_ms or duration == 0:
        n_cycles *= 10
        start = now_ms()
        iterate(random_triplet(), n_cycles)
        duration = elapsed_ms(start)

    return 1000 * n_cycles // duration
