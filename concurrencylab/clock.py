from __future__ import annotations

# Monotonic millisecond clock shared by workers and the dispatcher.
#
# `time.monotonic_ns` is system-wide on the supported platforms, so readings
# taken in worker processes are comparable with each other.

import time


def now_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def elapsed_ms(initial_moment_ms: int) -> int:
    return now_ms() - initial_moment_ms
