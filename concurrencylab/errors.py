from __future__ import annotations


class ObservationError(ValueError):
    pass


class EmptyObservationError(ObservationError):
    pass


class NoBaselineError(ObservationError):
    pass


class InvalidBaselineError(ObservationError):
    pass


class ZeroSerialDurationError(ObservationError):
    pass


class DispatchError(RuntimeError):
    """The dispatcher broke its contract (wrong record count, missing slot)."""
