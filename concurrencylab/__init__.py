"""ConcurrencyLab: measure the profit of running CPU-bound tasks concurrently."""

__version__ = "1.0.0"
