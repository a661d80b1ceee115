"""Operating-systems exercises: a keyed concurrent queue, a workload driver and threaded counters."""

__version__ = "0.1.0"
__all__ = ["counters", "keyqueue", "workload"]