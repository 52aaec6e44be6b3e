"""
Activity scheduling simulator.

Simulates FIFO, LIFO and Round-Robin dispatch over a fixed list of
activities and compares the resulting turnaround, wait and service ratio.
"""

from .algorithms import Algorithm, Fifo, Lifo, RoundRobin
from .harness import average_runs
from .models import Activity, ActivityMetrics, SimulationResult

__all__ = [
    "Activity",
    "ActivityMetrics",
    "Algorithm",
    "Fifo",
    "Lifo",
    "RoundRobin",
    "SimulationResult",
    "average_runs",
    "cli",
]
