from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .metrics import build_activity_metrics, finalize_result
from .models import Activity, ActivityMetrics, ActivityState, SimulationResult

logger = logging.getLogger(__name__)


def _promote_arrivals(activities: Sequence[Activity], states: List[ActivityState], clock: int) -> None:
    for i, activity in enumerate(activities):
        if states[i] is ActivityState.PENDING and activity.arrival_time <= clock:
            states[i] = ActivityState.READY


def _next_arrival(activities: Sequence[Activity], states: List[ActivityState], after: Optional[int] = None) -> int:
    return min(
        a.arrival_time
        for i, a in enumerate(activities)
        if states[i] is ActivityState.PENDING and (after is None or a.arrival_time > after)
    )


def _schedule_list_scan(activities: Sequence[Activity], from_end: bool) -> List[ActivityMetrics]:
    """
    Run every activity to completion, always picking the first ready one
    found by scanning the input order (or the reverse order when
    ``from_end`` is set). The scan restarts after every dispatch.
    """
    n = len(activities)
    states = [ActivityState.PENDING] * n
    scan_order = range(n - 1, -1, -1) if from_end else range(n)

    clock = 0
    completed: List[ActivityMetrics] = []

    while len(completed) < n:
        _promote_arrivals(activities, states, clock)

        idx = next((i for i in scan_order if states[i] is ActivityState.READY), None)
        if idx is None:
            # Nothing ready: jump to the next arrival.
            clock = _next_arrival(activities, states)
            logger.debug("idle until t=%d", clock)
            continue

        activity = activities[idx]
        clock += activity.service_time
        states[idx] = ActivityState.COMPLETED
        completed.append(build_activity_metrics(activity, clock))
        logger.debug("dispatched %s, finished at t=%d", activity.name, clock)

    return completed


def schedule_fifo(activities: Sequence[Activity]) -> SimulationResult:
    """
    First-In First-Out (non-preemptive). Among ready activities the one
    earliest in the input list runs first.
    """
    completed = _schedule_list_scan(activities, from_end=False)
    return finalize_result(SimulationResult(algorithm="FIFO", quantum=None, activities=completed))


def schedule_lifo(activities: Sequence[Activity]) -> SimulationResult:
    """
    Last-In First-Out (non-preemptive). Among ready activities the one
    latest in the input list runs first.
    """
    completed = _schedule_list_scan(activities, from_end=True)
    return finalize_result(SimulationResult(algorithm="LIFO", quantum=None, activities=completed))


def schedule_rr(activities: Sequence[Activity], quantum: int) -> SimulationResult:
    """
    Round Robin with a fixed time quantum.

    A cursor cycles over the input positions. A ready activity gets at most
    ``quantum`` units per visit; visits to activities that have not arrived
    or are finished consume no time. When nothing at all is ready the clock
    jumps to the next arrival.
    """
    if quantum is None or quantum <= 0:
        logger.warning("Round Robin needs a positive quantum, got %r; returning an empty result", quantum)
        return SimulationResult(algorithm="Round Robin", quantum=quantum)

    n = len(activities)
    states = [ActivityState.PENDING] * n
    remaining = [a.service_time for a in activities]

    clock = 0
    cursor = 0
    completed: List[ActivityMetrics] = []

    while len(completed) < n:
        _promote_arrivals(activities, states, clock)

        if states[cursor] is ActivityState.READY and remaining[cursor] > 0:
            activity = activities[cursor]
            run_time = min(remaining[cursor], quantum)
            remaining[cursor] -= run_time
            clock += run_time

            if remaining[cursor] == 0:
                states[cursor] = ActivityState.COMPLETED
                completed.append(build_activity_metrics(activity, clock))
                logger.debug("%s finished at t=%d", activity.name, clock)
        elif ActivityState.READY not in states:
            clock = _next_arrival(activities, states, after=clock)
            logger.debug("idle until t=%d", clock)

        cursor = (cursor + 1) % n

    return finalize_result(SimulationResult(algorithm="Round Robin", quantum=quantum, activities=completed))


class Algorithm(ABC):
    """A scheduling discipline that can be run repeatedly over the same input."""

    name: str = ""

    @abstractmethod
    def run(self, activities: Sequence[Activity]) -> SimulationResult:
        """Schedule ``activities`` and return the completed run."""


class Fifo(Algorithm):
    name = "fifo"

    def run(self, activities: Sequence[Activity]) -> SimulationResult:
        return schedule_fifo(activities)


class Lifo(Algorithm):
    name = "lifo"

    def run(self, activities: Sequence[Activity]) -> SimulationResult:
        return schedule_lifo(activities)


class RoundRobin(Algorithm):
    name = "rr"

    def __init__(self, quantum: int) -> None:
        self.quantum = quantum

    def run(self, activities: Sequence[Activity]) -> SimulationResult:
        return schedule_rr(activities, self.quantum)


# Evaluation order; also the tie-break order when picking the best result.
ALGORITHMS = ("fifo", "lifo", "rr")


def build_algorithm(name: str, quantum: Optional[int] = None) -> Algorithm:
    name = name.lower()
    if name == "fifo":
        return Fifo()
    if name == "lifo":
        return Lifo()
    if name == "rr":
        if quantum is None:
            raise ValueError("Round Robin requires a quantum (use --quantum)")
        return RoundRobin(quantum)

    raise ValueError(f"Unknown algorithm '{name}' (use one of: {', '.join(ALGORITHMS)})")


def build_all(quantum: int) -> List[Algorithm]:
    return [build_algorithm(name, quantum=quantum) for name in ALGORITHMS]
