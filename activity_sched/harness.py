from __future__ import annotations

import logging
import time
from typing import Sequence

from .algorithms import Algorithm
from .models import Activity, SimulationResult

logger = logging.getLogger(__name__)

DEFAULT_TRIALS = 1000


def average_runs(algorithm: Algorithm, activities: Sequence[Activity], trials: int = DEFAULT_TRIALS) -> SimulationResult:
    """
    Run ``algorithm`` ``trials`` times over the same input and average the
    per-run means.

    The returned result's T/E/I are means of each trial's own means, and
    ``execution_time`` is the wall-clock seconds per run. Its activity list
    comes from the first trial, which is only representative because every
    algorithm here is deterministic; a randomized variant would need its own
    per-activity aggregation.
    """
    if trials <= 0:
        raise ValueError(f"trials must be a positive integer, got {trials}")

    snapshot = tuple(activities)

    first = None
    total_turnaround = total_wait = total_ratio = 0.0

    start = time.perf_counter()
    for _ in range(trials):
        result = algorithm.run(snapshot)
        if first is None:
            first = result
        total_turnaround += result.avg_turnaround
        total_wait += result.avg_wait
        total_ratio += result.avg_service_ratio
    elapsed = time.perf_counter() - start

    logger.debug("%s: %d trials in %.6fs", first.algorithm, trials, elapsed)

    return SimulationResult(
        algorithm=first.algorithm,
        quantum=first.quantum,
        activities=list(first.activities),
        avg_turnaround=total_turnaround / trials,
        avg_wait=total_wait / trials,
        avg_service_ratio=total_ratio / trials,
        execution_time=elapsed / trials,
        trials=trials,
    )
