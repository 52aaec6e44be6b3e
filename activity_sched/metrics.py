from __future__ import annotations

from typing import Dict, List, Sequence

from .models import Activity, ActivityMetrics, SimulationResult


def build_activity_metrics(activity: Activity, completion_time: int) -> ActivityMetrics:
    """
    Derive turnaround, wait and service ratio for an activity that finished
    at ``completion_time``.
    """
    turnaround_time = completion_time - activity.arrival_time
    wait_time = turnaround_time - activity.service_time
    service_ratio = activity.service_time / turnaround_time

    return ActivityMetrics(
        name=activity.name,
        arrival_time=activity.arrival_time,
        service_time=activity.service_time,
        completion_time=completion_time,
        turnaround_time=turnaround_time,
        wait_time=wait_time,
        service_ratio=service_ratio,
    )


def summarize_activity_metrics(activities: List[ActivityMetrics]) -> Dict[str, float]:
    """
    Return the mean turnaround, wait and service ratio of one run.
    """
    if not activities:
        return {"avg_turnaround": 0.0, "avg_wait": 0.0, "avg_service_ratio": 0.0}

    n = len(activities)
    return {
        "avg_turnaround": sum(a.turnaround_time for a in activities) / n,
        "avg_wait": sum(a.wait_time for a in activities) / n,
        "avg_service_ratio": sum(a.service_ratio for a in activities) / n,
    }


def finalize_result(result: SimulationResult) -> SimulationResult:
    summary = summarize_activity_metrics(result.activities)
    result.avg_turnaround = summary["avg_turnaround"]
    result.avg_wait = summary["avg_wait"]
    result.avg_service_ratio = summary["avg_service_ratio"]
    return result


def select_best(results: Sequence[SimulationResult]) -> SimulationResult:
    """
    Pick the result with the highest mean service ratio. Ties go to the
    result that comes first in ``results``.
    """
    if not results:
        raise ValueError("Cannot select the best of zero results")

    best = results[0]
    for result in results[1:]:
        if result.avg_service_ratio > best.avg_service_ratio:
            best = result
    return best
