from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class Activity:
    name: str
    arrival_time: int
    service_time: int


class ActivityState(Enum):
    """
    Transient scheduling state of one activity during a single run.
    """

    PENDING = "pending"
    READY = "ready"
    COMPLETED = "completed"


@dataclass
class ActivityMetrics:
    name: str
    arrival_time: int
    service_time: int
    completion_time: int
    turnaround_time: int
    wait_time: int
    service_ratio: float


@dataclass
class SimulationResult:
    algorithm: str
    quantum: Optional[int]
    activities: List[ActivityMetrics] = field(default_factory=list)
    avg_turnaround: float = 0.0
    avg_wait: float = 0.0
    avg_service_ratio: float = 0.0
    execution_time: float = 0.0
    trials: int = 1
