"""Periodic tasks and their expansion into jobs over one hyperperiod."""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Sequence

from clocksched.models import Job


@dataclass(frozen=True)
class PeriodicTask:
    """Hard real-time periodic task.

    Attributes:
        name: Task label (informational).
        period: Time between successive releases (> 0).
        execution_time: Execution time of every job (> 0).
        deadline: Relative deadline; defaults to the period.
        phase: Release time of the first job (>= 0).
    """

    name: str
    period: int
    execution_time: int
    deadline: Optional[int] = None
    phase: int = 0

    def __post_init__(self) -> None:
        if self.deadline is None:  # implicit deadline
            object.__setattr__(self, "deadline", self.period)
        if self.period <= 0:
            raise ValueError(f"Task {self.name}: period must be positive")
        if self.execution_time <= 0:
            raise ValueError(f"Task {self.name}: execution time must be positive")
        if self.deadline <= 0:
            raise ValueError(f"Task {self.name}: deadline must be positive")
        if self.phase < 0:
            raise ValueError(f"Task {self.name}: phase must be non-negative")

    @property
    def utilization(self) -> Fraction:
        return Fraction(self.execution_time, self.period)


def hyperperiod(tasks: Sequence[PeriodicTask]) -> int:
    """Least common multiple of all task periods (0 for no tasks)."""
    if not tasks:
        return 0
    return math.lcm(*(task.period for task in tasks))


def utilization(tasks: Sequence[PeriodicTask]) -> Fraction:
    return sum((task.utilization for task in tasks), Fraction(0))


def expand_jobs(tasks: Sequence[PeriodicTask], horizon: Optional[int] = None) -> list[Job]:
    """Expand tasks into jobs released in ``[0, horizon)``.

    Job ``k`` (1-based) of task ``i`` (1-based, in the given order) is named
    ``J{i}{k}``, released at ``phase + (k - 1) * period`` with absolute
    deadline ``release + deadline``. When a task or job number has more than
    one digit, every id becomes ``J{i}_{k}`` so ids stay unique.

    Args:
        tasks: Periodic tasks.
        horizon: Scheduling horizon; defaults to the hyperperiod.

    Returns:
        Jobs grouped by task, in release order.

    Raises:
        InvalidJob: If a task's execution time exceeds its relative deadline.
    """
    if horizon is None:
        horizon = hyperperiod(tasks)
    releases = [list(range(task.phase, horizon, task.period)) for task in tasks]
    most_jobs = max((len(r) for r in releases), default=0)
    sep = "" if len(tasks) <= 9 and most_jobs <= 9 else "_"
    jobs: list[Job] = []
    for i, (task, task_releases) in enumerate(zip(tasks, releases), start=1):
        for k, release in enumerate(task_releases, start=1):
            jobs.append(
                Job(
                    id=f"J{i}{sep}{k}",
                    duration=task.execution_time,
                    release=release,
                    deadline=release + task.deadline,
                )
            )
    return jobs
