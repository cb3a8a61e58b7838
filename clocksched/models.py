"""Core data structures for clock-driven scheduling.

This module defines:
    Job          -- immutable schedulable unit (id, duration, release, deadline).
    Schedule     -- start time per job plus per-job rows for reporting.
    SearchResult -- outcome of a search (scheduled / infeasible) with statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Iterable, Optional

JobId = Hashable


class InvalidJob(ValueError):
    """A job (or job set) whose own bounds are self-contradictory."""


@dataclass(frozen=True)
class Job:
    """Single job of a periodic task.

    Attributes:
        id: Unique identifier, also the ordering key for deterministic search.
        duration: Execution time (> 0).
        release: Earliest time the job may start.
        deadline: Time by which the job must have completed.
    """

    id: JobId
    duration: int
    release: int
    deadline: int

    def __post_init__(self) -> None:
        for name in ("duration", "release", "deadline"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidJob(f"Job {self.id}: {name} must be an integer, got {value!r}")
        if self.duration <= 0:
            raise InvalidJob(f"Job {self.id}: duration must be positive, got {self.duration}")
        if self.release + self.duration > self.deadline:
            raise InvalidJob(
                f"Job {self.id}: release {self.release} + duration {self.duration} "
                f"exceeds deadline {self.deadline}"
            )

    @property
    def latest_start(self) -> int:
        return self.deadline - self.duration

    @property
    def slack(self) -> int:
        return self.latest_start - self.release


def validate_jobs(jobs: Iterable[Job]) -> tuple[Job, ...]:
    """Validate a job set and return it sorted by job identity.

    Individual jobs are already validated on construction; this checks the
    set-level properties.

    Raises:
        InvalidJob: On a missing id, duplicate ids or ids that cannot be
            ordered against each other.
    """
    job_list = list(jobs)
    seen: set = set()
    for job in job_list:
        if job.id is None or job.id == "":
            raise InvalidJob("Job id must not be empty")
        if job.id in seen:
            raise InvalidJob(f"Duplicate job id: {job.id}")
        seen.add(job.id)
    try:
        return tuple(sorted(job_list, key=lambda j: j.id))
    except TypeError as e:
        raise InvalidJob(f"Job ids are not mutually comparable: {e}") from e


@dataclass(frozen=True)
class ScheduledJobRow:
    """Single scheduled job with timing and identification data."""

    job: JobId
    start: int
    end: int
    release: int
    deadline: int


@dataclass(frozen=True)
class Schedule:
    """Full single-processor schedule.

    Fields:
        rows: One row per job, ordered by job identity.
    """

    rows: tuple[ScheduledJobRow, ...]

    @classmethod
    def from_start_times(cls, jobs: Iterable[Job], starts: dict[JobId, int]) -> "Schedule":
        rows = tuple(
            ScheduledJobRow(
                job=job.id,
                start=starts[job.id],
                end=starts[job.id] + job.duration,
                release=job.release,
                deadline=job.deadline,
            )
            for job in jobs
        )
        return cls(rows=rows)

    @property
    def start_times(self) -> dict[JobId, int]:
        return {row.job: row.start for row in self.rows}

    @property
    def makespan(self) -> int:
        return max((row.end for row in self.rows), default=0)

    def __getitem__(self, job_id: JobId) -> int:
        for row in self.rows:
            if row.job == job_id:
                return row.start
        raise KeyError(job_id)

    def __len__(self) -> int:
        return len(self.rows)


class SearchStatus(str, Enum):
    SCHEDULED = "scheduled"
    INFEASIBLE = "infeasible"


@dataclass
class SearchResult:
    """Outcome of one search run.

    ``schedule`` is set only for ``SearchStatus.SCHEDULED``; no partial
    schedule is ever reported for an infeasible job set.
    """

    status: SearchStatus
    schedule: Optional[Schedule] = None
    nodes: int = 0
    backtracks: int = 0
    elapsed_ms: float = 0.0

    @property
    def feasible(self) -> bool:
        return self.status is SearchStatus.SCHEDULED
