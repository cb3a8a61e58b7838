"""Per-job start-time domains and ordering decisions of a search node.

Domain
    Inclusive pair ``[earliest_start, latest_start]`` of admissible start
    times. Initialised to ``[release, deadline - duration]`` and only ever
    moved inward while a node is explored. ``earliest_start > latest_start``
    means the domain is wiped out.
Precedence
    Pair ``(before, after)`` of job ids: ``before`` completes before ``after``
    starts. Precedences are either deduced by propagation or decided by
    branching; both are rolled back together with the bounds on restore.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from clocksched.models import InvalidJob, Job, JobId


@dataclass(frozen=True)
class DomainSnapshot:
    """Immutable copy of all domains and precedences of a store."""

    earliest: tuple[tuple[JobId, int], ...]
    latest: tuple[tuple[JobId, int], ...]
    precedences: frozenset[tuple[JobId, JobId]]


class DomainStore:
    def __init__(self, jobs: Iterable[Job]):
        self.jobs: dict[JobId, Job] = {}
        self.order: list[JobId] = []
        self._earliest: dict[JobId, int] = {}
        self._latest: dict[JobId, int] = {}
        self._precedences: set[tuple[JobId, JobId]] = set()
        self.revision = 0
        self.initialize(jobs)

    def initialize(self, jobs: Iterable[Job]) -> None:
        """Reset every domain to ``[release, deadline - duration]``.

        Raises:
            InvalidJob: If a domain is empty before any search is attempted.
        """
        self.jobs = {job.id: job for job in jobs}
        self.order = sorted(self.jobs)
        self._earliest = {job_id: job.release for job_id, job in self.jobs.items()}
        self._latest = {job_id: job.latest_start for job_id, job in self.jobs.items()}
        self._precedences = set()
        self.revision = 0
        for job_id in self.order:
            if self.is_wiped_out(job_id):
                raise InvalidJob(f"Job {job_id}: empty start-time domain")

    # -- queries -----------------------------------------------------------

    def earliest_start(self, job_id: JobId) -> int:
        return self._earliest[job_id]

    def latest_start(self, job_id: JobId) -> int:
        return self._latest[job_id]

    def duration(self, job_id: JobId) -> int:
        return self.jobs[job_id].duration

    def is_fixed(self, job_id: JobId) -> bool:
        return self._earliest[job_id] == self._latest[job_id]

    def is_all_fixed(self) -> bool:
        return all(self.is_fixed(job_id) for job_id in self.order)

    def is_wiped_out(self, job_id: JobId) -> bool:
        return self._earliest[job_id] > self._latest[job_id]

    def precedes(self, before: JobId, after: JobId) -> bool:
        return (before, after) in self._precedences

    def is_ordered(self, a: JobId, b: JobId) -> bool:
        return (a, b) in self._precedences or (b, a) in self._precedences

    @property
    def precedences(self) -> frozenset[tuple[JobId, JobId]]:
        return frozenset(self._precedences)

    def start_times(self) -> dict[JobId, int]:
        """Earliest start of every job (the start time once all are fixed)."""
        return {job_id: self._earliest[job_id] for job_id in self.order}

    # -- monotonic updates ---------------------------------------------------

    def tighten_earliest(self, job_id: JobId, value: int) -> bool:
        """Raise the earliest start to ``value`` if that moves it inward.

        Returns:
            True if the domain is wiped out afterwards.
        """
        if value > self._earliest[job_id]:
            self._earliest[job_id] = value
            self.revision += 1
        return self.is_wiped_out(job_id)

    def tighten_latest(self, job_id: JobId, value: int) -> bool:
        """Lower the latest start to ``value`` if that moves it inward.

        Returns:
            True if the domain is wiped out afterwards.
        """
        if value < self._latest[job_id]:
            self._latest[job_id] = value
            self.revision += 1
        return self.is_wiped_out(job_id)

    def add_precedence(self, before: JobId, after: JobId) -> None:
        if before == after:
            raise ValueError(f"Job {before} cannot precede itself")
        if (before, after) not in self._precedences:
            self._precedences.add((before, after))
            self.revision += 1

    # -- rollback ------------------------------------------------------------

    def snapshot(self) -> DomainSnapshot:
        return DomainSnapshot(
            earliest=tuple((job_id, self._earliest[job_id]) for job_id in self.order),
            latest=tuple((job_id, self._latest[job_id]) for job_id in self.order),
            precedences=frozenset(self._precedences),
        )

    def restore(self, snapshot: DomainSnapshot) -> None:
        self._earliest = dict(snapshot.earliest)
        self._latest = dict(snapshot.latest)
        self._precedences = set(snapshot.precedences)
        self.revision += 1
