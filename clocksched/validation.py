"""Postcondition checks for produced schedules."""

from __future__ import annotations

from typing import Iterable

from clocksched.models import Job, Schedule


def check_job_windows(jobs: Iterable[Job], schedule: Schedule) -> bool:
    """Ensure every job is scheduled exactly once inside its window.

    Raises:
        AssertionError: On a missing or extra job, a start before release or
            a completion after the deadline.
    """
    by_id = {job.id: job for job in jobs}
    starts = schedule.start_times
    if len(starts) != len(schedule.rows) or set(starts) != set(by_id):
        raise AssertionError(
            f"Schedule covers {sorted(starts)} but job set is {sorted(by_id)}"
        )
    for job_id, start in starts.items():
        job = by_id[job_id]
        if start < job.release:
            raise AssertionError(f"Job {job_id} starts at {start} before release {job.release}")
        if start + job.duration > job.deadline:
            raise AssertionError(
                f"Job {job_id} ends at {start + job.duration} after deadline {job.deadline}"
            )
    return True


def check_no_overlap(schedule: Schedule) -> bool:
    """Ensure no two jobs overlap on the processor.

    Rows are ordered by start and each must start no earlier than the
    previous one ended.

    Raises:
        AssertionError: On the first detected overlap.
    """
    rows = sorted(schedule.rows, key=lambda r: (r.start, r.end))
    prev = None
    for r in rows:
        if prev is not None and r.start < prev.end:
            raise AssertionError(
                f"Overlap between {prev.job} [{prev.start}, {prev.end}) "
                f"and {r.job} [{r.start}, {r.end})"
            )
        prev = r
    return True


def check_schedule(jobs: Iterable[Job], schedule: Schedule) -> bool:
    jobs = list(jobs)
    return check_job_windows(jobs, schedule) and check_no_overlap(schedule)
