"""Depth-first search with no-overlap propagation.

Each node is propagated to a fixed point. A wiped-out node backtracks to the
most recent pending alternative; a node where every pair of jobs is ordered
is a solution; otherwise the search branches on the order of one unresolved
pair. The first solution found is returned.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from clocksched.domains import DomainSnapshot, DomainStore
from clocksched.models import Job, JobId, Schedule, SearchResult, SearchStatus, validate_jobs
from clocksched.propagation import propagate_no_overlap, unresolved_pairs
from clocksched.validation import check_schedule

logger = logging.getLogger("clocksched.search")

Decision = tuple[JobId, JobId]  # (before, after)


@dataclass
class SearchState:
    """Counters shared by the search loop."""

    nodes: int = 0
    backtracks: int = 0
    depth: int = 0
    start_time: float = 0.0

    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.start_time) * 1000.0


def select_branch(store: DomainStore) -> Optional[tuple[Decision, Decision]]:
    """Choose the next ordering decision.

    Picks the lowest-identity non-fixed job that is unordered against some
    other job, and pairs it with the lowest-identity such partner. The
    decision whose first job has the smaller earliest start is tried first
    (ties: identity order).

    Returns:
        ``(first, second)`` decisions, or None when every pair is ordered.
    """
    open_pairs = unresolved_pairs(store)
    if not open_pairs:
        return None
    partners: dict[JobId, list[JobId]] = {}
    for a, b in open_pairs:
        partners.setdefault(a, []).append(b)
        partners.setdefault(b, []).append(a)
    job = next(
        (j for j in store.order if j in partners and not store.is_fixed(j)),
        open_pairs[0][0],
    )
    other = min(partners[job])
    job_first = (job, other)
    other_first = (other, job)
    if store.earliest_start(other) < store.earliest_start(job) or (
        store.earliest_start(other) == store.earliest_start(job) and other < job
    ):
        return other_first, job_first
    return job_first, other_first


def _pin_to_earliest(store: DomainStore) -> None:
    # With every pair ordered and propagated, earliest starts form a valid schedule.
    for job_id in store.order:
        store.tighten_latest(job_id, store.earliest_start(job_id))


def _trace(trace_file: str | None, state: SearchState, event: str, detail: object = "") -> None:
    if trace_file is None:
        return
    # format: node;depth;event;detail
    with open(trace_file, "a", encoding="utf-8") as tf:
        tf.write(f"{state.nodes};{state.depth};{event};{detail}\n")


def search(
    store: DomainStore,
    trace_file: str | None = None,
) -> tuple[bool, SearchState]:
    """Explore the search tree rooted at the current state of ``store``.

    On success ``store`` is left all-fixed at the solution. On failure its
    content is unspecified.

    Returns:
        ``(found, state)``.
    """
    state = SearchState(start_time=time.perf_counter())
    # Each frame: snapshot taken before the first branch, alternatives left to try.
    stack: list[tuple[DomainSnapshot, list[Decision]]] = []
    state.nodes = 1
    consistent = propagate_no_overlap(store)
    while True:
        if consistent:
            if store.is_all_fixed():
                _trace(trace_file, state, "solution")
                return True, state
            branch = select_branch(store)
            if branch is None:
                _pin_to_earliest(store)
                _trace(trace_file, state, "solution")
                return True, state
            first, second = branch
            stack.append((store.snapshot(), [second]))
            state.depth = len(stack)
            state.nodes += 1
            logger.debug("branch depth=%d %s before %s", state.depth, first[0], first[1])
            _trace(trace_file, state, "branch", f"{first[0]}<{first[1]}")
            store.add_precedence(*first)
            consistent = propagate_no_overlap(store)
            continue

        state.backtracks += 1
        while stack and not stack[-1][1]:
            stack.pop()
        if not stack:
            _trace(trace_file, state, "exhausted")
            return False, state
        snapshot, pending = stack[-1]
        store.restore(snapshot)
        alternative = pending.pop()
        state.depth = len(stack)
        state.nodes += 1
        logger.debug(
            "backtrack depth=%d trying %s before %s", state.depth, alternative[0], alternative[1]
        )
        _trace(trace_file, state, "backtrack", f"{alternative[0]}<{alternative[1]}")
        store.add_precedence(*alternative)
        consistent = propagate_no_overlap(store)


def solve(jobs: Iterable[Job], trace_file: str | None = None) -> SearchResult:
    """Find a non-overlapping start time for every job, or prove none exists.

    Args:
        jobs: Job set; validated before any search starts.
        trace_file: Optional path; one ``node;depth;event;detail`` line is
            appended per search event.

    Returns:
        SearchResult with status ``SCHEDULED`` and the schedule, or status
        ``INFEASIBLE`` without a schedule.

    Raises:
        InvalidJob: If the job set is invalid.
    """
    ordered = validate_jobs(jobs)
    store = DomainStore(ordered)
    logger.info("solve start jobs=%d", len(ordered))
    found, state = search(store, trace_file=trace_file)
    elapsed = state.elapsed_ms()
    if not found:
        logger.info(
            "infeasible nodes=%d backtracks=%d elapsed_ms=%.2f",
            state.nodes,
            state.backtracks,
            elapsed,
        )
        return SearchResult(
            status=SearchStatus.INFEASIBLE,
            nodes=state.nodes,
            backtracks=state.backtracks,
            elapsed_ms=elapsed,
        )
    schedule = Schedule.from_start_times(ordered, store.start_times())
    check_schedule(ordered, schedule)
    logger.info(
        "scheduled makespan=%d nodes=%d backtracks=%d elapsed_ms=%.2f",
        schedule.makespan,
        state.nodes,
        state.backtracks,
        elapsed,
    )
    return SearchResult(
        status=SearchStatus.SCHEDULED,
        schedule=schedule,
        nodes=state.nodes,
        backtracks=state.backtracks,
        elapsed_ms=elapsed,
    )
