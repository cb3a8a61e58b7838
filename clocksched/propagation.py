"""Unary-resource (no-overlap) propagation over a DomainStore.

Pairwise ordering deduction for jobs sharing one processor. For every pair
``(A, B)`` the order "A before B" is admissible iff
``earliest_start(A) + duration(A) <= latest_start(B)`` and "B before A" has
not already been decided. A pair with no admissible order wipes the node
out; a pair with exactly one admissible order is recorded as a precedence
and the bounds of both jobs are tightened accordingly:

    earliest_start(B) >= earliest_start(A) + duration(A)
    latest_start(A)   <= latest_start(B)  - duration(A)

Pairs whose order is still open are left untouched; the search resolves
them by branching. Passes repeat until a full pass changes nothing; the
fixed point is then checked for overloaded time windows (more work confined
to a window than the window is long).
"""

from __future__ import annotations

import logging

from clocksched.domains import DomainStore
from clocksched.models import JobId

logger = logging.getLogger("clocksched.propagation")


def order_admissible(store: DomainStore, before: JobId, after: JobId) -> bool:
    """True if ``before`` may still complete before ``after`` starts."""
    if store.precedes(after, before):
        return False
    return store.earliest_start(before) + store.duration(before) <= store.latest_start(after)


def enforce_precedence(store: DomainStore, before: JobId, after: JobId) -> bool:
    """Tighten bounds for a decided precedence.

    Returns:
        False on wipe-out, True otherwise.
    """
    d = store.duration(before)
    if store.tighten_earliest(after, store.earliest_start(before) + d):
        return False
    if store.tighten_latest(before, store.latest_start(after) - d):
        return False
    return True


def propagate_pair(store: DomainStore, a: JobId, b: JobId) -> bool:
    """Apply the pairwise no-overlap deduction to one pair of jobs.

    Returns:
        False if the pair admits no order (node is wiped out).
    """
    if store.precedes(a, b):
        return enforce_precedence(store, a, b)
    if store.precedes(b, a):
        return enforce_precedence(store, b, a)
    a_first = order_admissible(store, a, b)
    b_first = order_admissible(store, b, a)
    if not a_first and not b_first:
        return False
    if a_first and not b_first:
        store.add_precedence(a, b)
        return enforce_precedence(store, a, b)
    if b_first and not a_first:
        store.add_precedence(b, a)
        return enforce_precedence(store, b, a)
    return True


def propagate_no_overlap(store: DomainStore) -> bool:
    """Run pairwise deduction to a fixed point.

    Args:
        store: Domains of the current search node; mutated in place.

    Returns:
        True if the node is consistent at the fixed point, False on wipe-out.
    """
    order = store.order
    for job_id in order:
        if store.is_wiped_out(job_id):
            return False
    passes = 0
    while True:
        passes += 1
        revision = store.revision
        for i, a in enumerate(order):
            for b in order[i + 1 :]:
                if not propagate_pair(store, a, b):
                    logger.debug("wipe-out on pair (%s, %s) after %d passes", a, b, passes)
                    return False
        if store.revision == revision:
            logger.debug("fixed point after %d passes", passes)
            return not window_overloaded(store)


def window_overloaded(store: DomainStore) -> bool:
    """True if some time window must hold more work than it is long.

    For every window ``[r, d)`` spanned by one job's earliest start and
    another job's latest completion, the jobs that must run entirely inside
    it need at most ``d - r`` time units.
    """
    order = store.order
    starts = sorted({store.earliest_start(j) for j in order})
    ends = sorted({store.latest_start(j) + store.duration(j) for j in order})
    for r in starts:
        for d in ends:
            if d <= r:
                continue
            load = sum(
                store.duration(j)
                for j in order
                if store.earliest_start(j) >= r
                and store.latest_start(j) + store.duration(j) <= d
            )
            if load > d - r:
                logger.debug("window [%d, %d) overloaded: load=%d", r, d, load)
                return True
    return False


def unresolved_pairs(store: DomainStore) -> list[tuple[JobId, JobId]]:
    """Pairs (in identity order) whose relative order is still open."""
    order = store.order
    return [
        (a, b)
        for i, a in enumerate(order)
        for b in order[i + 1 :]
        if not store.is_ordered(a, b)
    ]
