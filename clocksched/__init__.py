"""Clock-driven scheduling of periodic real-time jobs on one processor.

Exports the job model, the search entry point and task expansion helpers.
"""

from clocksched.models import InvalidJob, Job, Schedule, SearchResult, SearchStatus  # noqa: F401
from clocksched.search import solve  # noqa: F401
from clocksched.tasks import PeriodicTask, expand_jobs, hyperperiod  # noqa: F401

__all__ = [
    "InvalidJob",
    "Job",
    "PeriodicTask",
    "Schedule",
    "SearchResult",
    "SearchStatus",
    "expand_jobs",
    "hyperperiod",
    "solve",
]
