import pytest

from clocksched.models import Job, Schedule, SearchResult, SearchStatus
from clocksched.report import format_result, print_result
from clocksched.validation import check_job_windows, check_no_overlap, check_schedule

JOBS = [
    Job("A", duration=2, release=0, deadline=4),
    Job("B", duration=3, release=1, deadline=9),
]


def test_format_scheduled_result():
    sched = Schedule.from_start_times(JOBS, {"A": 0, "B": 2})
    result = SearchResult(status=SearchStatus.SCHEDULED, schedule=sched)
    assert format_result(result) == ["Job start times:", "A = 0", "B = 2"]


def test_format_infeasible_result(capsys):
    result = SearchResult(status=SearchStatus.INFEASIBLE)
    assert format_result(result) == ["Infeasible."]
    print_result(result)
    assert capsys.readouterr().out == "Infeasible.\n"


def test_valid_schedule_passes():
    sched = Schedule.from_start_times(JOBS, {"A": 1, "B": 3})
    assert check_schedule(JOBS, sched)


def test_overlap_detected():
    sched = Schedule.from_start_times(JOBS, {"A": 1, "B": 2})
    with pytest.raises(AssertionError):
        check_no_overlap(sched)


@pytest.mark.parametrize("starts", [{"A": 0, "B": 0}, {"A": 0, "B": 7}, {"A": 3, "B": 5}])
def test_window_violations_detected(starts):
    # B before release, B after deadline, A after deadline
    sched = Schedule.from_start_times(JOBS, starts)
    with pytest.raises(AssertionError):
        check_job_windows(JOBS, sched)


def test_missing_job_detected():
    sched = Schedule.from_start_times(JOBS[:1], {"A": 0})
    with pytest.raises(AssertionError):
        check_job_windows(JOBS, sched)
