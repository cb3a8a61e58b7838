import pytest

from clocksched.models import InvalidJob, Job, Schedule, validate_jobs


def test_job_window_properties():
    job = Job("J11", duration=2, release=0, deadline=6)
    assert job.latest_start == 4
    assert job.slack == 4


def test_job_without_room_is_invalid():
    with pytest.raises(InvalidJob):
        Job("J", duration=1, release=5, deadline=5)


@pytest.mark.parametrize("duration", [0, -3])
def test_non_positive_duration_is_invalid(duration: int):
    with pytest.raises(InvalidJob):
        Job("J", duration=duration, release=0, deadline=10)


def test_invalid_job_is_value_error():
    assert issubclass(InvalidJob, ValueError)


def test_tight_job_is_valid():
    job = Job("J", duration=2, release=0, deadline=2)
    assert job.slack == 0


def test_validate_jobs_sorts_by_identity():
    jobs = [
        Job("J21", duration=3, release=0, deadline=12),
        Job("J11", duration=2, release=0, deadline=6),
        Job("J12", duration=2, release=6, deadline=12),
    ]
    assert [j.id for j in validate_jobs(jobs)] == ["J11", "J12", "J21"]


def test_validate_jobs_rejects_duplicates():
    jobs = [
        Job("A", duration=1, release=0, deadline=4),
        Job("A", duration=2, release=0, deadline=4),
    ]
    with pytest.raises(InvalidJob):
        validate_jobs(jobs)


def test_validate_jobs_rejects_incomparable_ids():
    jobs = [
        Job(1, duration=1, release=0, deadline=4),
        Job("b", duration=1, release=0, deadline=4),
    ]
    with pytest.raises(InvalidJob):
        validate_jobs(jobs)


def test_schedule_lookup_and_makespan():
    jobs = [
        Job("A", duration=2, release=0, deadline=4),
        Job("B", duration=3, release=1, deadline=9),
    ]
    sched = Schedule.from_start_times(jobs, {"A": 0, "B": 2})
    assert sched["B"] == 2
    assert sched.start_times == {"A": 0, "B": 2}
    assert sched.makespan == 5
    assert len(sched) == 2
    with pytest.raises(KeyError):
        sched["C"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"duration": 1.5, "release": 0, "deadline": 3},
        {"duration": 1, "release": "0", "deadline": 3},
        {"duration": 1, "release": 0, "deadline": True},
    ],
)
def test_non_integer_fields_are_invalid(kwargs):
    with pytest.raises(InvalidJob):
        Job("A", **kwargs)
