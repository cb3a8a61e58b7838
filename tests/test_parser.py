"""Tests for task-set / job-list loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from clocksched.models import InvalidJob
from clocksched.parser import load_jobs


def test_load_task_set_yaml(fixtures_dir: Path):
    jobs = load_jobs(str(fixtures_dir / "clock_driven.yaml"))
    assert len(jobs) == 10
    assert {j.id for j in jobs} >= {"J11", "J23", "J32"}


def test_horizon_override(fixtures_dir: Path):
    jobs = load_jobs(str(fixtures_dir / "clock_driven.yaml"), horizon=12)
    assert sorted(j.id for j in jobs) == ["J11", "J12", "J21", "J31"]


def test_load_job_list_json(fixtures_dir: Path):
    jobs = load_jobs(str(fixtures_dir / "overloaded_jobs.json"))
    assert [(j.id, j.duration, j.release, j.deadline) for j in jobs] == [
        ("A", 2, 0, 2),
        ("B", 2, 0, 2),
    ]


def test_horizon_from_document(tmp_path: Path):
    path = tmp_path / "tasks.yml"
    path.write_text("horizon: 6\ntasks:\n  - {period: 3, execution_time: 1}\n")
    jobs = load_jobs(str(path))
    assert [j.id for j in jobs] == ["J11", "J12"]


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_jobs(str(tmp_path / "nope.yaml"))


@pytest.mark.parametrize(
    "content",
    [
        "foo: 1\n",  # neither tasks nor jobs
        "tasks: 3\n",  # tasks not a list
        "tasks:\n  - {period: 6}\n",  # missing execution_time
        "tasks:\n  - {period: six, execution_time: 1}\n",  # non-integer
        "jobs:\n  - {duration: 1, release: 0, deadline: 3}\n",  # missing id
        "- 1\n- 2\n",  # top level not a mapping
    ],
)
def test_malformed_documents(tmp_path: Path, content: str):
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_jobs(str(path))


def test_contradictory_job_raises_invalid_job(tmp_path: Path):
    path = tmp_path / "jobs.yaml"
    path.write_text("jobs:\n  - {id: J, duration: 1, release: 5, deadline: 5}\n")
    with pytest.raises(InvalidJob):
        load_jobs(str(path))
