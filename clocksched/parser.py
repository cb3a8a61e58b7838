"""Loading of task sets and explicit job lists from YAML or JSON files.

Two document shapes are accepted::

    horizon: 36          # optional, defaults to the hyperperiod
    tasks:
      - {name: T1, period: 6, execution_time: 2}

or::

    jobs:
      - {id: A, duration: 2, release: 0, deadline: 4}
"""

from __future__ import annotations

import json
import os
from typing import Any, Optional

import yaml

from clocksched.models import Job
from clocksched.tasks import PeriodicTask, expand_jobs


def read_document(file_path: str) -> dict[str, Any]:
    """Read a YAML (``.yml``/``.yaml``) or JSON file into a dict."""
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"Input file not found: {file_path}")
    with open(file_path, "r", encoding="utf-8") as f:
        text = f.read()
    if file_path.endswith((".yml", ".yaml")):
        doc = yaml.safe_load(text) or {}
    else:
        doc = json.loads(text)
    if not isinstance(doc, dict):
        raise ValueError(f"{file_path}: top level must be a mapping")
    return doc


def int_field(entry: dict, key: str, where: str, default: Any = ...) -> Any:
    if key not in entry:
        if default is ...:
            raise ValueError(f"{where}: missing '{key}'")
        return default
    value = entry[key]
    if value is None and default is not ...:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where}: '{key}' must be an integer, got {value!r}")
    return value


def parse_tasks(entries: list) -> list[PeriodicTask]:
    tasks = []
    for idx, entry in enumerate(entries, start=1):
        where = f"task #{idx}"
        if not isinstance(entry, dict):
            raise ValueError(f"{where}: expected a mapping")
        tasks.append(
            PeriodicTask(
                name=str(entry.get("name", f"T{idx}")),
                period=int_field(entry, "period", where),
                execution_time=int_field(entry, "execution_time", where),
                deadline=int_field(entry, "deadline", where, None),
                phase=int_field(entry, "phase", where, 0),
            )
        )
    return tasks


def parse_jobs(entries: list) -> list[Job]:
    jobs = []
    for idx, entry in enumerate(entries, start=1):
        where = f"job #{idx}"
        if not isinstance(entry, dict):
            raise ValueError(f"{where}: expected a mapping")
        if "id" not in entry:
            raise ValueError(f"{where}: missing 'id'")
        jobs.append(
            Job(
                id=entry["id"],
                duration=int_field(entry, "duration", where),
                release=int_field(entry, "release", where),
                deadline=int_field(entry, "deadline", where),
            )
        )
    return jobs


def load_jobs(file_path: str, horizon: Optional[int] = None) -> list[Job]:
    """Load the job set described by ``file_path``.

    Args:
        file_path: YAML/JSON document with either ``tasks`` or ``jobs``.
        horizon: Overrides the document's ``horizon`` for task sets.

    Raises:
        ValueError: On a malformed document.
        InvalidJob: On a job whose bounds contradict each other.
    """
    doc = read_document(file_path)
    if "jobs" in doc:
        entries = doc["jobs"]
        if not isinstance(entries, list):
            raise ValueError(f"{file_path}: 'jobs' must be a list")
        return parse_jobs(entries)
    if "tasks" in doc:
        entries = doc["tasks"]
        if not isinstance(entries, list):
            raise ValueError(f"{file_path}: 'tasks' must be a list")
        tasks = parse_tasks(entries)
        if horizon is None:
            horizon = int_field(doc, "horizon", file_path, None)
        return expand_jobs(tasks, horizon=horizon)
    raise ValueError(f"{file_path}: expected a 'tasks' or 'jobs' list")
