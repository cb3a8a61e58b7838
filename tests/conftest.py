"""Pytest configuration and shared fixtures.

Ensures the project root is on sys.path so ``import clocksched`` works
without installation.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from clocksched.models import Job  # noqa: E402
from clocksched.tasks import PeriodicTask, expand_jobs  # noqa: E402

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def clock_driven_tasks() -> list[PeriodicTask]:
    """T1=(6,2), T2=(12,3), T3=(18,4); hyperperiod 36."""
    return [
        PeriodicTask("T1", period=6, execution_time=2),
        PeriodicTask("T2", period=12, execution_time=3),
        PeriodicTask("T3", period=18, execution_time=4),
    ]


@pytest.fixture
def clock_driven_jobs(clock_driven_tasks) -> list[Job]:
    return expand_jobs(clock_driven_tasks)
