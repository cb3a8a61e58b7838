import os
from typing import Optional

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from clocksched.models import Schedule  # noqa: E402


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def plot_gantt(
    schedule: Schedule,
    save_path: str,
    title: Optional[str] = None,
    show_windows: bool = True,
) -> str:
    """Create and save a single-processor Gantt chart.

    Each job gets its own row so that its release/deadline window can be
    drawn next to the execution bar; the bottom row shows the processor
    timeline with all jobs.

    Returns:
        Path of the written image.
    """
    rows = list(schedule.rows)
    n = len(rows)
    horizon = max([r.deadline for r in rows] + [schedule.makespan, 1])
    fig, ax = plt.subplots(
        figsize=(min(8 + horizon * 0.15, 18), min(0.45 * n + 2.5, 16)),
        constrained_layout=True,
    )
    cmap = plt.get_cmap("tab20")
    for i, r in enumerate(rows):
        y = n - i
        color = cmap(i % 20)
        if show_windows:
            ax.plot([r.release, r.deadline], [y, y], color="grey", linewidth=1.0, zorder=1)
            ax.plot([r.release], [y], marker="|", markersize=12, color="grey")
            ax.plot([r.deadline], [y], marker="|", markersize=12, color="red")
        ax.barh(
            y,
            r.end - r.start,
            left=r.start,
            height=0.6,
            color=color,
            alpha=0.85,
            edgecolor="black",
            linewidth=0.6,
            zorder=2,
        )
        # processor timeline
        ax.barh(
            0,
            r.end - r.start,
            left=r.start,
            height=0.8,
            color=color,
            alpha=0.85,
            edgecolor="black",
            linewidth=0.6,
        )
        ax.text(
            (r.start + r.end) / 2, 0, str(r.job), ha="center", va="center", fontsize=7
        )
    ax.set_xlabel("Time", fontsize=12)
    ax.set_yticks(range(n + 1))
    ax.set_yticklabels(["CPU"] + [str(r.job) for r in reversed(rows)])
    ax.set_xlim(0, horizon)
    ax.set_ylim(-0.6, n + 0.6)
    ax.grid(True, alpha=0.25, axis="x", linestyle="--", linewidth=0.7)
    if title is None:
        title = f"Schedule - {n} jobs, makespan = {schedule.makespan}"
    ax.set_title(title, fontsize=14, fontweight="bold")

    _ensure_dir(os.path.dirname(save_path))
    fig.savefig(save_path, dpi=180)
    plt.close(fig)
    return save_path
