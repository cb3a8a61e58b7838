import argparse
import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

import yaml

from clocksched.models import SearchResult
from clocksched.parser import int_field, load_jobs
from clocksched.report import print_result
from clocksched.search import solve
from clocksched.visualization import plot_gantt


def load_config(config_file: str) -> Dict[str, Any]:
    """Load configuration from a YAML or JSON file."""
    if not os.path.isfile(config_file):
        raise FileNotFoundError(f"Config file not found: {config_file}")
    with open(config_file, "r", encoding="utf-8") as f:
        text = f.read()
    if config_file.endswith((".yml", ".yaml")):
        cfg = yaml.safe_load(text) or {}
    else:
        cfg = json.loads(text)
    if not isinstance(cfg, dict):
        raise ValueError(f"{config_file}: config must be a mapping")
    return cfg


def run(
    input_path: str,
    horizon: Optional[int] = None,
    charts_dir: Optional[str] = None,
    trace: bool = False,
) -> SearchResult:
    logger = logging.getLogger("clocksched")
    jobs = load_jobs(input_path, horizon=horizon)
    logger.info("Input: %s jobs=%d", input_path, len(jobs))

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    base_name = os.path.splitext(os.path.basename(input_path))[0]
    trace_file = None
    if trace and charts_dir:
        trace_dir = os.path.join(charts_dir, "traces")
        os.makedirs(trace_dir, exist_ok=True)
        trace_file = os.path.join(trace_dir, f"trace_{base_name}_{ts}.txt")
        with open(trace_file, "w", encoding="utf-8") as tf:
            tf.write("node;depth;event;detail\n")

    result = solve(jobs, trace_file=trace_file)
    print_result(result)

    if charts_dir and result.schedule is not None:
        out_path = os.path.join(charts_dir, f"gantt_{base_name}_{ts}.png")
        plot_gantt(result.schedule, save_path=out_path)
        logger.info("Saved Gantt chart to %s", out_path)
    return result


def cli(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Clock-driven single-processor scheduler")
    parser.add_argument(
        "--config",
        required=True,
        help="Path to the YAML/JSON configuration file",
    )
    args = parser.parse_args(argv)
    cfg = load_config(args.config)

    log_level = cfg.get("log_level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    input_path = cfg.get("input")
    if not input_path:
        raise ValueError("Missing 'input' key in config")
    charts_cfg = cfg.get("charts", {}) if isinstance(cfg.get("charts"), dict) else {}

    result = run(
        input_path=input_path,
        horizon=int_field(cfg, "horizon", args.config, None),
        charts_dir=charts_cfg.get("dir"),
        trace=bool(cfg.get("trace", False)),
    )
    return 0 if result.feasible else 1


if __name__ == "__main__":
    raise SystemExit(cli())
