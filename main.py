#!/usr/bin/env python3
"""Entry point: ``python main.py --config config.yaml``."""

from clocksched.main import cli

if __name__ == "__main__":
    raise SystemExit(cli())
