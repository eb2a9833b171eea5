# v3
# file: club/simulate.py

"""
Main entry point for processing one day of the computer club.
Initializes logging, parses the input description, feeds every command to
ClubLogic, closes the day, and prints the report to stdout.

Example:
    python -m club.simulate club/tests/data/example.txt --output output
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime
from typing import List, Sequence

if __package__ is None or __package__ == "":  # pragma: no cover - runtime path fix
    sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from club.club_logic import ClubLogic  # type: ignore
from club.config import LOG_FILE, LOG_LEVEL, OUTPUT_DIR, ClubConfig  # type: ignore
from club.events import Command  # type: ignore
from club.parser import read_input_file  # type: ignore
from club.report import render_report, write_report  # type: ignore


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Process one day of computer club events.")
    parser.add_argument("input", help="Path to the day description file.")
    parser.add_argument(
        "--output",
        default=OUTPUT_DIR,
        help=f"Directory for tables_stats.csv and summary_stats.csv (default: {OUTPUT_DIR}).",
    )
    parser.add_argument(
        "--no-output",
        action="store_true",
        help="Skip writing the statistics CSVs.",
    )
    parser.add_argument("--log-file", default=LOG_FILE, help=f"Log file path (default: {LOG_FILE}).")
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging verbosity (default: {LOG_LEVEL}).",
    )
    parser.add_argument(
        "--check-invariants",
        action="store_true",
        help="Verify club state invariants after every command.",
    )
    return parser.parse_args(argv)


def configure_logging(log_file: str, level: str = "INFO") -> None:
    log_dir = os.path.dirname(log_file) or "."
    os.makedirs(log_dir, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_file, mode="w"),
            logging.StreamHandler(sys.stderr),
        ],
        force=True,
    )
    logging.info("Club logging initialized at %s", datetime.now().isoformat())


def run_day(config: ClubConfig, commands: List[Command], check_invariants: bool = False) -> ClubLogic:
    """Apply every command in order, then close the day."""
    logic = ClubLogic(config, check_invariants=check_invariants)
    logging.info("Starting club day %s-%s with %d table(s)", config.open_time, config.close_time, config.table_count)
    for command in commands:
        logging.debug("Processing command: %s", command)
        logic.apply(command)
    logic.close_day()
    logging.info("Club day processed: %d event(s) logged", len(logic.log))
    return logic


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    try:
        config, commands = read_input_file(args.input)
        logic = run_day(config, commands, check_invariants=args.check_invariants)
    except (OSError, ValueError) as exc:
        logging.error("Aborting: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    write_report(render_report(config, logic.log, logic.state.tables_in_order()))
    logic.stats.log_summary()
    if not args.no_output:
        logic.stats.write_outputs(args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
