# v2
# file: club/stats.py

"""
Collects statistics for a club day.
Counts arrivals, rejections, queueing and departures, keeps per-table session
lengths, and writes per-table and summary CSVs once the day is closed.
"""

from __future__ import annotations

import csv
import logging
import os
from typing import Any, Dict, List

import numpy as np
import pandas as pd

from .config import SUMMARY_FILENAME, TABLES_FILENAME

DEPARTURE_REASONS = ("leave", "ejected", "closing")


class StatsCollector:
    """Tracks event counters, billing sessions, and per-table KPIs."""

    def __init__(self, config, state):
        self.config = config
        self.state = state
        self.event_counters: Dict[str, Any] = {
            "arrivals": 0,
            "seatings": 0,
            "queued": 0,
            "promotions": 0,
            "rejections": {},
            "departures": {reason: 0 for reason in DEPARTURE_REASONS},
        }
        self.session_minutes: Dict[int, List[int]] = {idx: [] for idx in range(1, config.table_count + 1)}
        self.max_queue_length = 0

    # ------------------------------------------------------------------
    # Hooks invoked by ClubLogic
    # ------------------------------------------------------------------
    def log_arrival(self, client: str, time) -> None:
        self.event_counters["arrivals"] += 1

    def log_rejection(self, code) -> None:
        rejections = self.event_counters["rejections"]
        rejections[code.value] = rejections.get(code.value, 0) + 1

    def log_seating(self, client: str, table_id: int, time) -> None:
        self.event_counters["seatings"] += 1

    def log_queued(self, client: str, time, queue_length: int) -> None:
        self.event_counters["queued"] += 1
        self.max_queue_length = max(self.max_queue_length, queue_length)

    def log_promotion(self, client: str, table_id: int, time) -> None:
        self.event_counters["promotions"] += 1

    def log_departure(self, client: str, time, reason: str) -> None:
        departures = self.event_counters["departures"]
        departures[reason] = departures.get(reason, 0) + 1

    def log_billing(self, table_id: int, client: str, duration, hours: int, amount: int) -> None:
        self.session_minutes.setdefault(table_id, []).append(duration.total_minutes)
        logging.debug("Billing recorded: table=%d client=%s hours=%d amount=%d", table_id, client, hours, amount)

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------
    def table_rows(self) -> List[Dict[str, Any]]:
        working = max(1, self.config.working_minutes)
        rows: List[Dict[str, Any]] = []
        for table in self.state.tables_in_order():
            rows.append(
                {
                    "table_id": table.table_id,
                    "revenue": table.revenue,
                    "busy_time": str(table.busy_time),
                    "busy_minutes": table.busy_time.total_minutes,
                    "sessions": table.sessions,
                    "hours_billed": table.hours_billed,
                    "utilization": table.busy_time.total_minutes / working,
                }
            )
        return rows

    def tables_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.table_rows()).set_index("table_id")

    def summary_rows(self) -> List[Dict[str, Any]]:
        frame = self.tables_frame()
        sessions = [m for minutes in self.session_minutes.values() for m in minutes]
        counters = self.event_counters
        rows = [
            {"metric": "arrivals", "value": counters["arrivals"], "units": "clients", "description": "Accepted arrivals"},
            {"metric": "seatings", "value": counters["seatings"], "units": "events", "description": "Accepted Sit commands"},
            {"metric": "queued", "value": counters["queued"], "units": "clients", "description": "Clients admitted to the waiting queue"},
            {"metric": "max_queue_length", "value": self.max_queue_length, "units": "clients", "description": "Longest waiting queue observed"},
            {"metric": "promotions", "value": counters["promotions"], "units": "events", "description": "Waiting clients seated at a freed table"},
        ]
        for code, count in sorted(counters["rejections"].items()):
            rows.append({"metric": f"rejected_{code}", "value": count, "units": "events", "description": f"Commands rejected with {code}"})
        for reason in DEPARTURE_REASONS:
            rows.append(
                {
                    "metric": f"departures_{reason}",
                    "value": counters["departures"].get(reason, 0),
                    "units": "clients",
                    "description": f"Clients gone via {reason}",
                }
            )
        rows.extend(
            [
                {"metric": "total_revenue", "value": int(frame["revenue"].sum()), "units": "currency", "description": "Revenue over all tables"},
                {"metric": "total_busy_minutes", "value": int(frame["busy_minutes"].sum()), "units": "minutes", "description": "Busy time over all tables"},
                {"metric": "mean_utilization", "value": float(np.mean(frame["utilization"])), "units": "ratio", "description": "Mean busy share of the working day"},
                {
                    "metric": "mean_session_minutes",
                    "value": float(np.mean(sessions)) if sessions else 0.0,
                    "units": "minutes",
                    "description": "Mean length of a billed table session",
                },
            ]
        )
        return rows

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def write_outputs(self, output_dir: str) -> Dict[str, str]:
        os.makedirs(output_dir, exist_ok=True)
        tables_path = os.path.join(output_dir, TABLES_FILENAME)
        summary_path = os.path.join(output_dir, SUMMARY_FILENAME)

        self.tables_frame().to_csv(tables_path)
        logging.info("Per-table statistics written to %s", tables_path)

        fieldnames = ["metric", "value", "units", "description"]
        with open(summary_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for row in self.summary_rows():
                writer.writerow(row)
        logging.info("Summary statistics written to %s", summary_path)
        return {"tables": tables_path, "summary": summary_path}

    def log_summary(self) -> None:
        logging.info("------ CLUB DAY SUMMARY ------")
        for row in self.summary_rows():
            logging.info("%s = %s %s", row["metric"], row["value"], row["units"])
