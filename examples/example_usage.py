"""Example: use the calculators directly (no Flask).

Controllers are only a thin layer; the time accounting lives in the
presence calculator and the period aggregator.
"""

import importlib
from datetime import timedelta

from config import get_settings_module

from src.time_tracker.time_tracker.container import build_container
from src.time_tracker.time_tracker.core.enums import EntryType
from src.time_tracker.time_tracker.entries.model import PunchEntry
from src.time_tracker.time_tracker.projects.model import Project
from src.time_tracker.time_tracker.sessions.model import ProjectSession


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(work_day_hours=settings.WORK_DAY_HOURS)
    now = container.clock()

    day = (now - timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)
    entries = [
        PunchEntry.create(EntryType.CLOCK_IN, day.replace(hour=9), now=now),
        PunchEntry.create(EntryType.BREAK_START, day.replace(hour=12, minute=30), now=now),
    ]
    projects = [Project.create("Internal", project_id="internal", color="#3b82f6")]
    sessions = [ProjectSession.create("internal", day.replace(hour=9), day.replace(hour=11))]

    calc = container.presence_calculator
    presence = calc.calculate_presence_time(entries)
    print("status:", calc.get_day_status(entries).value)
    print("presence ms:", presence, f"({calc.get_completion_percentage(presence)}%)")

    report = container.period_aggregator.calculate_week_stats(day, entries, sessions, projects)
    print(report.to_dict()["time"])


if __name__ == "__main__":
    main()
