from src.time_tracker.time_tracker.presence.model import ProjectStat
from src.time_tracker.time_tracker.reports.charts import daily_chart, project_pie_chart
from src.time_tracker.time_tracker.reports.model import DayStats


def test_daily_chart_in_hours():
    days = [
        DayStats(date="2025-11-13", presence_time=27_000_000, project_time=3_600_000, is_complete=False, has_entries=True),
        DayStats(date="2025-11-16", presence_time=0, project_time=0, is_complete=False, has_entries=False),
    ]

    chart = daily_chart(days)

    assert chart["labels"] == ["Thu 13", "Sun 16"]
    assert chart["presence_hours"] == [7.5, 0]
    assert chart["project_hours"] == [1.0, 0]
    assert chart["completion_status"] == [False, False]


def test_project_pie_chart():
    stat = ProjectStat(
        project_id="a",
        project_name="Alpha",
        project_color="#ff0000",
        duration=5_400_000,
        percentage=100,
        session_count=1,
        average_session_duration=5_400_000,
        is_running=False,
    )

    chart = project_pie_chart([stat])

    assert chart == {"labels": ["Alpha"], "hours": [1.5], "percentages": [100], "colors": ["#ff0000"]}
