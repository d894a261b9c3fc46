from __future__ import annotations

import logging
from datetime import datetime

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container
from ..entries.model import PunchEntry
from ..projects.model import Project
from ..reports.charts import daily_chart, project_pie_chart
from ..sessions.model import ProjectSession
from ..timeline.segments import build_day_segments, calculate_overlap_time

log = logging.getLogger(__name__)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _list_field(data: dict, key: str) -> list:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ValidationError(f"{key} must be a list")
    return value


def _load_records(data: dict, now: datetime):
    entries = [PunchEntry.from_dict(x, now=now) for x in _list_field(data, "entries")]
    sessions = [ProjectSession.from_dict(x) for x in _list_field(data, "sessions")]
    projects = [Project.from_dict(x) for x in _list_field(data, "projects")]
    return entries, sessions, projects


def _require(data: dict, key: str) -> str:
    value = data.get(key)
    if not value:
        raise ValidationError(f"{key} is required")
    return str(value)


def register(app: Flask, container: Container) -> None:
    calc = container.presence_calculator
    aggregator = container.period_aggregator

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        log.info("rejected request %s: %s", request.path, e)
        return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def api_health():
        return jsonify({"status": "ok"})

    @app.route("/api/presence", methods=["POST"], endpoint="api_presence")
    def api_presence():
        """Live view of one day: recomputed from scratch on every poll."""
        entries, sessions, projects = _load_records(_json_body(), container.clock())

        presence = calc.calculate_presence_time(entries)
        next_entry = calc.get_next_expected_entry(entries)
        return jsonify(
            {
                "presence_time": presence,
                "break_time": calc.calculate_break_duration(entries),
                "status": calc.get_day_status(entries).value,
                "next_expected_entry": next_entry.value if next_entry else None,
                "remaining_time": calc.get_remaining_time(presence),
                "completion_percentage": calc.get_completion_percentage(presence),
                "is_complete": calc.is_work_day_complete(presence),
                "project_time": calc.calculate_total_project_time(sessions),
                "project_stats": [s.to_dict() for s in calc.calculate_project_stats(sessions, projects)],
            }
        )

    def _report_response(stats):
        body = stats.to_dict()
        body["charts"] = {
            "daily": daily_chart(stats.daily_stats),
            "projects": project_pie_chart(stats.project_stats),
        }
        return jsonify(body)

    @app.route("/api/reports/period", methods=["POST"], endpoint="api_report_period")
    def api_report_period():
        data = _json_body()
        entries, sessions, projects = _load_records(data, container.clock())
        stats = aggregator.calculate_period_stats(
            start_date=_require(data, "start_date"),
            end_date=_require(data, "end_date"),
            entries=entries,
            sessions=sessions,
            projects=projects,
        )
        return _report_response(stats)

    @app.route("/api/reports/week", methods=["POST"], endpoint="api_report_week")
    def api_report_week():
        data = _json_body()
        entries, sessions, projects = _load_records(data, container.clock())
        return _report_response(aggregator.calculate_week_stats(_require(data, "date"), entries, sessions, projects))

    @app.route("/api/reports/month", methods=["POST"], endpoint="api_report_month")
    def api_report_month():
        data = _json_body()
        entries, sessions, projects = _load_records(data, container.clock())
        return _report_response(aggregator.calculate_month_stats(_require(data, "date"), entries, sessions, projects))

    @app.route("/api/timeline", methods=["POST"], endpoint="api_timeline")
    def api_timeline():
        now = container.clock()
        entries, sessions, projects = _load_records(_json_body(), now)
        segments = build_day_segments(entries, sessions, projects, now=now)
        return jsonify(
            {
                "segments": [s.to_dict() for s in segments],
                "overlap_time": calculate_overlap_time(sessions, now=now),
            }
        )
