from __future__ import annotations

from datetime import date, datetime
from functools import wraps

import structlog
from flask import Flask, jsonify, request

from ..common.datetime_utils import now_utc, parse_iso_date, parse_iso_datetime
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..container import Container

log = structlog.get_logger(__name__)

API_PREFIX = "/api/v1/attendance"


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def json_endpoint(view):
        """Wrap a view returning (message, data[, status]) into the response envelope."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                result = view(*args, **kwargs)
            except NotFoundError as e:
                return jsonify({"success": False, "message": str(e)}), 404
            except DomainError as e:
                return jsonify({"success": False, "message": str(e)}), 400
            except Exception:
                log.exception("attendance_request_failed", path=request.path, method=request.method)
                return jsonify({"success": False, "message": "An unexpected error occurred"}), 500

            message, data, *rest = result
            status = rest[0] if rest else 200
            return jsonify({"success": True, "message": message, "data": data}), status

        return wrapper

    def _parse_date(value: str, field_name: str) -> date:
        try:
            return parse_iso_date(value[:10])
        except ValueError:
            raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")

    def _parse_datetime(value: str, field_name: str) -> datetime:
        try:
            return parse_iso_datetime(value)
        except ValueError:
            raise ValidationError(f"{field_name} must be an ISO-8601 timestamp")

    def _parse_int(value: str, field_name: str) -> int:
        try:
            return int(value)
        except ValueError:
            raise ValidationError(f"{field_name} must be an integer")

    def _clock_payload() -> dict:
        body = request.get_json(silent=True) or {}
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object")
        if not body.get("employeeId"):
            raise ValidationError("Employee ID is required")

        timestamp = body.get("timestamp")
        if timestamp is not None and not isinstance(timestamp, str):
            raise ValidationError("timestamp must be an ISO-8601 timestamp")

        location_address = body.get("locationAddress")
        if location_address is not None and not isinstance(location_address, dict):
            raise ValidationError("Location address must be an object")

        return {
            "employee_id": body["employeeId"],
            "timestamp": _parse_datetime(timestamp, "timestamp") if timestamp else None,
            "note": body.get("note"),
            "location_address": location_address,
            "ip_address": body.get("ipAddress") or request.remote_addr,
            "acting_user_id": request.headers.get("X-User-Id"),
        }

    @app.route(f"{API_PREFIX}/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    @json_endpoint
    def clock_in():
        punch = service.clock_in(**_clock_payload())
        return "Clocked in successfully", punch.to_dict(), 201

    @app.route(f"{API_PREFIX}/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    @json_endpoint
    def clock_out():
        punch = service.clock_out(**_clock_payload())
        return "Clocked out successfully", punch.to_dict(), 201

    @app.route(f"{API_PREFIX}/status/<employee_id>", methods=["GET"], endpoint="attendance_status")
    @json_endpoint
    def current_status(employee_id: str):
        return "Status retrieved successfully", service.get_current_status(employee_id)

    @app.route(f"{API_PREFIX}/today/<employee_id>", methods=["GET"], endpoint="attendance_today")
    @json_endpoint
    def today(employee_id: str):
        logs = service.get_today_attendance(employee_id)
        return "Today's attendance retrieved successfully", [p.to_dict() for p in logs]

    @app.route(f"{API_PREFIX}/logs/<employee_id>", methods=["GET"], endpoint="attendance_logs")
    @json_endpoint
    def logs(employee_id: str):
        args = request.args
        filters = {}
        if args.get("startDate"):
            filters["start_date"] = _parse_datetime(args["startDate"], "startDate")
        if args.get("endDate"):
            filters["end_date"] = _parse_datetime(args["endDate"], "endDate")
        if args.get("limit"):
            filters["limit"] = _parse_int(args["limit"], "limit")
        if args.get("skip"):
            filters["skip"] = _parse_int(args["skip"], "skip")

        page = service.get_attendance_logs(employee_id, **filters)
        return "Attendance logs retrieved successfully", page.to_dict()

    @app.route(f"{API_PREFIX}/monthly/<employee_id>", methods=["GET"], endpoint="attendance_monthly")
    @json_endpoint
    def monthly(employee_id: str):
        today_ = now_utc().date()
        year = _parse_int(request.args["year"], "year") if request.args.get("year") else today_.year
        month = _parse_int(request.args["month"], "month") if request.args.get("month") else today_.month
        return "Monthly attendance retrieved successfully", service.get_monthly_attendance(employee_id, year, month)

    @app.route(f"{API_PREFIX}/summary/<employee_id>", methods=["GET"], endpoint="attendance_summary")
    @json_endpoint
    def summary(employee_id: str):
        value = request.args.get("date")
        if not value:
            raise ValidationError("Date is required")
        day = _parse_date(value, "date")
        return "Attendance summary retrieved successfully", service.get_attendance_summary(employee_id, day).to_dict()

    @app.route(f"{API_PREFIX}/summary-range/<employee_id>", methods=["GET"], endpoint="attendance_summary_range")
    @json_endpoint
    def summary_range(employee_id: str):
        start_s = request.args.get("startDate")
        end_s = request.args.get("endDate")
        if not start_s or not end_s:
            raise ValidationError("Start date and end date are required")

        summaries = service.get_attendance_summary_range(
            employee_id,
            _parse_date(start_s, "startDate"),
            _parse_date(end_s, "endDate"),
        )
        return "Attendance summaries retrieved successfully", summaries
