from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_month
from ..common.web import (
    api_view,
    current_user,
    login_required,
    parse_int,
    parse_optional_datetime,
    request_json,
)
from ..container import Container
from ..core.exceptions import AuthorizationError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/punch-in", methods=["POST"], endpoint="punch_in")
    @login_required
    @api_view
    def punch_in():
        user = current_user()
        attendance_id = container.attendance_service.punch_in(user.employee_id, outlet_id=user.outlet_id)
        return jsonify({"success": True, "attendance_id": attendance_id}), 201

    @app.route("/api/attendance/punch-out", methods=["POST"], endpoint="punch_out")
    @login_required
    @api_view
    def punch_out():
        container.attendance_service.punch_out(current_user().employee_id)
        return jsonify({"success": True})

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    @api_view
    def attendance_summary():
        user = current_user()
        employee_id = parse_int(request.args.get("employee_id", user.employee_id), "employee_id")
        if employee_id != user.employee_id and not user.is_super_admin:
            raise AuthorizationError("You can only view your own attendance")

        try:
            month = parse_month(request.args.get("month", ""))
        except ValueError:
            raise ValidationError("month must look like YYYY-MM")

        summary = container.attendance_service.monthly_summary(employee_id, month)
        return jsonify({"success": True, "month": month.strftime("%Y-%m"), "summary": asdict(summary)})

    @app.route("/api/attendance/override", methods=["PUT"], endpoint="attendance_override")
    @login_required
    @api_view
    def attendance_override():
        data = request_json()
        try:
            work_date = parse_iso_date(data.get("date", ""))
        except ValueError:
            raise ValidationError("date must look like YYYY-MM-DD")

        attendance_id = container.attendance_service.save_override(
            actor=current_user(),
            employee_id=parse_int(data.get("employee_id"), "employee_id"),
            work_date=work_date,
            status=data.get("status", ""),
            reason=data.get("reason", ""),
            check_in=parse_optional_datetime(data.get("check_in")),
            check_out=parse_optional_datetime(data.get("check_out")),
            outlet_id=data.get("outlet_id"),
        )
        return jsonify({"success": True, "attendance_id": attendance_id})

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    @login_required
    @api_view
    def attendance_delete(attendance_id: int):
        container.attendance_service.delete_record(
            actor=current_user(),
            attendance_id=attendance_id,
            reason=request_json().get("reason", ""),
        )
        return jsonify({"success": True})
