from __future__ import annotations

from dataclasses import asdict
from datetime import date

from flask import Flask, jsonify

from ..common.datetime_utils import parse_month
from ..common.web import api_view, current_user, login_required, parse_amount, parse_int, request_json
from ..container import Container
from ..core.exceptions import AuthorizationError, ValidationError
from .service import PayrollAdjustments


def _parse_request() -> tuple[int, date, PayrollAdjustments]:
    data = request_json()
    try:
        month = parse_month(data.get("month", ""))
    except ValueError:
        raise ValidationError("month must look like YYYY-MM")

    adjustments = PayrollAdjustments(
        incentives=parse_amount(data.get("incentives"), "incentives"),
        bonus=parse_amount(data.get("bonus"), "bonus"),
        allowances=parse_amount(data.get("allowances"), "allowances"),
        advances=parse_amount(data.get("advances"), "advances"),
        other_deductions=parse_amount(data.get("other_deductions"), "other_deductions"),
    )
    return parse_int(data.get("employee_id"), "employee_id"), month, adjustments


def register(app: Flask, container: Container) -> None:
    def _require_super_admin():
        user = current_user()
        if not user.is_super_admin:
            raise AuthorizationError("Only Super Admin can manage payroll")
        return user

    @app.route("/api/payroll/preview", methods=["POST"], endpoint="payroll_preview")
    @login_required
    @api_view
    def payroll_preview():
        _require_super_admin()
        employee_id, month, adjustments = _parse_request()
        result = container.payroll_service.preview(employee_id, month, adjustments)
        return jsonify(
            {
                "success": True,
                "working_days": result.working_days,
                "summary": asdict(result.summary),
                "breakdown": result.breakdown.to_record(),
            }
        )

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    @login_required
    @api_view
    def payroll_generate():
        user = _require_super_admin()
        employee_id, month, adjustments = _parse_request()
        payroll_id = container.payroll_service.generate(
            actor=user,
            employee_id=employee_id,
            month=month,
            outlet_id=request_json().get("outlet_id"),
            adjustments=adjustments,
        )
        return jsonify({"success": True, "payroll_id": payroll_id}), 201

    @app.route("/api/payroll/<int:payroll_id>/lock", methods=["POST"], endpoint="payroll_lock")
    @login_required
    @api_view
    def payroll_lock(payroll_id: int):
        container.payroll_service.set_locked(
            actor=current_user(), payroll_id=payroll_id, locked=True, reason=request_json().get("reason")
        )
        return jsonify({"success": True})

    @app.route("/api/payroll/<int:payroll_id>/unlock", methods=["POST"], endpoint="payroll_unlock")
    @login_required
    @api_view
    def payroll_unlock(payroll_id: int):
        container.payroll_service.set_locked(
            actor=current_user(), payroll_id=payroll_id, locked=False, reason=request_json().get("reason")
        )
        return jsonify({"success": True})
