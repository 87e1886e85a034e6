from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import api_view, current_user, login_required, parse_int
from ..container import Container
from ..core.enums import AuditAction
from ..core.exceptions import AuthorizationError, ValidationError
from .service import format_audit_log


def register(app: Flask, container: Container) -> None:
    @app.route("/api/audit/recent", methods=["GET"], endpoint="audit_recent")
    @login_required
    @api_view
    def audit_recent():
        user = current_user()
        if not user.is_super_admin:
            raise AuthorizationError("Only Super Admin can view audit logs")

        outlet_id = parse_int(request.args.get("outlet_id", user.outlet_id), "outlet_id")
        limit = parse_int(request.args.get("limit", 100), "limit")
        action = None
        if request.args.get("action"):
            try:
                action = AuditAction(request.args["action"])
            except ValueError:
                raise ValidationError("Unknown audit action")

        logs = container.audit_logger.recent(outlet_id=outlet_id, limit=limit, action=action)
        return jsonify(
            {
                "success": True,
                "logs": [
                    {
                        "id": log.log_id,
                        "action": log.action,
                        "entity_type": log.entity_type,
                        "entity_id": log.entity_id,
                        "timestamp": log.timestamp.isoformat(),
                        "performed_by": log.performed_by_name,
                        "text": format_audit_log(log),
                    }
                    for log in logs
                ],
            }
        )
