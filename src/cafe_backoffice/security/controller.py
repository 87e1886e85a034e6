from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import api_view, current_user, login_required, parse_int, request_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/security/force-logout", methods=["POST"], endpoint="force_logout")
    @login_required
    @api_view
    def force_logout():
        session_id = parse_int(request_json().get("session_id"), "session_id")
        container.login_security_service.force_logout(actor=current_user(), session_id=session_id)
        return jsonify({"success": True})
