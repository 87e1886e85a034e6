from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.web import api_view, current_user, request_json
from ..container import Container
from ..security.geo import client_ip, resolve_geo

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @api_view
    def login():
        data = request_json()
        s_user = container.auth_service.authenticate(data.get("identifier", ""), data.get("password", ""))

        ip = client_ip(request.headers, request.remote_addr)
        geo = resolve_geo(request.headers, ip, default=container.default_geo, now=now_local())
        session_id, assessment = container.login_security_service.record_login(
            user_id=s_user.employee_id,
            geo=geo,
            ip_address=ip,
            device_info=data.get("device_info"),
            user_agent=request.headers.get("User-Agent"),
        )

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        session["employee_id"] = s_user.employee_id
        session["name"] = s_user.name
        session["role"] = s_user.role
        session["outlet_id"] = s_user.outlet_id
        session["auth_session_id"] = session_id

        logger.info("Employee %s logged in from %s (risk=%s)", s_user.employee_id, ip, assessment.level.value)
        return jsonify(
            {
                "success": True,
                "employee_id": s_user.employee_id,
                "name": s_user.name,
                "role": s_user.role,
                "session_id": session_id,
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    @api_view
    def logout():
        auth_session_id = session.get("auth_session_id")
        if current_user() is not None and auth_session_id:
            container.login_security_service.end_session(int(auth_session_id))
        session.clear()
        return jsonify({"success": True})
