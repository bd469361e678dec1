from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="list_notifications")
    def list_notifications():
        user_id = request.args.get("userId") or ""
        if not user_id:
            raise ValidationError("userId is required")
        data = container.notification_service.list_for_user(user_id)
        return jsonify({"success": True, **data}), 200

    @app.route("/api/notifications/<notification_id>/read", methods=["POST"], endpoint="read_notification")
    def read_notification(notification_id: str):
        container.notification_service.mark_read(notification_id)
        return jsonify({"success": True}), 200

    @app.route("/api/notifications/read-all", methods=["POST"], endpoint="read_all_notifications")
    def read_all_notifications():
        user_id = str((request.get_json(silent=True) or {}).get("userId") or "")
        if not user_id:
            raise ValidationError("userId is required")
        container.notification_service.mark_all_read(user_id)
        return jsonify({"success": True}), 200

    @app.route("/api/notifications/refresh", methods=["POST"], endpoint="refresh_notifications")
    def refresh_notifications():
        count = container.notification_service.refresh_profile_notices(
            container.users_repo.list_all(), container.users_repo.list_profiles()
        )
        return jsonify({"success": True, "active": count}), 200
