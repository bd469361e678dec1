from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from .model import EmployeeProfile, User


def _public(user: User) -> dict:
    data = user.to_dict()
    data.pop("password", None)
    data.pop("pin", None)
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    def list_users():
        return jsonify({"success": True, "items": [_public(u) for u in container.user_service.list_users()]}), 200

    @app.route("/api/users", methods=["POST"], endpoint="upsert_user")
    def upsert_user():
        user = container.user_service.upsert_user(User.from_dict(request.get_json(silent=True) or {}))
        return jsonify({"success": True, "user": _public(user)}), 200

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    def delete_user(user_id: str):
        removed = container.user_service.delete_user(user_id)
        return jsonify({"success": True, "removedRecords": removed}), 200

    @app.route("/api/users/<user_id>/profile", methods=["PUT"], endpoint="save_profile")
    def save_profile(user_id: str):
        body = dict(request.get_json(silent=True) or {}, userId=user_id)
        profile = container.user_service.save_profile(EmployeeProfile.from_dict(body))
        return jsonify({"success": True, "profile": profile.to_dict()}), 200
