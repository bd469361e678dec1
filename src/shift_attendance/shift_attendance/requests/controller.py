from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date_or_none
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _body() -> dict:
        return request.get_json(silent=True) or {}

    def _actor_role():
        actor = container.users_repo.get_by_id(str(_body().get("actorId") or ""))
        if not actor or actor.role is None:
            raise AuthorizationError("Unknown actor")
        return actor.role

    @app.route("/api/leaves", methods=["POST"], endpoint="create_leave")
    def create_leave():
        body = _body()
        start = parse_iso_date_or_none(body.get("startDate"))
        end = parse_iso_date_or_none(body.get("endDate"))
        if start is None or end is None:
            raise ValidationError("startDate and endDate are required (YYYY-MM-DD)")
        leave = container.request_service.create_leave(
            user_id=str(body.get("userId") or ""),
            start_date=start,
            end_date=end,
            reason=str(body.get("reason") or ""),
        )
        return jsonify({"success": True, "message": "Leave submitted", "leave": leave.to_dict()}), 201

    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    def list_leaves():
        user_id = request.args.get("userId")
        leaves = (
            container.request_service.list_for_user(user_id=user_id)
            if user_id
            else container.request_service.list_pending()
        )
        return jsonify({"success": True, "items": [l.to_dict() for l in leaves]}), 200

    @app.route("/api/leaves/<leave_id>/approve", methods=["POST"], endpoint="approve_leave")
    def approve_leave(leave_id: str):
        leave = container.request_service.approve_leave(current_role=_actor_role(), leave_id=leave_id)
        return jsonify({"success": True, "message": "Leave approved", "leave": leave.to_dict()}), 200

    @app.route("/api/leaves/<leave_id>/reject", methods=["POST"], endpoint="reject_leave")
    def reject_leave(leave_id: str):
        leave = container.request_service.reject_leave(current_role=_actor_role(), leave_id=leave_id)
        return jsonify({"success": True, "message": "Leave rejected", "leave": leave.to_dict()}), 200

    @app.route("/api/leaves/<leave_id>/cancel", methods=["POST"], endpoint="cancel_leave")
    def cancel_leave(leave_id: str):
        leave = container.request_service.cancel_leave(user_id=str(_body().get("userId") or ""), leave_id=leave_id)
        return jsonify({"success": True, "message": "Leave cancelled", "leave": leave.to_dict()}), 200

    @app.route("/api/wfh", methods=["POST"], endpoint="create_wfh")
    def create_wfh():
        body = _body()
        start = parse_iso_date_or_none(body.get("startDate"))
        end = parse_iso_date_or_none(body.get("endDate"))
        if start is None or end is None:
            raise ValidationError("startDate and endDate are required (YYYY-MM-DD)")
        wfh = container.wfh_service.create_request(
            user_id=str(body.get("userId") or ""),
            start_date=start,
            end_date=end,
            reason=str(body.get("reason") or ""),
        )
        return jsonify({"success": True, "message": "WFH request submitted", "request": wfh.to_dict()}), 201

    @app.route("/api/wfh", methods=["GET"], endpoint="list_wfh")
    def list_wfh():
        user_id = request.args.get("userId")
        items = container.wfh_service.list_for_user(user_id=user_id) if user_id else container.wfh_service.list_pending()
        return jsonify({"success": True, "items": [w.to_dict() for w in items]}), 200

    @app.route("/api/wfh/<request_id>/approve", methods=["POST"], endpoint="approve_wfh")
    def approve_wfh(request_id: str):
        wfh = container.wfh_service.approve_request(current_role=_actor_role(), request_id=request_id)
        return jsonify({"success": True, "message": "WFH request approved", "request": wfh.to_dict()}), 200

    @app.route("/api/wfh/<request_id>/reject", methods=["POST"], endpoint="reject_wfh")
    def reject_wfh(request_id: str):
        wfh = container.wfh_service.reject_request(current_role=_actor_role(), request_id=request_id)
        return jsonify({"success": True, "message": "WFH request rejected", "request": wfh.to_dict()}), 200
