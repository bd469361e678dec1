from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_instant
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _user_id() -> str:
        body = request.get_json(silent=True) or {}
        user_id = str(body.get("userId") or request.args.get("userId") or "").strip()
        if not user_id:
            raise ValidationError("userId is required")
        return user_id

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="checkin")
    def checkin():
        record = container.attendance_service.check_in(_user_id())
        return jsonify({"success": True, "message": "Checked in", "record": record.to_dict()}), 200

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="checkout")
    def checkout():
        record = container.attendance_service.check_out(_user_id())
        return jsonify({"success": True, "message": "Checked out", "record": record.to_dict()}), 200

    @app.route("/api/attendance/<record_id>", methods=["PATCH"], endpoint="correct_attendance")
    def correct_attendance(record_id: str):
        body = request.get_json(silent=True) or {}
        check_in = parse_instant(body.get("checkIn")) if body.get("checkIn") else None
        check_out = parse_instant(body.get("checkOut")) if body.get("checkOut") else None
        if body.get("checkIn") and check_in is None or body.get("checkOut") and check_out is None:
            raise ValidationError("Invalid timestamp")
        record = container.attendance_service.correct_record(record_id, check_in=check_in, check_out=check_out)
        return jsonify({"success": True, "record": record.to_dict()}), 200

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    def attendance_history():
        limit = request.args.get("limit", default=30, type=int)
        rows = container.attendance_service.get_history_ui(_user_id(), limit=limit)
        return jsonify({"success": True, "items": rows}), 200

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="monthly_report")
    def monthly_report():
        month = request.args.get("month") or ""
        if not month:
            raise ValidationError("month is required (YYYY-MM)")
        report = container.payroll_report_service.build_month_report(_user_id(), month)
        return jsonify({"success": True, "rows": report.rows, "summary": report.summary}), 200

    @app.route("/api/payroll/payslip", methods=["GET"], endpoint="payslip")
    def payslip():
        month = request.args.get("month") or ""
        if not month:
            raise ValidationError("month is required (YYYY-MM)")
        summary = container.payroll_report_service.payslip(_user_id(), month)
        return jsonify({"success": True, "payslip": summary.to_dict()}), 200

    @app.route("/api/payroll/weekly-overtime", methods=["GET"], endpoint="weekly_overtime")
    def weekly_overtime():
        hours = container.payroll_report_service.weekly_overtime(_user_id())
        return jsonify({"success": True, "overtimeHours": round(hours, 2)}), 200

    @app.route("/api/attendance/reconcile", methods=["POST"], endpoint="reconcile")
    def reconcile():
        result = container.reconciliation_service.run()
        return jsonify({"success": True, "changed": result.changed, "count": len(result.records)}), 200

    @app.route("/api/attendance/absences", methods=["POST"], endpoint="mark_absences")
    def mark_absences():
        result = container.absence_service.mark_absences()
        return jsonify({"success": True, "changed": result.changed, "count": len(result.records)}), 200
