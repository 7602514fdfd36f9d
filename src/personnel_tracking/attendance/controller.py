from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_user, login_required
from ..common.http import json_body
from ..common.serialization import to_json, to_json_list
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.get("/api/attendance", endpoint="list_attendance")
    @login_required
    def list_attendance():
        records = container.attendance_service.list_attendance(
            personnel_id=request.args.get("personnelId"),
            start_date=request.args.get("startDate"),
            end_date=request.args.get("endDate"),
        )
        return jsonify(to_json_list(records))

    @app.get("/api/attendance/today", endpoint="today_attendance")
    @login_required
    def today_attendance():
        return jsonify(to_json_list(container.attendance_service.list_today()))

    @app.get("/api/attendance/summary", endpoint="attendance_summary")
    @login_required
    def attendance_summary():
        return jsonify(container.attendance_service.summary(request.args.get("date")).to_json())

    @app.post("/api/attendance", endpoint="create_attendance")
    @login_required
    def create_attendance():
        record = container.attendance_service.record_attendance(request.get_json(silent=True), user=current_user())
        return jsonify(to_json(record)), 201

    @app.post("/api/qr-scan", endpoint="qr_scan")
    @login_required
    def qr_scan():
        data = json_body()
        result = container.attendance_service.scan_qr(data.get("qrCode"), user=current_user())
        return jsonify(result.to_json())
