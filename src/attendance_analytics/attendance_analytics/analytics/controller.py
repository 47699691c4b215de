from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance-calculations", methods=["POST"], endpoint="attendance_calculations")
    def attendance_calculations():
        payload = request.get_json(silent=True)
        response = container.dispatcher.dispatch(payload)
        return jsonify(response.as_dict()), response.status_code

    @app.route("/api/attendance-calculations/health", methods=["GET"], endpoint="attendance_calculations_health")
    def attendance_calculations_health():
        return jsonify({"success": True, "dataSource": container.data_source})
