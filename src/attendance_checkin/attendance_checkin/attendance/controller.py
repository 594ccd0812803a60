from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _error(message: str, exc: Exception, status: int):
    return jsonify({"message": message, "error": str(exc)}), status


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_create")
    def attendance_create():
        try:
            record = service.check_in(request.get_json(silent=True))
        except ValidationError as e:
            logger.info("Rejected attendance submission: %s", e)
            return _error("Invalid attendance record data", e, 400)
        except Exception as e:
            logger.exception("Error creating attendance record")
            return _error("Failed to create attendance record", e, 500)
        return jsonify(record.to_json()), 201

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        try:
            records = service.list_records()
        except Exception as e:
            logger.exception("Error fetching attendance records")
            return _error("Failed to fetch attendance records", e, 500)
        return jsonify([r.to_json() for r in records])

    @app.route("/api/attendance/by-date/<day>", methods=["GET"], endpoint="attendance_by_date")
    def attendance_by_date(day: str):
        try:
            records = service.list_records_by_date(day)
        except ValidationError as e:
            return _error("Invalid date", e, 400)
        except Exception as e:
            logger.exception("Error fetching attendance records by date")
            return _error("Failed to fetch attendance records by date", e, 500)
        return jsonify([r.to_json() for r in records])

    @app.route("/api/attendance/options", methods=["GET"], endpoint="attendance_options")
    def attendance_options():
        return jsonify(service.form_options().to_json())
