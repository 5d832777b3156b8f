from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import (
    AuthorizationError,
    FetchError,
    NotFoundError,
    SaveError,
    SaveInProgressError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MONTH_URL = "/api/employees/<employee_id>/attendance/<int:year>/<int:month>"


def register(app: Flask, container: Container) -> None:
    def api_errors(view):
        """Map domain errors to JSON responses with a `message` field."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"message": str(e)}), 400
            except AuthorizationError as e:
                return jsonify({"message": str(e) or "Akses ditolak"}), 403
            except NotFoundError as e:
                return jsonify({"message": str(e) or "Data tidak ditemukan"}), 404
            except SaveInProgressError as e:
                return jsonify({"message": str(e)}), 409
            except (SaveError, FetchError) as e:
                return jsonify({"message": str(e)}), 502
            except Exception:
                logger.exception("Unhandled error in %s", request.path)
                return jsonify({"message": "Terjadi kesalahan sistem"}), 500

        return wrapper

    def _store_id(body: dict | None = None):
        value = request.args.get("store_id")
        if value is None and body:
            value = body.get("storeId")
        if value in (None, ""):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError("store_id tidak valid")

    @app.route(MONTH_URL, methods=["GET"], endpoint="attendance_month")
    @api_errors
    def attendance_month(employee_id: str, year: int, month: int):
        payload = container.attendance_service.get_month_payload(
            employee_id, year, month, store_id=_store_id()
        )
        return jsonify(payload)

    @app.route(MONTH_URL, methods=["PUT"], endpoint="attendance_month_save")
    @api_errors
    def attendance_month_save(employee_id: str, year: int, month: int):
        body = request.get_json(silent=True)
        if not isinstance(body, dict) or "attendanceData" not in body:
            raise ValidationError("Body harus berisi attendanceData")

        payload = container.attendance_service.replace_month(
            employee_id,
            year,
            month,
            body["attendanceData"],
            store_id=_store_id(body),
        )
        payload["message"] = "Data absensi berhasil disimpan"
        return jsonify(payload)

    @app.route(MONTH_URL + "/export.csv", methods=["GET"], endpoint="attendance_month_csv")
    @api_errors
    def attendance_month_csv(employee_id: str, year: int, month: int):
        filename, text = container.attendance_service.export_month(
            employee_id, year, month, store_id=_store_id()
        )
        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/shifts/detect", methods=["GET"], endpoint="shift_detect")
    @api_errors
    def shift_detect():
        check_in = request.args.get("check_in", "")
        shift = container.attendance_service.detect_shift(check_in, store_shifts=request.args.get("shifts"))
        return jsonify({"checkIn": check_in, "shift": shift})
