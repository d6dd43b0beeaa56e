from __future__ import annotations

import csv
import hmac
import io
import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import Flask, Request, current_app, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.constants import FALLBACK_CLIENT_IP
from ..core.exceptions import NotFoundError, StorageError, ValidationError
from ..reports.service import CSV_FIELDS

logger = logging.getLogger(__name__)


def resolve_client_ip(req: Request) -> str:
    """Client address as seen by the edge proxy, falling back to the socket peer."""
    cf_ip = (req.headers.get("CF-Connecting-IP") or "").strip()
    if cf_ip:
        return cf_ip

    forwarded_for = req.headers.get("X-Forwarded-For") or ""
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop

    return req.remote_addr or FALLBACK_CLIENT_IP


def register(app: Flask, container: Container) -> None:
    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            expected = current_app.config.get("ADMIN_API_TOKEN")
            if not expected:
                logger.error("ADMIN_API_TOKEN is not set; refusing %s", request.path)
                return jsonify({"error": "Admin token is not configured"}), 500

            auth_header = request.headers.get("Authorization") or ""
            scheme, _, token = auth_header.partition(" ")
            token = token.strip()
            if scheme != "Bearer" or not token:
                return jsonify({"error": "No authentication token provided"}), 401
            if not hmac.compare_digest(token.encode("utf-8"), str(expected).encode("utf-8")):
                return jsonify({"error": "Invalid token"}), 401
            return view(*args, **kwargs)

        return wrapper

    def _parse_date_arg(name: str) -> Optional[date]:
        value = (request.args.get(name) or "").strip()
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"Invalid {name} format. Use YYYY-MM-DD")

    def _report_filters() -> dict:
        employee_id = (request.args.get("employee_id") or "").strip()
        return {
            "start": _parse_date_arg("start_date"),
            "end": _parse_date_arg("end_date"),
            "employee_id": employee_id if employee_id and employee_id != "all" else None,
        }

    def _write_report_csv(*, data, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/checkins", methods=["POST"], endpoint="record_checkin")
    @app.route("/api/checkins/record", methods=["POST"], endpoint="record_checkin")
    def record_checkin():
        payload = request.get_json(silent=True)
        employee_id = payload.get("employeeId") if isinstance(payload, dict) else None

        try:
            outcome = container.checkin_service.check_in(
                employee_id,
                client_ip=resolve_client_ip(request),
                user_agent=request.headers.get("User-Agent", ""),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except StorageError as e:
            return jsonify({"error": "Failed to record check-in", "details": str(e)}), 500
        except Exception as e:
            logger.exception("Unexpected error while recording check-in")
            return jsonify({"error": "Failed to record check-in", "details": str(e)}), 500

        if not outcome.created:
            return jsonify({"status": outcome.status.value, "checkin": outcome.checkin.to_dict()}), 200

        return jsonify({
            "status": outcome.status.value,
            "checkin": outcome.checkin.to_dict(),
            "lateStatus": outcome.lateness.to_dict(),
            "exemptionApplied": outcome.exemption_applied,
            "mealAllowance": outcome.meal_allowance,
            "isShopWifi": bool(outcome.is_shop_wifi),
        }), 201

    @app.route("/api/checkins/all", methods=["GET"], endpoint="list_checkins")
    @admin_required
    def list_checkins():
        try:
            rows = container.report_service.list_checkins(**_report_filters())
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except StorageError as e:
            return jsonify({"error": "Failed to fetch all check-in records", "details": str(e)}), 500
        return jsonify(rows), 200

    @app.route("/api/checkins/all.csv", methods=["GET"], endpoint="export_checkins_csv")
    @admin_required
    def export_checkins_csv():
        try:
            filters = _report_filters()
            data = container.report_service.build_report(**filters)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except StorageError as e:
            return jsonify({"error": "Failed to export check-in records", "details": str(e)}), 500

        start = filters["start"].isoformat() if filters["start"] else "all"
        end = filters["end"].isoformat() if filters["end"] else "all"
        return _write_report_csv(data=data, filename=f"checkins_{start}_{end}.csv")

    @app.route("/api/checkins/summary", methods=["GET"], endpoint="checkin_summary")
    @admin_required
    def checkin_summary():
        try:
            data = container.report_service.build_report(**_report_filters())
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except StorageError as e:
            return jsonify({"error": "Failed to build check-in summary", "details": str(e)}), 500
        return jsonify({"summary": data.summary}), 200
