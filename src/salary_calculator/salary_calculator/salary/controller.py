from __future__ import annotations

import io
import logging
import uuid
from functools import wraps

from flask import Flask, jsonify, request, send_file, session

from ..common.validators import require_extension
from ..core.exceptions import NotFoundError, ValidationError, UploadError
from ..container import Container

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".xlsx", ".xlsm")


def register(app: Flask, container: Container) -> None:
    service = container.workspace_service

    def current_workspace_id() -> str:
        if "workspace_id" not in session:
            session["workspace_id"] = uuid.uuid4().hex
        return session["workspace_id"]

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except NotFoundError as e:
                return jsonify({"success": False, "message": str(e)}), 404
            except (ValidationError, UploadError) as e:
                return jsonify({"success": False, "message": str(e)}), 400
            except Exception:
                logger.exception("Unhandled error in %s", view.__name__)
                return jsonify({"success": False, "message": "Internal error"}), 500

        return wrapper

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/salary/upload", methods=["POST"], endpoint="salary_upload")
    @json_errors
    def upload():
        file = request.files.get("file")
        if file is None:
            raise ValidationError("No file uploaded")
        filename = require_extension(file.filename or "", ALLOWED_EXTENSIONS)

        sheet = service.upload(current_workspace_id(), filename, io.BytesIO(file.read()))
        salaries = service.list_employees(current_workspace_id())
        return jsonify(
            {
                "success": True,
                "filename": sheet.filename,
                "month": sheet.period.month,
                "year": sheet.period.year,
                "days_in_month": sheet.days_in_month,
                "employees": [service.employee_row(s, with_days=False) for s in salaries],
            }
        )

    @app.route("/api/salary/employees", endpoint="salary_employees")
    @json_errors
    def employees():
        salaries = service.list_employees(current_workspace_id(), request.args.get("q", ""))
        return jsonify({"success": True, "employees": [service.employee_row(s, with_days=False) for s in salaries]})

    @app.route("/api/salary/employees/<employee_id>", endpoint="salary_employee")
    @json_errors
    def employee(employee_id: str):
        salary = service.get_employee(current_workspace_id(), employee_id)
        return jsonify({"success": True, "employee": service.employee_row(salary)})

    @app.route(
        "/api/salary/employees/<employee_id>/buffer/<int:day>",
        methods=["POST"],
        endpoint="salary_toggle_buffer",
    )
    @json_errors
    def toggle_buffer(employee_id: str, day: int):
        salary = service.toggle_buffer_day(current_workspace_id(), employee_id, day)
        return jsonify({"success": True, "employee": service.employee_row(salary)})

    @app.route("/api/salary/employees/<employee_id>/export", endpoint="salary_export_employee")
    @json_errors
    def export_employee(employee_id: str):
        out = service.export_employee(current_workspace_id(), employee_id)
        return send_file(io.BytesIO(out.content), mimetype=out.mimetype, as_attachment=True, download_name=out.filename)

    @app.route("/api/salary/export", endpoint="salary_export_all")
    @json_errors
    def export_all():
        out = service.export_all(current_workspace_id())
        return send_file(io.BytesIO(out.content), mimetype=out.mimetype, as_attachment=True, download_name=out.filename)

    @app.route("/api/salary/reset", methods=["POST"], endpoint="salary_reset")
    @json_errors
    def reset():
        service.reset(current_workspace_id())
        session.pop("workspace_id", None)
        return jsonify({"success": True})
