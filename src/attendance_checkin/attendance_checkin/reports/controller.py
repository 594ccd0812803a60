from __future__ import annotations

import logging

from flask import Flask, jsonify, send_file

from ..container import Container
from ..core.exceptions import ValidationError
from .excel import XLSX_MIMETYPE, render_excel
from .pdf import PDF_MIMETYPE, render_pdf

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _export(label: str, render, extension: str, mimetype: str):
        try:
            report = reports.build(label)
            buf = render(report)
        except ValidationError as e:
            return jsonify({"message": "Invalid export request", "error": str(e)}), 400
        except Exception as e:
            logger.exception("Error exporting attendance report %s", label)
            return jsonify({"message": "Failed to export attendance records", "error": str(e)}), 500
        logger.info("Exported %d records to %s", len(report.records), report.filename(extension))
        return send_file(buf, mimetype=mimetype, as_attachment=True, download_name=report.filename(extension))

    @app.route("/api/attendance/export/<label>.xlsx", methods=["GET"], endpoint="attendance_export_xlsx")
    def attendance_export_xlsx(label: str):
        return _export(label, render_excel, "xlsx", XLSX_MIMETYPE)

    @app.route("/api/attendance/export/<label>.pdf", methods=["GET"], endpoint="attendance_export_pdf")
    def attendance_export_pdf(label: str):
        return _export(label, render_pdf, "pdf", PDF_MIMETYPE)
