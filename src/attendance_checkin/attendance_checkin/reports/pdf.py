from __future__ import annotations

import base64
import binascii
import io
import logging
from typing import Optional

from PIL import Image as PILImage, UnidentifiedImageError
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..core.constants import DISPLAY_DATETIME_FORMAT, EXPORT_COLUMNS
from .service import ExportReport

logger = logging.getLogger(__name__)

PDF_MIMETYPE = "application/pdf"

SIGNATURE_WIDTH = 25 * mm
SIGNATURE_HEIGHT = 16 * mm
COLUMN_WIDTHS = [38 * mm, 45 * mm, 35 * mm, 35 * mm, 27 * mm]


def decode_signature(data: str) -> Optional[bytes]:
    """Return PNG bytes for a signature data URL, or None if it cannot be read.

    Transparent canvas strokes are flattened onto white.
    """
    payload = data.split(",", 1)[1] if data.startswith("data:") and "," in data else data
    try:
        raw = base64.b64decode(payload, validate=True)
        with PILImage.open(io.BytesIO(raw)) as img:
            rgba = img.convert("RGBA")
    except (binascii.Error, ValueError, UnidentifiedImageError, OSError) as e:
        logger.warning("Skipping unreadable signature image: %s", e)
        return None

    flat = PILImage.new("RGB", rgba.size, (255, 255, 255))
    flat.paste(rgba, mask=rgba.split()[3])
    out = io.BytesIO()
    flat.save(out, format="PNG")
    return out.getvalue()


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _para(text: str, style) -> Paragraph:
    return Paragraph(_escape(text), style)


def render_pdf(report: ExportReport) -> io.BytesIO:
    styles = getSampleStyleSheet()
    body = styles["BodyText"]
    body.fontSize = 9
    body.leading = 10.5

    out = io.BytesIO()
    doc = SimpleDocTemplate(
        out,
        pagesize=A4,
        leftMargin=15 * mm, rightMargin=15 * mm, topMargin=15 * mm, bottomMargin=15 * mm,
        title=report.title,
    )

    content = [
        Paragraph(_escape(report.title), styles["Title"]),
        Paragraph(f"Generated: {report.generated_at.astimezone(report.tz).strftime(DISPLAY_DATETIME_FORMAT)}", body),
        Spacer(1, 8),
    ]

    header = [_para(h, body) for h in (*EXPORT_COLUMNS, "Signature")]
    data = [header]
    for record in report.records:
        signature = decode_signature(record.signature_data)
        data.append([
            _para(report.format_datetime(record.date_time), body),
            _para(record.name, body),
            _para(record.company, body),
            _para(record.supervisor, body),
            Image(io.BytesIO(signature), width=SIGNATURE_WIDTH, height=SIGNATURE_HEIGHT) if signature else "",
        ])

    table = Table(data, repeatRows=1, colWidths=COLUMN_WIDTHS, hAlign="LEFT")
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.whitesmoke, colors.white]),
    ]))
    content.append(table)

    doc.build(content)
    out.seek(0)
    return out
