"""Spreadsheet and PDF reports over a list of inventory records.

Both renderers are pure: the same records and the same ``generated_at``
give the same report content.
"""
import io
import os
from collections.abc import Sequence
from datetime import date, datetime, timezone

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from inventory_app.config import settings
from inventory_app.schemas.inventory import InventoryRecord
from inventory_app.services.report_service import inventory_summary

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"

NO_IMAGE = "No image"
HAS_IMAGE_GLYPH = "✓"  # check mark
NO_IMAGE_GLYPH = "✗"  # ballot x

INVENTORY_SHEET = "Inventory"
SUMMARY_SHEET = "Summary"
INVENTORY_COLUMNS = ["ID", "Description", "Status", "Warehouse", "Image URL", "Created", "Updated"]
INVENTORY_WIDTHS = [20, 40, 15, 20, 50, 15, 15]
SUMMARY_COLUMNS = ["Metric", "Value"]
SUMMARY_WIDTHS = [25, 30]

PDF_TITLE = "Inventory Report"
PDF_COLUMNS = ["ID", "Description", "Status", "Warehouse", "Img", "Created"]
PDF_COL_WIDTHS = [20 * mm, 55 * mm, 20 * mm, 35 * mm, 15 * mm, 25 * mm]
ID_CHARS = 8
DESCRIPTION_CHARS = 35
HEADER_BLUE = colors.Color(59 / 255, 130 / 255, 246 / 255)
ROW_GRAY = colors.Color(249 / 255, 250 / 255, 251 / 255)

# TrueType fonts that carry the check/cross glyphs
GLYPH_FONT_NAME = "DejaVuSans"
GLYPH_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
]
# Fallback: the same glyphs in the built-in ZapfDingbats encoding
DINGBATS = {HAS_IMAGE_GLYPH: "4", NO_IMAGE_GLYPH: "8"}


def export_filename(ext: str, today: date | None = None, name: str | None = None) -> str:
    today = today or date.today()
    return f"{name or settings.EXPORT_BASENAME}_{today:%Y-%m-%d}.{ext}"


def truncate(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def _fmt_date(value: datetime) -> str:
    """Render a stored timestamp (naive UTC) as a local calendar date."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone().strftime(settings.DATE_FORMAT)


# --- Spreadsheet ---

def inventory_rows(records: Sequence[InventoryRecord]) -> list[list]:
    return [
        [
            r.id,
            r.description,
            r.status.label,
            r.warehouse.label,
            r.image_url or NO_IMAGE,
            _fmt_date(r.created_at),
            _fmt_date(r.updated_at),
        ]
        for r in records
    ]


def summary_rows(records: Sequence[InventoryRecord], generated_at: datetime) -> list[list]:
    stats = inventory_summary(records)
    return [
        ["Total items", stats.total],
        ["New items", stats.new],
        ["Used items", stats.used],
        ["Items with image", stats.with_image],
        ["Items without image", stats.without_image],
        ["Export date", generated_at.strftime(settings.DATETIME_FORMAT)],
    ]


def _write_sheet(ws, columns: list[str], widths: list[int], rows: list[list]) -> None:
    ws.append(columns)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in rows:
        ws.append(row)
    for idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width


def build_workbook(records: Sequence[InventoryRecord], generated_at: datetime | None = None) -> Workbook:
    generated_at = generated_at or datetime.now()
    wb = Workbook()
    ws = wb.active
    ws.title = INVENTORY_SHEET
    _write_sheet(ws, INVENTORY_COLUMNS, INVENTORY_WIDTHS, inventory_rows(records))

    summary = wb.create_sheet(SUMMARY_SHEET)
    _write_sheet(summary, SUMMARY_COLUMNS, SUMMARY_WIDTHS, summary_rows(records, generated_at))

    wb.properties.created = generated_at
    wb.properties.modified = generated_at
    return wb


def export_xlsx(records: Sequence[InventoryRecord], generated_at: datetime | None = None) -> bytes:
    buf = io.BytesIO()
    build_workbook(records, generated_at).save(buf)
    return buf.getvalue()


# --- PDF ---

def pdf_rows(records: Sequence[InventoryRecord]) -> list[list[str]]:
    return [
        [
            r.id[:ID_CHARS] + "...",
            truncate(r.description, DESCRIPTION_CHARS),
            r.status.label,
            r.warehouse.label,
            HAS_IMAGE_GLYPH if r.has_image else NO_IMAGE_GLYPH,
            _fmt_date(r.created_at),
        ]
        for r in records
    ]


def pdf_header_lines(records: Sequence[InventoryRecord], generated_at: datetime) -> list[str]:
    stats = inventory_summary(records)
    return [
        f"Date: {generated_at.strftime(settings.DATE_FORMAT)}",
        f"Total: {stats.total} items",
        f"New: {stats.new} | Used: {stats.used} | With image: {stats.with_image}",
    ]


def _glyph_font() -> str | None:
    """Register a TrueType font with check/cross glyphs, if the system has one."""
    if GLYPH_FONT_NAME in pdfmetrics.getRegisteredFontNames():
        return GLYPH_FONT_NAME
    for fp in GLYPH_FONT_PATHS:
        if os.path.exists(fp):
            pdfmetrics.registerFont(TTFont(GLYPH_FONT_NAME, fp))
            return GLYPH_FONT_NAME
    return None


def _table_style(row_count: int, glyph_font: str) -> TableStyle:
    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BLUE),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ("ALIGN", (0, 0), (0, -1), "CENTER"),
        ("ALIGN", (2, 0), (2, -1), "CENTER"),
        ("ALIGN", (4, 0), (5, -1), "CENTER"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
    ]
    if row_count:
        commands += [
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, ROW_GRAY]),
            ("FONTNAME", (4, 1), (4, -1), glyph_font),
        ]
    return TableStyle(commands)


def export_pdf(records: Sequence[InventoryRecord], generated_at: datetime | None = None) -> bytes:
    generated_at = generated_at or datetime.now()
    rows = pdf_rows(records)

    glyph_font = _glyph_font()
    if glyph_font is None:
        glyph_font = "ZapfDingbats"
        for row in rows:
            row[4] = DINGBATS[row[4]]

    styles = getSampleStyleSheet()
    small = ParagraphStyle("Small", parent=styles["Normal"], fontSize=10)
    header = pdf_header_lines(records, generated_at)

    story = [
        Paragraph(PDF_TITLE, styles["Title"]),
        Paragraph(header[0], styles["Normal"]),
        Paragraph(header[1], styles["Normal"]),
        Paragraph(header[2], small),
        Spacer(1, 6 * mm),
    ]
    table = Table([PDF_COLUMNS] + rows, colWidths=PDF_COL_WIDTHS, repeatRows=1)
    table.setStyle(_table_style(len(rows), glyph_font))
    story.append(table)

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=14 * mm,
        rightMargin=14 * mm,
        topMargin=14 * mm,
        bottomMargin=14 * mm,
        title=PDF_TITLE,
        invariant=True,
    )
    doc.build(story)
    return buf.getvalue()
