# emissions/services/certificate_renderer.py
"""
Certificate PDF renderer.

Draws the fixed one-page A4 emissions certificate with ReportLab:
  - header, certificate number and PASS/FAIL badge
  - test date and expiry date
  - vehicle and owner details
  - per-pollutant results table and overall result
  - verification QR code (decoded from the stored data URL)
  - official stamp box and validity footer

Layout coordinates are in millimetres from the top-left corner of the page.
Fails closed: any problem raises RenderError and no partial document is returned.
"""

from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from emissions.config import settings
from emissions.exceptions import RenderError
from emissions.services.emission_evaluator import PASS, pollutant_breakdown
from emissions.services.qr_payload import decode_qr_data_url
from emissions.utils.logger import get_logger

logger = get_logger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 20  # mm
LINE_HEIGHT = 8  # mm

COLOR_PASS = colors.Color(34 / 255, 197 / 255, 94 / 255)
COLOR_FAIL = colors.Color(239 / 255, 68 / 255, 68 / 255)

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"


def certificate_filename(certificate_number: str) -> str:
    return f"Certificate_{certificate_number}.pdf"


def _status_color(status: str):
    return COLOR_PASS if status == PASS else COLOR_FAIL


def _format_number(value: float) -> str:
    return f"{value:g}"


class _Page:
    """Thin wrapper over a canvas that takes top-left millimetre coordinates."""

    def __init__(self, pdf: canvas.Canvas):
        self.pdf = pdf
        self.width = PAGE_WIDTH / mm

    def _y(self, y: float) -> float:
        return PAGE_HEIGHT - y * mm

    def text(self, x, y, value, size=11, bold=False, align="left", color=colors.black):
        self.pdf.setFont(FONT_BOLD if bold else FONT, size)
        self.pdf.setFillColor(color)
        if align == "center":
            self.pdf.drawCentredString(x * mm, self._y(y), str(value))
        else:
            self.pdf.drawString(x * mm, self._y(y), str(value))
        self.pdf.setFillColor(colors.black)

    def line(self, x1, y, x2):
        self.pdf.line(x1 * mm, self._y(y), x2 * mm, self._y(y))

    def rect(self, x, y, w, h, fill_color=None):
        if fill_color is not None:
            self.pdf.setFillColor(fill_color)
            self.pdf.rect(x * mm, self._y(y + h), w * mm, h * mm, stroke=0, fill=1)
            self.pdf.setFillColor(colors.black)
        else:
            self.pdf.rect(x * mm, self._y(y + h), w * mm, h * mm, stroke=1, fill=0)

    def image(self, png: bytes, x, y, w, h):
        self.pdf.drawImage(ImageReader(BytesIO(png)), x * mm, self._y(y + h), w * mm, h * mm)


def _draw_certificate(page: _Page, record, qr_png: bytes):
    width = page.width
    status = record.pass_fail_status

    # Header
    page.text(width / 2, 20, "FEDERAL REPUBLIC OF NIGERIA", size=20, bold=True, align="center")
    page.text(width / 2, 29, "MINISTRY OF ENVIRONMENT", size=16, bold=True, align="center")
    page.text(width / 2, 37, "VEHICLE EMISSIONS TEST CERTIFICATE", size=14, bold=True, align="center")

    # Certificate number + status badge
    page.text(MARGIN, 52, f"Certificate Number: {record.certificate_number}", size=12)
    page.rect(width - 60, 45, 40, 10, fill_color=_status_color(status))
    page.text(width - 40, 51.5, status, size=10, bold=True, align="center", color=colors.white)

    page.text(MARGIN, 62, f"Test Date: {record.test_date:%d %B %Y}", size=12)
    page.text(MARGIN, 69, f"Valid Until: {record.validity_period:%d %B %Y}", size=12)

    # Vehicle
    page.text(MARGIN, 82, "VEHICLE INFORMATION", size=14, bold=True)
    y = 90
    for label, value in (
        ("VIN", record.vin),
        ("License Plate", record.license_plate),
        ("Make", record.make),
        ("Model", record.model),
        ("Year", record.year),
    ):
        page.text(MARGIN, y, f"{label}: {value}")
        y += LINE_HEIGHT

    # Owner
    page.text(MARGIN, 135, "OWNER INFORMATION", size=14, bold=True)
    page.text(MARGIN, 143, f"Name: {record.owner_name}")
    page.text(MARGIN, 151, f"Phone: {record.owner_phone}")

    # Results table
    page.text(MARGIN, 164, "EMISSIONS TEST RESULTS", size=14, bold=True)
    y = 174
    for x_offset, heading in ((0, "Parameter"), (60, "Result"), (100, "Limit"), (140, "Status")):
        page.text(MARGIN + x_offset, y, heading, bold=True)
    page.line(MARGIN, y + 2, width - MARGIN)

    y += 9
    for reading in pollutant_breakdown(record.co_level, record.hc_level, record.nox_level, record.pm_level):
        page.text(MARGIN, y, reading.label)
        page.text(MARGIN + 60, y, f"{_format_number(reading.value)} {reading.unit}")
        page.text(MARGIN + 100, y, f"<= {_format_number(reading.limit)} {reading.unit}")
        page.text(MARGIN + 140, y, reading.status, bold=True, color=_status_color(reading.status))
        y += LINE_HEIGHT

    y += 5
    page.text(MARGIN, y, f"OVERALL RESULT: {status}", size=12, bold=True, color=_status_color(status))

    # QR code, bottom right
    page.image(qr_png, width - 60, 228, 40, 40)
    page.text(width - 60, 272, "Scan QR code to verify", size=8)

    # Stamp + footer
    page.text(MARGIN, 243, "Official Stamp:", size=10)
    page.rect(MARGIN + 30, 233, 60, 20)
    page.text(MARGIN + 35, 248, "(Testing Station Seal)", size=8)
    page.text(MARGIN, 262, f"Issued by: {settings.STATION_NAME}", size=9)
    page.text(MARGIN, 282, "This certificate is valid for 12 months from the test date.", size=8)
    page.text(MARGIN, 287, "For verification, visit our website or scan the QR code.", size=8)


def render_certificate_pdf(record) -> bytes:
    """
    Render a joined test record (TestResult or TestRecordOut) to PDF bytes.
    Raises RenderError if the stored QR payload is malformed or drawing fails.
    """
    try:
        qr_png = decode_qr_data_url(record.qr_code_data)
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4)
        pdf.setTitle(f"Emissions Certificate {record.certificate_number}")
        _draw_certificate(_Page(pdf), record, qr_png)
        pdf.showPage()
        pdf.save()
    except RenderError as e:
        logger.error(f"[CERTIFICATE] Cannot render {record.certificate_number}: {e}")
        raise
    except Exception as e:
        logger.error(f"[CERTIFICATE] Rendering failed for {record.certificate_number}: {e}", exc_info=True)
        raise RenderError(f"Failed to generate certificate PDF: {e}") from e

    pdf_bytes = buffer.getvalue()
    logger.info(f"[CERTIFICATE] Rendered {certificate_filename(record.certificate_number)} ({len(pdf_bytes)} bytes)")
    return pdf_bytes
