# emissions/services/qr_payload.py
"""
Verification QR payload.

The payload is a small JSON document (certificate number, plate, dates and
the public verification URL) rendered as a QR PNG and stored on the test
result as a data URL: data:image/png;base64,<...>.
The certificate renderer decodes it back into PNG bytes.
"""

import base64
import binascii
import json
from datetime import date
from io import BytesIO

import qrcode

from emissions.exceptions import RenderError

DATA_URL_PREFIX = "data:image/png;base64,"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def verification_url(base_url: str, certificate_number: str) -> str:
    return f"{base_url.rstrip('/')}/verify/{certificate_number}"


def build_verification_payload(certificate_number: str, license_plate: str, test_date: date,
                               expiry_date: date, base_url: str) -> dict:
    return {
        "certificate_number": certificate_number,
        "license_plate": license_plate,
        "test_date": test_date.isoformat(),
        "expiry_date": expiry_date.isoformat(),
        "verification_url": verification_url(base_url, certificate_number),
    }


def encode_qr_data_url(payload: dict) -> str:
    """Render the payload as a QR code PNG and return it as a data URL."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(json.dumps(payload))
    qr.make(fit=True)

    qr_img = qr.make_image(fill_color="black", back_color="white")
    img_buffer = BytesIO()
    qr_img.save(img_buffer, format="PNG")
    return DATA_URL_PREFIX + base64.b64encode(img_buffer.getvalue()).decode("ascii")


def decode_qr_data_url(data_url: str) -> bytes:
    """PNG bytes of a stored QR data URL. Anything else → RenderError."""
    if not data_url or not data_url.startswith(DATA_URL_PREFIX):
        raise RenderError("QR payload is not a PNG data URL")
    try:
        png = base64.b64decode(data_url[len(DATA_URL_PREFIX):], validate=True)
    except (binascii.Error, ValueError) as e:
        raise RenderError(f"QR payload is not valid base64: {e}") from e
    if not png.startswith(PNG_SIGNATURE):
        raise RenderError("QR payload does not contain a PNG image")
    return png
