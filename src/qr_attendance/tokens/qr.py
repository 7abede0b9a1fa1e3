from __future__ import annotations

import io
from typing import BinaryIO

import qrcode
from PIL import Image


def render_qr_png(data: str) -> bytes:
    """Render ``data`` as a PNG QR code."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def decode_qr_image(stream: BinaryIO) -> list[str]:
    """Decode every QR code found in an uploaded image."""
    # pyzbar loads the native zbar library on import
    from pyzbar.pyzbar import decode as pyzbar_decode

    img = Image.open(stream).convert("RGB")
    return [d.data.decode("utf-8").strip() for d in pyzbar_decode(img)]
