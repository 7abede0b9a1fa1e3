"""Boundary format shared with the scanning client: ``"<tokenId>|<secret>"``."""

from __future__ import annotations

from ..core.constants import PAYLOAD_SEPARATOR
from ..core.exceptions import InvalidFormat


def encode_payload(token_id: str, secret: str) -> str:
    if PAYLOAD_SEPARATOR in token_id or PAYLOAD_SEPARATOR in secret:
        raise ValueError("token id and secret must not contain the payload separator")
    return f"{token_id}{PAYLOAD_SEPARATOR}{secret}"


def decode_payload(raw: str) -> tuple[str, str]:
    """Split a scanned string into ``(token_id, secret)``.

    Exactly two non-empty fields are accepted; anything else is ``InvalidFormat``.
    """
    if not isinstance(raw, str):
        raise InvalidFormat("Scanned code is not an attendance code")
    parts = raw.strip().split(PAYLOAD_SEPARATOR)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidFormat("Scanned code is not an attendance code")
    return parts[0], parts[1]
