import pytest

from qr_attendance.core.exceptions import InvalidFormat
from qr_attendance.tokens.payload import decode_payload, encode_payload


def test_encode_then_decode_gives_back_fields():
    assert decode_payload(encode_payload("abc123", "s3cr3t")) == ("abc123", "s3cr3t")


@pytest.mark.parametrize("raw", ["", "no-separator", "a|b|c", "|secret", "token|", "   "])
def test_decode_rejects_malformed_payloads(raw):
    with pytest.raises(InvalidFormat):
        decode_payload(raw)


def test_encode_refuses_separator_inside_fields():
    with pytest.raises(ValueError):
        encode_payload("a|b", "secret")


@pytest.mark.parametrize("raw", [None, 123, b"abc|def", ["abc", "def"]])
def test_decode_rejects_non_text(raw):
    with pytest.raises(InvalidFormat):
        decode_payload(raw)
