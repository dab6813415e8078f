"""
QR transport encoding for Warikan groups.

A group travels between devices as base64(UTF-8 JSON), using the same record
shape as the groups file. Decoding has exactly two outcomes: a Group, or an
InvalidQRDataError. Whether a decoded group is acceptable for joining is a
separate check (is_valid_group).
"""
from __future__ import annotations
import base64
import binascii
import json
from dataclasses import dataclass
from typing import Optional

from config import dict_to_group, group_to_dict
from exceptions import InvalidQRDataError
from models import Group


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of try_decode_group: exactly one of group / error is set"""
    group: Optional[Group] = None
    error: Optional[InvalidQRDataError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def encode_group_to_qr(group: Group) -> str:
    """Serialize a group to its transport string"""
    payload = json.dumps(group_to_dict(group), ensure_ascii=False, separators=(",", ":"))
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode_group_from_qr(data: str) -> Group:
    """
    Parse a transport string back into a Group.

    Raises:
        InvalidQRDataError: if the string is not base64, not UTF-8 JSON, or the
            JSON does not have the shape of a group record.
    """
    try:
        raw = base64.b64decode(data.strip(), validate=True)
        payload = json.loads(raw.decode("utf-8"))
    except (AttributeError, binascii.Error, UnicodeDecodeError, ValueError) as ex:
        raise InvalidQRDataError(str(ex)) from ex
    if not isinstance(payload, dict):
        raise InvalidQRDataError("payload is not an object")
    try:
        return dict_to_group(payload)
    except (KeyError, TypeError, ValueError, AttributeError) as ex:
        raise InvalidQRDataError(f"malformed group record ({ex!r})") from ex


def try_decode_group(data: str) -> DecodeResult:
    try:
        return DecodeResult(group=decode_group_from_qr(data))
    except InvalidQRDataError as ex:
        return DecodeResult(error=ex)


def is_valid_group(group: Group) -> bool:
    """A joinable group has a non-empty id, a non-empty name and a member list"""
    return bool(group.id and group.name and isinstance(group.members, list))


def is_valid_qr_data(data: str) -> bool:
    result = try_decode_group(data)
    return result.ok and is_valid_group(result.group)


def generate_qr_image(data: str, output_path: Optional[str] = None):
    """
    Render a transport string as a QR code image.

    Returns the PIL image, or output_path after saving a PNG there.
    Requires the ``qrcode`` library with PIL support.
    """
    import qrcode

    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    if output_path:
        img.save(output_path)
        return output_path

    return img
