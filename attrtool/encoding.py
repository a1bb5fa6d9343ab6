"""Conversion between in-memory attribute values and big-endian blobs."""

from __future__ import annotations

from attrtool.attribute import Attribute, AttrType

_FIELD_SIZES = {"1": 1, "2": 2, "4": 4, "8": 8}


def _swap(data: bytes | bytearray) -> bytes:
    return bytes(reversed(data))


def _convert(attr: Attribute, src: bytes | bytearray) -> bytearray:
    """Swap byte order of every numeric field; symmetric for both directions."""
    total = attr.size * attr.data_size
    out = bytearray(total)

    if attr.type == AttrType.COMPLEX:
        pos = 0
        for _ in range(attr.size):
            for ch in attr.spec or "":
                size = _FIELD_SIZES.get(ch)
                if size is None:
                    continue
                out[pos:pos + size] = _swap(src[pos:pos + size])
                pos += size
    elif attr.type == AttrType.STRING or attr.data_size == 1:
        out[:] = src[:total]
    elif attr.data_size in (2, 4, 8):
        step = attr.data_size
        for pos in range(0, total, step):
            out[pos:pos + step] = _swap(src[pos:pos + step])
    return out


def encode(attr: Attribute) -> bytes:
    """Return the big-endian encoding of the attribute's value."""
    return bytes(_convert(attr, attr.value))


def decode(attr: Attribute, buf: bytes) -> None:
    """Replace the attribute's value with the decoded contents of ``buf``."""
    expected = attr.size * attr.data_size
    if len(buf) != expected:
        raise ValueError(
            f"{attr.name}: encoded length {len(buf)} does not match {expected}"
        )
    attr.value = _convert(attr, buf)