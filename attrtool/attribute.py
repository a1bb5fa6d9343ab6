"""Attribute definitions, type tables and value formatting helpers.

Attribute values are held in host (little-endian) byte order; the
big-endian wire form is produced by :mod:`attrtool.encoding`.
"""

from __future__ import annotations

import dataclasses
import enum
import math
import string
from dataclasses import dataclass, field
from itertools import takewhile

_U64_MAX = (1 << 64) - 1
_NUM_SIZES = (1, 2, 4, 8)


class AttrType(enum.IntEnum):
    """Data type of an attribute."""

    UNKNOWN = 0
    UINT8 = 1
    UINT16 = 2
    UINT32 = 3
    UINT64 = 4
    INT8 = 5
    INT16 = 6
    INT32 = 7
    INT64 = 8
    STRING = 9
    COMPLEX = 10


_TYPE_LABELS: dict[AttrType, tuple[str, str]] = {
    AttrType.UINT8: ("uint8", "u8"),
    AttrType.UINT16: ("uint16", "u16"),
    AttrType.UINT32: ("uint32", "u32"),
    AttrType.UINT64: ("uint64", "u64"),
    AttrType.INT8: ("int8", "s8"),
    AttrType.INT16: ("int16", "s16"),
    AttrType.INT32: ("int32", "s32"),
    AttrType.INT64: ("int64", "s64"),
    AttrType.STRING: ("str", "str"),
    AttrType.COMPLEX: ("complex", "cpx"),
}

_TYPE_SIZES: dict[AttrType, int] = {
    AttrType.UINT8: 1,
    AttrType.INT8: 1,
    AttrType.UINT16: 2,
    AttrType.INT16: 2,
    AttrType.UINT32: 4,
    AttrType.INT32: 4,
    AttrType.UINT64: 8,
    AttrType.INT64: 8,
}

_INTEGER_TYPES = frozenset(_TYPE_SIZES)


def _as_type(attr_type: int) -> AttrType | None:
    try:
        return AttrType(attr_type)
    except ValueError:
        return None


def type_from_string(label: str) -> AttrType:
    """Return the type for a long label such as ``uint32``, or UNKNOWN."""
    for attr_type, (long_label, _) in _TYPE_LABELS.items():
        if long_label == label:
            return attr_type
    return AttrType.UNKNOWN


def type_to_string(attr_type: int) -> str:
    """Return the long label of a type, or ``<NULL>`` if it has none."""
    labels = _TYPE_LABELS.get(_as_type(attr_type))
    return labels[0] if labels else "<NULL>"


def type_from_short_string(label: str) -> AttrType:
    """Return the type for a short label such as ``u32``, or UNKNOWN."""
    for attr_type, (_, short_label) in _TYPE_LABELS.items():
        if short_label == label:
            return attr_type
    return AttrType.UNKNOWN


def type_to_short_string(attr_type: int) -> str:
    """Return the short label of a type, or ``<NULL>`` if it has none."""
    labels = _TYPE_LABELS.get(_as_type(attr_type))
    return labels[1] if labels else "<NULL>"


def type_size(attr_type: int) -> int:
    """Return the byte size of an integer type."""
    try:
        return _TYPE_SIZES[AttrType(attr_type)]
    except (KeyError, ValueError):
        raise ValueError(f"type {attr_type!r} has no fixed size") from None


def _strtoull(token: str) -> int:
    """Parse an unsigned integer with C ``strtoull(token, NULL, 0)`` rules."""
    text = token.lstrip(" \t\n\v\f\r")
    negative = False
    if text and text[0] in "+-":
        negative = text[0] == "-"
        text = text[1:]

    if text[:2].lower() == "0x" and len(text) > 2 and text[2] in string.hexdigits:
        base, text, valid = 16, text[2:], string.hexdigits
    elif text.startswith("0"):
        base, valid = 8, string.octdigits
    else:
        base, valid = 10, string.digits

    digits = "".join(takewhile(lambda ch: ch in valid, text))
    value = int(digits, base) if digits else 0
    if value > _U64_MAX:
        return _U64_MAX
    return (-value) & _U64_MAX if negative else value


def _check_num_size(data_size: int) -> None:
    if data_size not in _NUM_SIZES:
        raise ValueError(f"unsupported numeric size {data_size}")


def set_value_num(buf: bytearray, offset: int, data_size: int, value: int) -> None:
    """Store ``value`` truncated to ``data_size`` bytes at ``offset``."""
    _check_num_size(data_size)
    masked = value & ((1 << (8 * data_size)) - 1)
    buf[offset:offset + data_size] = masked.to_bytes(data_size, "little")


def _read_num(buf: bytes | bytearray, offset: int, data_size: int) -> int:
    _check_num_size(data_size)
    return int.from_bytes(buf[offset:offset + data_size], "little")


def format_value_num(buf: bytes | bytearray, offset: int, data_size: int) -> str:
    """Format the number at ``offset`` as zero-padded hexadecimal."""
    value = _read_num(buf, offset, data_size)
    return f"0x{value:0{data_size * 2}x}"


@dataclass
class AttrEnum:
    """A named value of an enumerated attribute."""

    key: str
    value: int


@dataclass
class Attribute:
    """An attribute definition together with its current value."""

    name: str
    type: AttrType = AttrType.UNKNOWN
    data_size: int = 0
    dims: list[int] = field(default_factory=list)
    enums: list[AttrEnum] = field(default_factory=list)
    spec: str | None = None
    value: bytearray = field(default_factory=bytearray)

    def __post_init__(self) -> None:
        self.dims = list(self.dims)
        self.enums = list(self.enums)
        if self.value:
            self.value = bytearray(self.value)
        else:
            self.value = bytearray(self.size * self.data_size)

    @property
    def dim_count(self) -> int:
        return len(self.dims)

    @property
    def size(self) -> int:
        """Number of elements held by the attribute."""
        return math.prod(self.dims)

    @property
    def enum_count(self) -> int:
        return len(self.enums)

    def copy(self) -> Attribute:
        """Return a copy whose dimensions and value are independent."""
        return dataclasses.replace(
            self,
            dims=list(self.dims),
            enums=list(self.enums),
            value=bytearray(self.value),
        )

    def _require_integer(self) -> None:
        if self.type not in _INTEGER_TYPES:
            raise ValueError(f"{self.name}: not an integer attribute")

    def _indices(self, index: int | None) -> range:
        if index is None:
            return range(self.size)
        return range(index, index + 1)

    def set_value(self, offset: int, token: str) -> None:
        """Parse ``token`` as a number and store it at byte ``offset``."""
        self._require_integer()
        set_value_num(self.value, offset, self.data_size, _strtoull(token))

    def set_enum_value(self, offset: int, token: str) -> bool:
        """Store the enum value named ``token``; return False if unknown."""
        for item in self.enums:
            if item.key == token:
                set_value_num(self.value, offset, self.data_size, item.value)
                return True
        return False

    def set_string_value(self, offset: int, token: str) -> None:
        """Store ``token`` at ``offset``, truncated or zero-padded to data_size."""
        raw = token.encode("utf-8", "surrogateescape")[: self.data_size]
        self.value[offset:offset + self.data_size] = raw.ljust(self.data_size, b"\0")

    def format_value(self, index: int | None = None) -> str:
        """Format one element, or every element when ``index`` is None."""
        self._require_integer()
        return " ".join(
            format_value_num(self.value, i * self.data_size, self.data_size)
            for i in self._indices(index)
        )

    def format_enum_value(self, index: int | None = None) -> str | None:
        """Format elements by enum name; None if the attribute has no enums."""
        if not self.enums:
            return None
        names = []
        for i in self._indices(index):
            number = _read_num(self.value, i * self.data_size, self.data_size)
            names.append(
                next((e.key for e in self.enums if e.value == number), "UNKNOWN_ENUM")
            )
        return " ".join(names)

    def format_string_value(self, index: int | None = None) -> str:
        """Format string elements, each in double quotes."""
        parts = []
        for i in self._indices(index):
            start = i * self.data_size
            raw = bytes(self.value[start:start + self.data_size]).split(b"\0", 1)[0]
            parts.append('"' + raw.decode("utf-8", "surrogateescape") + '"')
        return " ".join(parts)

    def format_complex_value(self, index: int | None = None) -> str:
        """Format complex elements field by field according to the spec."""
        spec = self.spec or ""
        parts = []
        for i in self._indices(index):
            offset = i * self.data_size
            for ch in spec:
                size = ord(ch) - ord("0")
                parts.append(format_value_num(self.value, offset, size))
                offset += size
        return " ".join(parts)