"""Parsing of Cronus attribute dump lines and writing of attribute values."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from attrtool.attribute import (
    Attribute,
    AttrType,
    _strtoull,
    set_value_num,
    type_from_short_string,
)

_LOG = logging.getLogger(__name__)

_MAX_DIMS = 3
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class CronusImportError(Exception):
    """Raised when a Cronus dump line cannot be parsed or applied."""


@dataclass
class ImportRecord:
    """One element assignment parsed from a Cronus dump line."""

    name: str
    indices: tuple[int, ...] = ()
    data_type: str = ""
    dims: tuple[int, ...] = ()
    values: list[str] = field(default_factory=list)


def _atoi(token: str) -> int:
    match = _ATOI.match(token)
    return int(match.group(1)) if match else 0


def _split_bracketed(token: str) -> tuple[str, list[int]]:
    """Split ``NAME[a][b]`` into its head and up to three bracketed numbers."""
    parts = [part for part in token.split("[") if part]
    if not parts:
        raise CronusImportError(f"malformed token {token!r}")
    numbers = []
    for part in parts[1:1 + _MAX_DIMS]:
        if not part.endswith("]"):
            raise CronusImportError(f"malformed index in {token!r}")
        numbers.append(_atoi(part[:-1]))
    return parts[0], numbers


def parse_target_line(line: str) -> str:
    """Return the target name from a ``target = <name>`` line."""
    parts = [part for part in line.removesuffix("\n").split("=") if part]
    if len(parts) < 2:
        raise CronusImportError(f"malformed target line {line!r}")
    return parts[1].lstrip(" ")


def parse_import_line(line: str) -> ImportRecord | None:
    """Parse an attribute line; return None for lines that are not attributes."""
    tokens = [tok for tok in line.removesuffix("\n").split(" ") if tok]
    if not tokens:
        raise CronusImportError("missing attribute name")

    name, indices = _split_bracketed(tokens[0])
    if len(name) < 4 or not name.startswith("ATTR"):
        return None

    if len(tokens) < 2:
        raise CronusImportError(f"{name}: missing data type")
    data_type, dims = _split_bracketed(tokens[1])
    if data_type.endswith("e"):
        data_type = data_type[:-1]

    return ImportRecord(
        name=name,
        indices=tuple(indices),
        data_type=data_type,
        dims=tuple(dims),
        values=tokens[2:],
    )


def _dims_text(values: list[int] | tuple[int, ...]) -> str:
    return "".join(f"[{v}]" for v in values)


def flat_index(attr: Attribute, indices: tuple[int, ...] | list[int]) -> int:
    """Return the row-major element index for ``indices`` within ``attr``."""
    padded = list(indices)[:_MAX_DIMS]
    padded += [0] * (attr.dim_count - len(padded))
    used = padded[: attr.dim_count]

    for idx, dim in zip(used, attr.dims):
        if idx < 0 or idx >= dim:
            raise CronusImportError(
                f"{attr.name}: index overflow {_dims_text(used)} > {_dims_text(attr.dims)}"
            )

    index = 0
    for idx, dim in zip(used, attr.dims):
        index = index * dim + idx
    return index


def apply_import(attr: Attribute, record: ImportRecord) -> bool:
    """Store the value of ``record`` into ``attr``.

    Returns True when a string value had to be truncated to fit.
    """
    if type_from_short_string(record.data_type) != attr.type:
        raise CronusImportError(f"{attr.name}: type mismatch")

    dims = list(record.dims) + [-1] * (attr.dim_count - len(record.dims))
    dims = dims[: attr.dim_count]
    if dims != list(attr.dims):
        raise CronusImportError(
            f"{attr.name}: dim mismatch {_dims_text(dims)} != {_dims_text(attr.dims)}"
        )

    offset = flat_index(attr, record.indices) * attr.data_size
    tokens = iter(record.values)

    def take() -> str:
        tok = next(tokens, None)
        if tok is None:
            raise CronusImportError(f"{attr.name}: missing value")
        return tok

    if attr.type == AttrType.COMPLEX:
        for ch in attr.spec or "":
            size = ord(ch) - ord("0")
            set_value_num(attr.value, offset, size, _strtoull(take()))
            offset += size
        return False

    if attr.type == AttrType.STRING:
        tok = take()
        if len(tok) < 2 or not (tok.startswith('"') and tok.endswith('"')):
            raise CronusImportError(f"{attr.name}: string value not quoted")
        text = tok[1:-1]
        truncated = len(text.encode("utf-8", "surrogateescape")) > attr.data_size
        if truncated:
            _LOG.warning("%s: value truncated", attr.name)
        attr.set_string_value(offset, text)
        return truncated

    tok = take()
    if not attr.set_enum_value(offset, tok):
        attr.set_value(offset, tok)
    return False


def write_values(attr: Attribute, values: list[str]) -> None:
    """Replace every element of ``attr`` with ``values``, given in flat order."""
    fields = len(attr.spec or "") if attr.type == AttrType.COMPLEX else 1
    count = attr.size * fields
    if len(values) != count:
        raise CronusImportError(f"Insufficient values {len(values)}, expected {count}")

    work = attr.copy()
    tokens = iter(values)
    offset = 0
    for _ in range(attr.size):
        if attr.type == AttrType.COMPLEX:
            for ch in attr.spec or "":
                size = ord(ch) - ord("0")
                set_value_num(work.value, offset, size, _strtoull(next(tokens)))
                offset += size
        elif attr.type == AttrType.STRING:
            tok = next(tokens)
            length = len(tok.encode("utf-8", "surrogateescape"))
            if length > attr.data_size:
                raise CronusImportError(
                    f"Value too long ({length}), expected ({attr.data_size})"
                )
            work.set_string_value(offset, tok)
            offset += attr.data_size
        else:
            tok = next(tokens)
            if not work.set_enum_value(offset, tok):
                work.set_value(offset, tok)
            offset += attr.data_size

    attr.value = work.value