"""Loader for the attribute information database.

The database is a line oriented text file::

    all <attr> <attr> ...
    <attr> <type> [<spec>|<strlen>] <ndim> [<dim>...] [<nenum> [<key> <val>]...] <defined> [<value>...]
    ...
    targets <target> <target> ...
    <target> <attr-index> <attr-index> ...
    ...
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from attrtool.attribute import (
    Attribute,
    AttrEnum,
    AttrType,
    _strtoull,
    set_value_num,
    type_from_string,
    type_size,
)

ATTR_MAX_LEN = 72
TARGET_MAX_LEN = 32

_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class InfoDbError(Exception):
    """Raised when the attribute database cannot be read."""


@dataclass
class TargetInfo:
    """A target class and the indices of the attributes it carries."""

    name: str
    ids: list[int] = field(default_factory=list)


@dataclass
class AttrInfo:
    """All attribute definitions and per-target attribute lists."""

    attrs: list[Attribute] = field(default_factory=list)
    targets: list[TargetInfo] = field(default_factory=list)

    def attr(self, name: str) -> Attribute | None:
        """Return the attribute called ``name``, or None."""
        return next((a for a in self.attrs if a.name == name), None)


def _atoi(token: str) -> int:
    match = _ATOI.match(token)
    return int(match.group(1)) if match else 0


def _get_value(lines: Iterator[str], key: str) -> str:
    line = next(lines, None)
    if line is None:
        raise InfoDbError(f"Failed to read key '{key}'")
    line = line.removesuffix("\n").lstrip(" ")
    tok, sep, rest = line.partition(" ")
    if tok != key:
        raise InfoDbError(f"Expected {key}, got {tok}")
    if not sep:
        raise InfoDbError(f"No value for key '{key}'")
    return rest


def _split_values(value: str, key: str) -> list[str]:
    count = value.count(" ") + 1
    tokens = [tok for tok in value.split(" ") if tok]
    if len(tokens) < count:
        raise InfoDbError(f"Failed to read {key}")
    return tokens


def _parse_attr(name: str, data: str) -> Attribute:
    tokens = (tok for tok in data.split(" ") if tok)

    def take() -> str:
        tok = next(tokens, None)
        if tok is None:
            raise InfoDbError(f"Failed to read {name}")
        return tok

    attr_type = type_from_string(take())
    if attr_type == AttrType.UNKNOWN:
        raise InfoDbError(f"Failed to read {name}")

    spec = None
    if attr_type == AttrType.COMPLEX:
        spec = take()
        data_size = sum(ord(ch) - ord("0") for ch in spec)
    elif attr_type == AttrType.STRING:
        data_size = _atoi(take())
    else:
        data_size = type_size(attr_type)
    if data_size <= 0:
        raise InfoDbError(f"{name}: invalid data size {data_size}")

    dim_count = _atoi(take())
    if not 0 <= dim_count <= 3:
        raise InfoDbError(f"{name}: invalid dimension count {dim_count}")
    dims = [_atoi(take()) for _ in range(dim_count)]
    if any(dim <= 0 for dim in dims):
        raise InfoDbError(f"{name}: invalid dimensions {dims}")

    enums: list[AttrEnum] = []
    if attr_type not in (AttrType.STRING, AttrType.COMPLEX):
        for _ in range(_atoi(take())):
            key = take()
            enums.append(AttrEnum(key, _strtoull(take())))

    defined = _atoi(take())
    if defined not in (0, 1):
        raise InfoDbError(f"Failed to read {name}")

    attr = Attribute(
        name=name,
        type=attr_type,
        data_size=data_size,
        dims=dims,
        enums=enums,
        spec=spec,
    )
    if not defined:
        return attr

    offset = 0
    for _ in range(attr.size):
        if attr_type == AttrType.COMPLEX:
            for ch in spec or "":
                size = ord(ch) - ord("0")
                set_value_num(attr.value, offset, size, _strtoull(take()))
                offset += size
        elif attr_type == AttrType.STRING:
            attr.set_string_value(offset, take())
            offset += data_size
        else:
            tok = take()
            if not attr.set_enum_value(offset, tok):
                attr.set_value(offset, tok)
            offset += data_size
    return attr


def parse_db(lines: Iterable[str]) -> AttrInfo:
    """Parse database lines into an :class:`AttrInfo`."""
    it = iter(lines)
    info = AttrInfo()

    for name in _split_values(_get_value(it, "all"), "all"):
        if len(name) >= ATTR_MAX_LEN:
            raise InfoDbError(f"Attribute name too long: {name}")
        data = _get_value(it, name)
        try:
            info.attrs.append(_parse_attr(name, data))
        except ValueError as exc:
            raise InfoDbError(f"Failed to read {name}: {exc}") from exc

    for name in _split_values(_get_value(it, "targets"), "targets"):
        if len(name) >= TARGET_MAX_LEN:
            raise InfoDbError(f"Target name too long: {name}")
        info.targets.append(TargetInfo(name))

    for target in info.targets:
        data = _get_value(it, target.name)
        target.ids = [_atoi(tok) for tok in _split_values(data, target.name)]

    return info


def load_db(path: str | os.PathLike[str]) -> AttrInfo:
    """Load the attribute database stored at ``path``."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape") as fp:
            return parse_db(fp)
    except OSError as exc:
        raise InfoDbError(f"Failed to open db: {path}") from exc