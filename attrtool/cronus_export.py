"""Text renderings of attribute values for dump, read and Cronus export."""

from __future__ import annotations

from itertools import product

from attrtool.attribute import Attribute, AttrType, type_to_short_string, type_to_string

_MAX_DIMS = 3
_DUMP_INLINE_LIMIT = 4


def value_string(attr: Attribute, index: int | None = None) -> str:
    """Format one element of ``attr``, or every element when ``index`` is None."""
    if attr.type == AttrType.COMPLEX:
        return attr.format_complex_value(index)
    if attr.type == AttrType.STRING:
        return attr.format_string_value(index)
    enum_text = attr.format_enum_value(index)
    if enum_text is not None:
        return enum_text
    return attr.format_value(index)


def _data_type(attr: Attribute) -> str:
    label = type_to_short_string(attr.type)
    return label + "e" if attr.enums else label


def dump_line(attr: Attribute) -> str:
    """Return the one-line summary of an attribute used by the dump command."""
    line = f"  {attr.name}: {type_to_string(attr.type)}"
    if attr.size <= _DUMP_INLINE_LIMIT:
        return f"{line} {value_string(attr)}"
    return f"{line} [{attr.size}]"


def read_line(attr: Attribute) -> str:
    """Return ``NAME<dims> = values`` as printed by the read command."""
    dims = f"<{','.join(str(d) for d in attr.dims)}>" if attr.dims else ""
    return f"{attr.name}{dims} = {value_string(attr)}"


def export_lines(attr: Attribute) -> list[str]:
    """Return the Cronus export lines of an attribute, one per element."""
    if attr.dim_count > _MAX_DIMS:
        raise ValueError(f"{attr.name}: unsupported array size")

    data_type = _data_type(attr)
    if not attr.dims:
        return [f"{attr.name}    {data_type}    {value_string(attr, 0)}"]

    shape = "".join(f"[{d}]" for d in attr.dims)
    return [
        f"{attr.name}{''.join(f'[{i}]' for i in indices)} "
        f"{data_type}{shape} {value_string(attr, flat)}"
        for flat, indices in enumerate(product(*(range(d) for d in attr.dims)))
    ]