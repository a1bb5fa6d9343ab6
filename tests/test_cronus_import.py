from itertools import product

import pytest

from attrtool.attribute import AttrEnum, Attribute, AttrType
from attrtool.cronus_export import export_lines
from attrtool.cronus_import import (
    CronusImportError,
    ImportRecord,
    apply_import,
    flat_index,
    parse_import_line,
    parse_target_line,
    write_values,
)


def _u16_2d():
    return Attribute(name="ATTR_GRID", type=AttrType.UINT16, data_size=2, dims=[2, 3])


def _enum_attr():
    return Attribute(
        name="ATTR_MODE",
        type=AttrType.UINT8,
        data_size=1,
        dims=[2],
        enums=[AttrEnum("OFF", 0), AttrEnum("ON", 1)],
    )


def _string_attr():
    return Attribute(name="ATTR_LABEL", type=AttrType.STRING, data_size=4, dims=[2])


def _complex_attr():
    return Attribute(
        name="ATTR_PAIR", type=AttrType.COMPLEX, data_size=3, dims=[2], spec="12"
    )


def _scalar_attr():
    return Attribute(name="ATTR_ONE", type=AttrType.UINT32, data_size=4)


def test_parse_target_line():
    assert parse_target_line("target = p10:k0:n0:s0:p00\n") == "p10:k0:n0:s0:p00"


def test_parse_target_line_without_value():
    with pytest.raises(CronusImportError):
        parse_target_line("target")


def test_parse_import_line_fields():
    record = parse_import_line("ATTR_GRID[1][2] u16[2][3] 0x0005")
    assert record == ImportRecord(
        name="ATTR_GRID",
        indices=(1, 2),
        data_type="u16",
        dims=(2, 3),
        values=["0x0005"],
    )


def test_parse_import_line_strips_enum_marker():
    record = parse_import_line("ATTR_MODE[0] u8e[2] ON")
    assert record.data_type == "u8"
    assert record.values == ["ON"]


def test_parse_import_line_skips_non_attributes():
    assert parse_import_line("NOT_AN_ATTRIBUTE u8 0x01") is None


def test_parse_import_line_bad_bracket():
    with pytest.raises(CronusImportError):
        parse_import_line("ATTR_GRID[1 u16[2][3] 0x0005")


def test_parse_import_line_missing_type():
    with pytest.raises(CronusImportError):
        parse_import_line("ATTR_GRID")


def test_flat_index_is_row_major_permutation():
    attr = _u16_2d()
    indices = [flat_index(attr, idx) for idx in product(range(2), range(3))]
    assert indices == list(range(attr.size))


def test_flat_index_scalar_is_zero():
    assert flat_index(_scalar_attr(), ()) == 0


def test_flat_index_overflow():
    with pytest.raises(CronusImportError):
        flat_index(_u16_2d(), (2, 0))


def test_apply_import_type_mismatch():
    record = parse_import_line("ATTR_GRID[0][0] u8[2][3] 0x01")
    with pytest.raises(CronusImportError):
        apply_import(_u16_2d(), record)


def test_apply_import_dim_mismatch():
    record = parse_import_line("ATTR_GRID[0][0] u16[3][2] 0x01")
    with pytest.raises(CronusImportError):
        apply_import(_u16_2d(), record)


def test_apply_import_missing_value():
    record = parse_import_line("ATTR_GRID[0][0] u16[2][3]")
    with pytest.raises(CronusImportError):
        apply_import(_u16_2d(), record)


def test_apply_import_sets_single_element():
    attr = _u16_2d()
    apply_import(attr, parse_import_line("ATTR_GRID[1][2] u16[2][3] 0x1234"))
    last = attr.size - 1
    assert attr.format_value(last) == "0x1234"
    assert not any(attr.value[: last * attr.data_size])


@pytest.mark.parametrize(
    "factory, values",
    [
        (_u16_2d, ["0x0001", "0x0002", "0x0003", "0x0004", "0x0005", "0x0006"]),
        (_enum_attr, ["ON", "OFF"]),
        (_string_attr, ["ab", "wxyz"]),
        (_complex_attr, ["0x01", "0x0203", "0x04", "0x0506"]),
        (_scalar_attr, ["0xdeadbeef"]),
    ],
)
def test_export_import_round_trip(factory, values):
    source = factory()
    write_values(source, values)
    target = factory()
    for line in export_lines(source):
        apply_import(target, parse_import_line(line))
    assert target.value == source.value


def test_apply_import_string_truncation():
    attr = _string_attr()
    truncated = apply_import(attr, parse_import_line('ATTR_LABEL[0] str[2] "abcdef"'))
    assert truncated is True
    assert attr.format_string_value(0) == '"abcd"'


def test_apply_import_string_requires_quotes():
    with pytest.raises(CronusImportError):
        apply_import(_string_attr(), parse_import_line("ATTR_LABEL[0] str[2] abc"))


def test_write_values_enum_by_name():
    attr = _enum_attr()
    write_values(attr, ["ON", "OFF"])
    assert attr.format_enum_value() == "ON OFF"


def test_write_values_complex():
    attr = _complex_attr()
    values = ["0x01", "0x0203", "0x04", "0x0506"]
    write_values(attr, values)
    assert attr.format_complex_value() == " ".join(values)


def test_write_values_count_mismatch():
    with pytest.raises(CronusImportError):
        write_values(_complex_attr(), ["0x01", "0x0203"])


def test_write_values_too_long_leaves_value_unchanged():
    attr = _string_attr()
    write_values(attr, ["ab", "cd"])
    before = bytes(attr.value)
    with pytest.raises(CronusImportError):
        write_values(attr, ["ok", "toolong"])
    assert bytes(attr.value) == before