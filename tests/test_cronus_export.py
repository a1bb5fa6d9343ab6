import pytest

from attrtool.attribute import AttrEnum, Attribute, AttrType
from attrtool.cronus_export import dump_line, export_lines, read_line, value_string


def _uint16(name="ATTR_A", dims=()):
    return Attribute(name=name, type=AttrType.UINT16, data_size=2, dims=list(dims))


def _uint8(name="ATTR_B", dims=()):
    return Attribute(name=name, type=AttrType.UINT8, data_size=1, dims=list(dims))


def test_scalar_export_line():
    attr = _uint16()
    attr.set_value(0, "0x1234")
    assert export_lines(attr) == ["ATTR_A    u16    0x1234"]


def test_enum_export_uses_suffix_and_name():
    attr = Attribute(
        name="ATTR_E",
        type=AttrType.UINT8,
        data_size=1,
        enums=[AttrEnum("ON", 1), AttrEnum("OFF", 0)],
    )
    assert attr.set_enum_value(0, "ON")
    assert export_lines(attr) == ["ATTR_E    u8e    ON"]
    assert value_string(attr) == "ON"


def test_one_dimensional_export():
    attr = _uint8(dims=[3])
    attr.set_value(1, "0x7f")
    lines = export_lines(attr)
    assert len(lines) == 3
    for i, line in enumerate(lines):
        assert line.startswith(f"ATTR_B[{i}] u8[3] ")
    assert lines[1].endswith("0x7f")


def test_two_dimensional_export_order():
    attr = _uint8(dims=[2, 3])
    attr.set_value(5, "0x2a")
    lines = export_lines(attr)
    assert len(lines) == 6
    prefixes = [line.split(" ")[0] for line in lines]
    assert prefixes == [
        f"ATTR_B[{i}][{j}]" for i in range(2) for j in range(3)
    ]
    assert all(" u8[2][3] " in line for line in lines)
    assert lines[-1].endswith("0x2a")


def test_three_dimensional_export_count():
    attr = _uint8(dims=[2, 2, 2])
    lines = export_lines(attr)
    assert len(lines) == 8
    assert lines[-1].startswith("ATTR_B[1][1][1] u8[2][2][2] ")


def test_too_many_dimensions_rejected():
    attr = _uint8(dims=[1, 1, 1, 1])
    with pytest.raises(ValueError):
        export_lines(attr)


def test_dump_line_inline_value():
    attr = _uint16()
    attr.set_value(0, "0x1234")
    assert dump_line(attr) == "  ATTR_A: uint16 0x1234"


def test_dump_line_large_shows_count():
    attr = _uint8(dims=[5])
    assert dump_line(attr) == "  ATTR_B: uint8 [5]"


def test_read_line_with_dims():
    attr = _uint8(dims=[2, 3])
    line = read_line(attr)
    assert line.startswith("ATTR_B<2,3> = ")
    assert len(line.split(" = ")[1].split(" ")) == 6


def test_read_line_scalar():
    attr = _uint16()
    attr.set_value(0, "0xbeef")
    assert read_line(attr) == "ATTR_A = 0xbeef"


def test_string_value_quoted():
    attr = Attribute(name="ATTR_S", type=AttrType.STRING, data_size=8)
    attr.set_string_value(0, "hello")
    assert value_string(attr) == '"hello"'
    assert export_lines(attr) == ['ATTR_S    str    "hello"']


def test_complex_value_fields():
    attr = Attribute(name="ATTR_C", type=AttrType.COMPLEX, data_size=3, spec="12")
    attr.value[0] = 0x11
    attr.value[1:3] = (0x2233).to_bytes(2, "little")
    assert value_string(attr) == "0x11 0x2233"
    assert export_lines(attr)[0].startswith("ATTR_C    cpx    ")


def test_value_string_all_elements_matches_per_element():
    attr = _uint8(dims=[3])
    for i, token in enumerate(["0x01", "0x02", "0x03"]):
        attr.set_value(i, token)
    assert value_string(attr) == " ".join(value_string(attr, i) for i in range(3))
    assert value_string(attr, 2) == "0x03"