# attrtool

A library for typed firmware attributes of the kind stored as device-tree
properties. It does the following:

- parses the attribute info database;
- encodes attribute values as big-endian property bytes and decodes them back;
- maps target classes between device-tree, FAPI and Cronus names;
- parses and formats Cronus target strings;
- reads and writes the lines of the Cronus attribute dump format.

It also has a small circular doubly linked list with consistency checks.

## Installation

```
pip install attrtool
```

To run the tests:

```
pip install "attrtool[test]"
pytest
```

## Modules

### `attrtool.attribute`

The attribute model.

- `AttrType` is an `IntEnum` with the members `UNKNOWN`, `UINT8` to `UINT64`,
  `INT8` to `INT64`, `STRING` and `COMPLEX`.
- `type_from_string` and `type_to_string` convert between a type and its long
  label, such as `uint32`.
- `type_from_short_string` and `type_to_short_string` convert between a type
  and its short label, such as `u32`. An unknown label gives `UNKNOWN`. A type
  with no label gives `"<NULL>"`.
- `type_size(attr_type)` returns the byte size of an integer type. It raises
  `ValueError` for any other type.
- `set_value_num(buf, offset, data_size, value)` stores a number truncated to
  1, 2, 4 or 8 bytes. `format_value_num(buf, offset, data_size)` returns it as
  zero-padded hex, such as `0x00ff`.
- `AttrEnum(key, value)` is one named value of an enumerated attribute.
- `Attribute` holds `name`, `type`, `data_size`, `dims`, `enums`, `spec` and
  `value`. The `value` is a `bytearray` in little-endian order. It also has the
  properties `size`, `dim_count` and `enum_count`, and these methods:
  - `copy()` returns an independent copy.
  - `set_value(offset, token)` parses `token` as a C-style integer: decimal,
    `0x` hex or leading-`0` octal.
  - `set_enum_value(offset, token)` returns `False` when `token` names no enum
    value.
  - `set_string_value(offset, token)` truncates the string to `data_size`
    bytes or pads it with zero bytes.
  - `format_value`, `format_enum_value`, `format_string_value` and
    `format_complex_value` format one element, or every element when the
    index is `None`. `format_enum_value` returns `None` when the attribute has
    no enums.

### `attrtool.encoding`

- `encode(attr)` returns the big-endian bytes of the attribute's value.
- `decode(attr, buf)` replaces the value with the decoded contents of `buf`.
  It raises `ValueError` if the length of `buf` is not `size * data_size`.

Complex attributes are byte-swapped field by field, following their `spec`.
Strings and 1-byte values are copied unchanged.

### `attrtool.namelist`

- `NameList(names)` keeps the names sorted.
- `NameList.from_file(path)` reads one name per line and skips empty lines.
  A path of `None` gives an empty list.
- `exists(name)` is `True` when the name is listed, and always `True` when the
  list is empty.

### `attrtool.infodb`

- `load_db(path)` and `parse_db(lines)` read an attribute info database into
  an `AttrInfo`. `AttrInfo` holds `attrs`, a list of `Attribute`, and
  `targets`, a list of `TargetInfo`. Each `TargetInfo` has a `name` and `ids`,
  the indices of its attributes in `attrs`.
- `AttrInfo.attr(name)` looks up an attribute by name and returns `None` if
  there is none.
- A missing or malformed file raises `InfoDbError`.

### `attrtool.target`

- `dtree_to_fapi_class`, `cronus_to_dtree_class` and `dtree_to_cronus_class`
  map class names between the three naming schemes. They return `None` when a
  name is not known.
- `dtree_name_to_class(name)` strips the `@unit` address and any trailing
  digits from a node name. An empty name gives `"root"`.
- `parse_cronus_target(name, chip)` splits a name such as
  `p10.core:k0:n0:s0:p00:c1` into a `CronusTarget`, whose missing numbers are
  `-1`. It raises `ValueError` if the name is malformed or uses a chip name
  other than `chip`.
- `CronusTarget.format()` builds the name back. It raises `ValueError` if a
  required part is missing.

### `attrtool.cronus_export`

- `value_string(attr, index)` formats values according to the attribute's
  type, and uses enum names where it can.
- `dump_line(attr)` returns a summary line. It shows the values inline for up
  to four elements and `[size]` for more.
- `read_line(attr)` returns `NAME<d0,d1> = values`.
- `export_lines(attr)` returns one Cronus export line per element, such as
  `ATTR_X[1][0] u8e[2][3] VALUE`. It raises `ValueError` for more than three
  dimensions.

### `attrtool.cronus_import`

- `parse_target_line(line)` returns the name in a `target = <name>` line.
- `parse_import_line(line)` returns an `ImportRecord` with `name`, `indices`,
  `data_type`, `dims` and `values`. It returns `None` for lines whose name does
  not start with `ATTR`.
- `flat_index(attr, indices)` returns the row-major element index.
- `apply_import(attr, record)` checks the type and dimensions against the
  attribute, then stores the record's value. It returns `True`, and logs a
  warning, when a quoted string was truncated.
- `write_values(attr, values)` replaces every element from a flat list of
  tokens. A complex attribute takes one token per spec field.

`flat_index`, `apply_import` and `write_values` raise `CronusImportError` on a
type or dimension mismatch, an index out of range, a wrong value count or a
string that is too long. The two parse functions raise it for malformed lines.

### `attrtool.dlist`

A circular doubly linked list.

- `ListNode(value)` is an entry. A detached node links to itself.
  `unlink()` removes the node from its list.
- `ListHead` provides `add`, `add_tail`, `add_before`, `empty`, `delete`,
  `top`, `tail`, `pop` and `check`. It supports iteration, `reversed()` and
  `len()`, and an entry may be deleted while iterating.
- `check_node(node, abortstr)` and `ListHead.check(abortstr)` return `None` on
  corruption. When `abortstr` is given they raise `ListCorruptError` instead.
- `ListHead(debug=True)` checks the list after every change. In that mode,
  `delete` raises `ValueError` for a node that is not in the list.

## Example

```python
from attrtool.attribute import Attribute, AttrType
from attrtool.encoding import encode, decode

attr = Attribute(name="ATTR_EXAMPLE", type=AttrType.UINT16, data_size=2)
attr.set_value(0, "0x1234")
raw = encode(attr)              # b"\x12\x34"
decode(attr, raw)
print(attr.format_value(None))  # 0x1234
```

## What it does not do

attrtool is a library only. It has no command-line program.

It does not read, write or traverse device-tree blob files. Creating,
dumping, exporting, importing or writing attributes in such a file is left to
the caller: the caller supplies the property bytes and node names, and
attrtool encodes, decodes and formats them.