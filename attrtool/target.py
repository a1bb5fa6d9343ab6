"""Mapping between device-tree, FAPI and Cronus target names."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass

_NAME_MAX_LEN = 128

_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")

# (fapi class, device-tree class, cronus class)
_CLASS_MAP: tuple[tuple[str, str, str], ...] = (
    ("TARGET_TYPE_ABUS", "smpgroup", "smpgroup"),
    ("TARGET_TYPE_CAPP", "capp", "capp"),
    ("TARGET_TYPE_CORE", "core", "c"),
    ("TARGET_TYPE_DIMM", "dimm", "dimm"),
    ("TARGET_TYPE_DMI", "dmi", "dmi"),
    ("TARGET_TYPE_EQ", "eq", "eq"),
    ("TARGET_TYPE_EX", "ex", "ex"),
    ("TARGET_TYPE_FC", "fc", "fc"),
    ("TARGET_TYPE_IOHS", "iohs", "iohs"),
    ("TARGET_TYPE_L4", "l4", "l4"),
    ("TARGET_TYPE_MBA", "mba", "mba"),
    ("TARGET_TYPE_MC", "mc", "mc"),
    ("TARGET_TYPE_MCA", "mca", "mca"),
    ("TARGET_TYPE_MCBIST", "mcbist", "mcbist"),
    ("TARGET_TYPE_MCC", "mcc", "mcc"),
    ("TARGET_TYPE_MCS", "mcs", "mcs"),
    ("TARGET_TYPE_MEMBUF_CHIP", "membuf_chip", "membuf_chip"),
    ("TARGET_TYPE_MEM_PORT", "mem_port", "mem_port"),
    ("TARGET_TYPE_MI", "mi", "mi"),
    ("TARGET_TYPE_NMMU", "nmmu", "nmmu"),
    ("TARGET_TYPE_OBUS", "obus", "obus"),
    ("TARGET_TYPE_OBUS_BRICK", "obus_brick", "obus_brick"),
    ("TARGET_TYPE_OCMB_CHIP", "ocmb", "ocmb"),
    ("TARGET_TYPE_OMI", "omi", "omi"),
    ("TARGET_TYPE_OMIC", "omic", "omic"),
    ("TARGET_TYPE_PAU", "pau", "pau"),
    ("TARGET_TYPE_PAUC", "pauc", "pauc"),
    ("TARGET_TYPE_PEC", "pec", "pec"),
    ("TARGET_TYPE_PERV", "chiplet", "perv"),
    ("TARGET_TYPE_PERV", "perv", "perv"),
    ("TARGET_TYPE_PHB", "phb", "phb"),
    ("TARGET_TYPE_PMIC", "pmic", "pmic"),
    ("TARGET_TYPE_PPE", "ppe", "ppe"),
    ("TARGET_TYPE_PROC_CHIP", "proc", "proc_chip"),
    ("TARGET_TYPE_SBE", "sbe", "sbe"),
    ("TARGET_TYPE_SYSTEM", "root", "system"),
    ("TARGET_TYPE_XBUS", "xbus", "xbus"),
    ("TARGET_TYPE_NX", "nx", "nx"),
    ("TARGET_TYPE_OCC", "occ", "occ"),
    ("TARGET_TYPE_TPM", "tpm", "tpm"),
    ("TARGET_TYPE_BMC", "bmc", "bmc"),
)


def dtree_to_fapi_class(dtree_class: str) -> str | None:
    """Return the FAPI class for a device-tree class, or None."""
    return next((f for f, d, _ in _CLASS_MAP if d == dtree_class), None)


def cronus_to_dtree_class(cronus_class: str) -> str | None:
    """Return the device-tree class for a Cronus class, or None."""
    return next((d for _, d, c in _CLASS_MAP if c == cronus_class), None)


def dtree_to_cronus_class(dtree_class: str) -> str | None:
    """Return the Cronus class for a device-tree class, or None."""
    return next((c for _, d, c in _CLASS_MAP if d == dtree_class), None)


def dtree_name_to_class(name: str) -> str:
    """Strip the unit address and trailing index from a node name."""
    if not name:
        return "root"
    base = next((part for part in name.split("@") if part), None)
    if base is None:
        raise ValueError(f"invalid node name {name!r}")
    return base.rstrip(string.digits)


def _atoi(token: str) -> int:
    match = _ATOI.match(token)
    return int(match.group(1)) if match else 0


@dataclass
class CronusTarget:
    """The parts of a Cronus target name; -1 marks a missing number."""

    cage: int = -1
    node: int = -1
    slot: int = -1
    chip_position: int = -1
    chip_unit: int = -1
    chip_name: str | None = None
    class_name: str | None = None

    def _require(self, *fields: str) -> None:
        missing = [name for name in fields if getattr(self, name) in (-1, None)]
        if missing:
            raise ValueError(f"target lacks {', '.join(missing)}")

    def format(self) -> str:
        """Return the Cronus name of the target."""
        if self.chip_name is None:
            self._require("cage")
            name = f"k{self.cage}"
        elif self.class_name is None:
            self._require("cage", "node", "slot", "chip_position")
            name = (
                f"{self.chip_name}:k{self.cage}:n{self.node}:s{self.slot}"
                f":p{self.chip_position:02d}"
            )
        else:
            self._require("cage", "node", "slot", "chip_unit")
            prefix = (
                f"{self.chip_name}.{self.class_name}:k{self.cage}"
                f":n{self.node}:s{self.slot}"
            )
            if self.chip_position == -1:
                name = f"{prefix}:c{self.chip_unit}"
            else:
                name = f"{prefix}:p{self.chip_position:02d}:c{self.chip_unit}"

        if len(name) >= _NAME_MAX_LEN:
            raise ValueError(f"target name too long: {name}")
        return name


def parse_cronus_target(name: str, chip: str) -> CronusTarget:
    """Split a Cronus target name such as ``p10.core:k0:n0:s0:p00:c1``.

    ``chip`` is the chip name the target must use.
    """
    target = CronusTarget()
    tokens = iter([tok for tok in name.split(":") if tok])

    def invalid() -> ValueError:
        return ValueError(f"invalid cronus target {name!r}")

    tok = next(tokens, None)
    if tok is None:
        raise invalid()

    if tok[0] == "p":
        parts = [part for part in tok.split(".") if part]
        if not parts or parts[0] != chip:
            raise invalid()
        target.chip_name = parts[0]
        if len(parts) > 1:
            target.class_name = parts[1]
        tok = next(tokens, None)
        if tok is None:
            raise invalid()

    if tok[0] == "k":
        target.cage = _atoi(tok[1:])
        tok = next(tokens, None)
        if tok is None:
            return target

    if tok[0] == "n":
        target.node = _atoi(tok[1:])
        tok = next(tokens, None)
        if tok is None:
            raise invalid()

    if tok[0] == "s":
        target.slot = _atoi(tok[1:])
        tok = next(tokens, None)
        if tok is None:
            raise invalid()

    if tok[0] == "p":
        target.chip_position = _atoi(tok[1:])
        tok = next(tokens, None)
        if tok is None:
            return target

    if tok[0] == "c":
        target.chip_unit = _atoi(tok[1:])

    return target