"""Typed firmware attributes: info database, big-endian encoding, Cronus targets, dump lines and a linked list."""

__version__ = "0.1.0"
__all__ = [
    "attribute",
    "encoding",
    "namelist",
    "infodb",
    "target",
    "cronus_export",
    "cronus_import",
    "dlist",
]