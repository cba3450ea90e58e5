"""Little-endian binary unpacking for dataclasses marked with ``@binpack``."""

from __future__ import annotations

import argparse
import dataclasses
import io
import struct
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")

_SKIP_KEY = "cgen"
_LAYOUT_ATTR = "_binpack_layout"
_UINT32 = struct.Struct("<I")
_ZERO_VALUES: dict[type, Any] = {int: 0, str: ""}
_NAMED_TYPES: dict[str, type] = {"int": int, "str": str}

SAMPLE_DATA = bytes(
    [128, 36, 17, 0]
    + [9, 0, 0, 0]
    + list(b"v.romanov")
    + [16, 0, 0, 0]
)


class BinpackError(Exception):
    """Raised when a type cannot be packed or the data cannot be unpacked."""


@dataclass(frozen=True)
class _Layout:
    fields: tuple[tuple[str, Any], ...]
    skipped: tuple[tuple[str, Any], ...]


def skip() -> Any:
    """Declare a dataclass field that is left out of the binary layout."""
    return dataclasses.field(default=None, metadata={_SKIP_KEY: "-"})


def _field_kind(hint: Any) -> Any:
    if isinstance(hint, str):
        return _NAMED_TYPES.get(hint.strip(), hint)
    return hint


def binpack(cls: type[T]) -> type[T]:
    """Mark a dataclass as unpackable from its binary layout."""
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"{cls!r} is not a dataclass")
    packed, skipped = [], []
    for field in dataclasses.fields(cls):
        hint = _field_kind(field.type)
        if field.metadata.get(_SKIP_KEY) == "-":
            skipped.append((field.name, hint))
        elif hint in (int, str):
            packed.append((field.name, hint))
        else:
            raise BinpackError(f"unsupported {hint!r} for field {cls.__name__}.{field.name}")
    setattr(cls, _LAYOUT_ATTR, _Layout(tuple(packed), tuple(skipped)))
    return cls


def _read(reader: io.BytesIO, size: int, what: str) -> bytes:
    chunk = reader.read(size)
    if len(chunk) != size:
        raise BinpackError(f"unexpected end of data while reading {what}")
    return chunk


def _read_uint32(reader: io.BytesIO, what: str) -> int:
    return _UINT32.unpack(_read(reader, _UINT32.size, what))[0]


def unpack(cls: type[T], data: bytes) -> T:
    """Decode ``data`` into a new instance of the ``@binpack`` class ``cls``."""
    layout = getattr(cls, _LAYOUT_ATTR, None)
    if not isinstance(layout, _Layout):
        raise BinpackError(f"{cls.__name__} is not marked for binpack")
    reader = io.BytesIO(data)
    values: dict[str, Any] = {}
    for name, kind in layout.fields:
        if kind is int:
            values[name] = _read_uint32(reader, name)
            continue
        raw = _read(reader, _read_uint32(reader, f"{name} length"), name)
        try:
            values[name] = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BinpackError(f"{name} is not valid UTF-8") from exc
    for name, kind in layout.skipped:
        if kind in _ZERO_VALUES:
            values[name] = _ZERO_VALUES[kind]
    return cls(**values)


@binpack
@dataclass
class User:
    """A user record: id, login and flags are packed, the real name is not."""

    id: int = 0
    real_name: str = skip()
    login: str = ""
    flags: int = 0


def main(argv: Sequence[str] | None = None) -> int:
    """Unpack a user record from a file (or a built-in sample) and print it."""
    parser = argparse.ArgumentParser(description="Unpack a binary user record.")
    parser.add_argument("path", nargs="?", help="file with packed data; '-' for stdin")
    args = parser.parse_args(argv)
    if args.path is None:
        data = SAMPLE_DATA
    elif args.path == "-":
        data = sys.stdin.buffer.read()
    else:
        with open(args.path, "rb") as handle:
            data = handle.read()
    try:
        user = unpack(User, data)
    except BinpackError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(f"Unpacked user {user!r}")
    return 0