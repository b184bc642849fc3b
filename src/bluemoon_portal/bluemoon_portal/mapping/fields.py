"""Declarative field mapping between server records and portal records.

The REST server names fields in Vietnamese (``chuHo``, ``hoatDong``, ...)
while every view and service in the portal works with English keys
(``ownerName``, ``active``, ...). Each entity declares one table of
``FieldSpec`` pairs and the same table drives both directions, so a record
that went out through ``to_wire`` comes back unchanged through
``to_canonical``.

Inbound reading is best-effort: a missing or unreadable value yields the
field's declared default (``''``, ``False``, ``0`` or ``None``), never a
missing key. Input records are never mutated.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)

_MISSING = object()


class FieldKind(str, Enum):
    TEXT = "text"
    FLAG = "flag"
    INTEGER = "integer"
    NUMBER = "number"
    REFERENCE = "reference"
    DATE = "date"
    LABEL = "label"


_KIND_DEFAULTS = {
    FieldKind.TEXT: "",
    FieldKind.FLAG: False,
    FieldKind.INTEGER: 0,
    FieldKind.NUMBER: 0,
    FieldKind.REFERENCE: None,
    FieldKind.DATE: None,
}


def _parse_number(value: Any) -> Optional[int | float]:
    """Read an int/float from numbers or numeric strings; None if unreadable."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


@dataclass(frozen=True)
class FieldSpec:
    """One wire key paired with one canonical key.

    ``wire`` may be a dotted path (``hoKhau.id``) for nested server objects.
    ``aliases`` are extra wire paths tried in order when reading; ``mirrors``
    are extra wire keys written with the same value. ``labels`` is the
    (true, false) pair of a LABEL field.
    """

    wire: str
    canonical: str
    kind: FieldKind = FieldKind.TEXT
    default: Any = _MISSING
    aliases: tuple[str, ...] = ()
    mirrors: tuple[str, ...] = ()
    labels: tuple[str, str] = ("", "")

    def fallback(self) -> Any:
        if self.default is not _MISSING:
            return self.default
        if self.kind is FieldKind.LABEL:
            return self.labels[1]
        return _KIND_DEFAULTS[self.kind]

    def read(self, value: Any) -> Any:
        """Coerce a raw server value into the canonical value."""

        kind = self.kind
        if kind is FieldKind.FLAG:
            return value is True
        if kind is FieldKind.LABEL:
            return self.labels[0] if value is True else self.labels[1]
        if kind is FieldKind.TEXT:
            if isinstance(value, str):
                return value
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return str(value)
            return self.fallback()
        if kind is FieldKind.INTEGER:
            number = _parse_number(value)
            return int(number) if number is not None else self.fallback()
        if kind is FieldKind.NUMBER:
            number = _parse_number(value)
            return number if number is not None else self.fallback()
        if kind is FieldKind.REFERENCE:
            if isinstance(value, Mapping):
                value = value.get("id")
            if isinstance(value, str):
                text = value.strip()
                if text.isdigit():
                    return int(text)
                return text or self.fallback()
            if isinstance(value, float) and math.isfinite(value) and value.is_integer():
                return int(value)
            if isinstance(value, int) and not isinstance(value, bool):
                return value
            return self.fallback()
        if kind is FieldKind.DATE:
            if isinstance(value, datetime):
                return value.isoformat()
            if isinstance(value, date):
                return value.isoformat()
            if isinstance(value, str) and value.strip():
                return value
            return self.fallback()
        return self.fallback()

    def write(self, value: Any) -> Any:
        """Coerce a canonical value into the server value."""

        if self.kind is FieldKind.LABEL:
            return value == self.labels[0]
        return self.read(value)


def _lookup(record: Mapping, path: str) -> Any:
    current: Any = record
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _assign(record: dict, path: str, value: Any) -> None:
    parts = path.split(".")
    target = record
    for part in parts[:-1]:
        nested = target.get(part)
        if not isinstance(nested, dict):
            nested = {}
            target[part] = nested
        target = nested
    target[parts[-1]] = value


@dataclass(frozen=True)
class EntityMapping:
    """Bidirectional mapping table for one entity."""

    name: str
    fields: tuple[FieldSpec, ...]

    @property
    def canonical_keys(self) -> tuple[str, ...]:
        return tuple(f.canonical for f in self.fields)

    @property
    def wire_keys(self) -> tuple[str, ...]:
        return tuple(f.wire for f in self.fields)

    def field(self, canonical: str) -> FieldSpec:
        for f in self.fields:
            if f.canonical == canonical:
                return f
        raise KeyError(canonical)

    def to_wire(self, record: Any) -> Optional[dict]:
        if not isinstance(record, Mapping):
            return None
        out: dict = {}
        for f in self.fields:
            value = record.get(f.canonical)
            wire_value = f.write(value) if value is not None else f.write(f.fallback())
            _assign(out, f.wire, wire_value)
            for mirror in f.mirrors:
                _assign(out, mirror, wire_value)
        return out

    def to_canonical(self, record: Any) -> Optional[dict]:
        if not isinstance(record, Mapping):
            return None
        out: dict = {}
        for f in self.fields:
            raw = _MISSING
            for path in (f.wire, *f.aliases):
                candidate = _lookup(record, path)
                if candidate is not _MISSING and candidate is not None:
                    raw = candidate
                    break
            out[f.canonical] = f.fallback() if raw is _MISSING else f.read(raw)
        return out

    def normalize(self, record: Any) -> dict:
        """Canonical record with every declared key, values coerced to their kind."""

        return self.to_canonical(self.to_wire(record)) or {}

    def to_canonical_many(self, records: Iterable) -> list[dict]:
        items: list[dict] = []
        for record in records:
            mapped = self.to_canonical(record)
            if mapped is None:
                logger.warning("Skipping non-object %s record: %r", self.name, record)
                continue
            items.append(mapped)
        return items
