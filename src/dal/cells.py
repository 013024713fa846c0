"""Tagged representation of heterogeneous result-set cells."""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

_LEADING_FLOAT_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class CellKind(str, Enum):
    """Scalar kind of a single cell value."""

    NULL = "null"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    TEMPORAL = "temporal"
    STRUCTURED = "structured"


@dataclass(frozen=True)
class Cell:
    """A cell value tagged with its scalar kind."""

    kind: CellKind
    value: Any = None

    @classmethod
    def of(cls, value: Any) -> "Cell":
        """Tag a raw decoded value."""
        if value is None:
            return cls(CellKind.NULL)
        # bool is an int subclass, so it must be checked first
        if isinstance(value, bool):
            return cls(CellKind.BOOLEAN, value)
        if isinstance(value, (int, float, Decimal)):
            return cls(CellKind.NUMBER, value)
        if isinstance(value, str):
            return cls(CellKind.STRING, value)
        if isinstance(value, (datetime, date, time)):
            return cls(CellKind.TEMPORAL, value)
        return cls(CellKind.STRUCTURED, value)

    def as_text(self) -> str:
        """String form used for axis labels and sort keys; null renders empty."""
        if self.kind is CellKind.NULL:
            return ""
        if self.kind is CellKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind is CellKind.NUMBER:
            return _number_text(self.value)
        if self.kind is CellKind.TEMPORAL:
            return self.value.isoformat()
        if self.kind is CellKind.STRUCTURED:
            return json.dumps(self.value, default=str)
        return self.value

    def as_number(self) -> Optional[float]:
        """Coerce to a number, or None when the cell carries no numeric value."""
        if self.kind is CellKind.NUMBER:
            if isinstance(self.value, Decimal):
                # float() raises on signaling NaN
                if self.value.is_nan():
                    return None
                number = float(self.value)
            else:
                number = self.value
            if isinstance(number, float) and math.isnan(number):
                return None
            return number
        if self.kind is CellKind.STRING:
            return parse_leading_float(self.value)
        return None

    def display(self) -> str:
        """Text shown in a result-table cell."""
        if self.kind is CellKind.NULL:
            return "NULL"
        return self.as_text()

    def display_hint(self) -> str:
        """Styling hint for the table renderer."""
        if self.kind is CellKind.NULL:
            return "null"
        if self.kind is CellKind.NUMBER:
            return "number"
        if self.kind is CellKind.BOOLEAN:
            return "true" if self.value else "false"
        return "text"


def parse_leading_float(text: str) -> Optional[float]:
    """Parse the longest numeric prefix of `text`; None when there is none."""
    match = _LEADING_FLOAT_RE.match(text)
    if not match:
        return None
    return float(match.group(0))


def cell_at(row: Any, index: int) -> Cell:
    """Tag the value at `index`, treating a short row as a null cell."""
    try:
        return Cell.of(row[index])
    except (IndexError, KeyError, TypeError):
        return Cell(CellKind.NULL)


def _number_text(value: Any) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return str(value)
