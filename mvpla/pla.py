"""Ternary rows and the single-valued (binary) PLA table codec."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import PlaFormatError

logger = logging.getLogger(__name__)


class Ternary(Enum):
    """One PLA cell: true, false or don't-care."""

    TRUE = "1"
    FALSE = "0"
    DONT_CARE = "-"

    @classmethod
    def from_bool(cls, value: bool) -> "Ternary":
        return cls.TRUE if value else cls.FALSE

    @classmethod
    def from_char(cls, ch: str) -> "Ternary":
        try:
            return cls(ch)
        except ValueError:
            raise PlaFormatError(f"Invalid character in PLA row: {ch!r}") from None

    @property
    def char(self) -> str:
        return self.value


def _parse_field(field: str) -> Tuple[Ternary, ...]:
    return tuple(Ternary.from_char(ch) for ch in field)


def _format_field(values: Iterable[Ternary]) -> str:
    return "".join(v.char for v in values)


@dataclass(frozen=True)
class Row:
    """Input and output cells of one PLA line."""

    inputs: Tuple[Ternary, ...]
    outputs: Tuple[Ternary, ...]

    def __str__(self) -> str:
        return f"{_format_field(self.inputs)} {_format_field(self.outputs)}"


class Table:
    """Single-valued PLA: ordered rows plus the ``.i``/``.o`` header.

    Header widths may be declared up front; otherwise the first row fixes
    them. Every later row must match.
    """

    def __init__(self, n_inputs: Optional[int] = None, n_outputs: Optional[int] = None) -> None:
        self.n_inputs = n_inputs
        self.n_outputs = n_outputs
        self.rows: List[Row] = []

    def add_row(self, inputs: Sequence[Ternary], outputs: Sequence[Ternary]) -> Row:
        row = Row(tuple(inputs), tuple(outputs))
        if self.n_inputs is None:
            self.n_inputs = len(row.inputs)
        if self.n_outputs is None:
            self.n_outputs = len(row.outputs)
        if len(row.inputs) != self.n_inputs or len(row.outputs) != self.n_outputs:
            raise PlaFormatError(
                f"Row width {len(row.inputs)}/{len(row.outputs)} does not match "
                f"header {self.n_inputs}/{self.n_outputs}."
            )
        self.rows.append(row)
        return row

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return (
            self.n_inputs == other.n_inputs
            and self.n_outputs == other.n_outputs
            and self.rows == other.rows
        )

    def __repr__(self) -> str:
        return f"Table(n_inputs={self.n_inputs}, n_outputs={self.n_outputs}, rows={len(self.rows)})"

    def __str__(self) -> str:
        return "".join(f"{row}\n" for row in self.rows)


def encode_table(table: Table) -> str:
    """Serialize a table into ``.type f`` PLA text."""
    if table.n_inputs is None or table.n_outputs is None:
        raise PlaFormatError("Table header is undefined; add a row or declare the widths.")
    lines = [f".i {table.n_inputs}", f".o {table.n_outputs}", ".type f"]
    lines.extend(str(row) for row in table.rows)
    lines.append(".e")
    logger.debug("Encoded PLA table with %d rows", len(table.rows))
    return "\n".join(lines) + "\n"


def _directive_int(line: str) -> int:
    parts = line.split()
    if len(parts) != 2:
        raise PlaFormatError(f"Malformed directive: {line!r}")
    try:
        return int(parts[1])
    except ValueError:
        raise PlaFormatError(f"Malformed directive: {line!r}") from None


def decode_table(text: str) -> Table:
    """Parse single-valued PLA text.

    The header comes from the first ``.i``/``.o`` seen. Body rows are the
    lines after ``.type`` up to ``.e``; espresso leaves out ``.type`` when
    printing the default ``f`` type, in which case every non-directive
    line is a row.
    """
    lines = text.splitlines()
    n_inputs: Optional[int] = None
    n_outputs: Optional[int] = None
    type_index: Optional[int] = None
    end_index = len(lines)

    for idx, raw in enumerate(lines):
        line = raw.strip()
        if line in (".e", ".end"):
            end_index = idx
            break
        if line.startswith(".i ") and n_inputs is None:
            n_inputs = _directive_int(line)
        elif line.startswith(".o ") and n_outputs is None:
            n_outputs = _directive_int(line)
        elif line.startswith(".type") and type_index is None:
            type_index = idx

    table = Table(n_inputs, n_outputs)
    start = 0 if type_index is None else type_index + 1
    for raw in lines[start:end_index]:
        line = raw.strip()
        if not line:
            continue
        if line.startswith("."):
            if type_index is None:
                continue
            raise PlaFormatError(f"Directive after .type: {line!r}")
        inputs, sep, outputs = line.partition(" ")
        if not sep:
            raise PlaFormatError(f"PLA row has no output field: {line!r}")
        table.add_row(_parse_field(inputs), _parse_field(outputs.strip()))
    return table


def validate_minterm_range(minterms: Iterable[int], n: int) -> None:
    """Ensure all minterms are within the range for the current variable count."""
    max_valid = (1 << n) - 1
    invalid = [m for m in minterms if m < 0 or m > max_valid]
    if invalid:
        raise ValueError(
            f"Minterms out of range for {n} variables (0-{max_valid}): {sorted(set(invalid))}"
        )


def table_from_minterms(n_inputs: int, minterms: Iterable[int]) -> Table:
    """One-output on-set table with a row per minterm, MSB first."""
    if n_inputs < 1:
        raise ValueError("Number of variables must be positive.")
    mins = list(minterms)
    validate_minterm_range(mins, n_inputs)
    table = Table(n_inputs, 1)
    for value in mins:
        bits = [(value >> (n_inputs - 1 - idx)) & 1 for idx in range(n_inputs)]
        table.add_row([Ternary.from_bool(bit) for bit in bits], [Ternary.TRUE])
    return table


def table_to_minterms(table: Table, output: int = 0) -> List[int]:
    """Sorted minterm indices covered by rows asserting the given output."""
    mins = set()
    for row in table.rows:
        if row.outputs[output] is not Ternary.TRUE:
            continue
        choices = [
            (0, 1) if cell is Ternary.DONT_CARE else (1 if cell is Ternary.TRUE else 0,)
            for cell in row.inputs
        ]
        for bits in itertools.product(*choices):
            idx = 0
            for bit in bits:
                idx = (idx << 1) | bit
            mins.add(idx)
    return sorted(mins)


__all__ = [
    "Ternary",
    "Row",
    "Table",
    "encode_table",
    "decode_table",
    "validate_minterm_range",
    "table_from_minterms",
    "table_to_minterms",
]
