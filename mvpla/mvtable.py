"""Multi-valued PLA codec for matrices of optional categorical value sets.

A matrix is a 2-D numpy object array. Each cell is either ``None`` (the
wildcard, any value of that column) or a non-empty list of values. Every
column has an :class:`~mvpla.itemizer.Itemizer` that gives each value its
one-hot position; the same itemizers must be used to encode the matrix
and to decode the solver's answer.

Two table shapes share the codec:

``OutputMode.BINARY``
    The compress shape. An extra two-valued ``ON``/``OFF`` output variable
    is declared and every row is asserted ON.
``OutputMode.NONE``
    The reduce shape. No output variable. The right-most column is the
    distinguished target variable and its values always survive decoding.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence

import numpy as np

from .errors import PlaFormatError, UnknownIdentityError, VocabularyError
from .itemizer import Itemizer
from .pla import _directive_int

logger = logging.getLogger(__name__)

ON_ROW_SUFFIX = "10"


class OutputMode(Enum):
    BINARY = "binary"
    NONE = "none"


def _position_reserving_zero(itemizer: Itemizer, value: Hashable) -> int:
    identity = itemizer.id_of_opt(value)
    if identity is None:
        # an unseen value means the itemizers were not built from this matrix
        raise VocabularyError(value)
    return identity - 1


def _position_zero_based(itemizer: Itemizer, value: Hashable) -> int:
    return itemizer.id_of_exists(value) - 1


_POSITION_RULES: Dict[OutputMode, Callable[[Itemizer, Hashable], int]] = {
    OutputMode.BINARY: _position_reserving_zero,
    OutputMode.NONE: _position_zero_based,
}


def make_matrix(rows: Iterable[Sequence]) -> np.ndarray:
    """Build a cell matrix from nested lists.

    ``None`` stays a wildcard, a bare string or scalar becomes a one-value
    cell and any other collection becomes a list of values.
    """
    rows = [list(r) for r in rows]
    n_cols = len(rows[0]) if rows else 0
    matrix = np.empty((len(rows), n_cols), dtype=object)
    for i, row in enumerate(rows):
        if len(row) != n_cols:
            raise ValueError(f"Row {i} has {len(row)} cells, expected {n_cols}.")
        for j, cell in enumerate(row):
            if cell is None:
                matrix[i, j] = None
            elif isinstance(cell, (list, tuple, set, frozenset)):
                matrix[i, j] = list(cell)
            else:
                matrix[i, j] = [cell]
    return matrix


def itemize_columns(matrix: np.ndarray) -> List[Itemizer]:
    """One itemizer per column, filled top to bottom in first-seen order."""
    variables = []
    for j in range(matrix.shape[1]):
        itemizer: Itemizer = Itemizer()
        for cell in matrix[:, j]:
            if cell is not None:
                for value in cell:
                    itemizer.id_of(value)
        variables.append(itemizer)
    return variables


def onehot_field(cell: Optional[Sequence], itemizer: Itemizer, mode: OutputMode) -> str:
    """One-hot characters for a cell; a wildcard is all ones."""
    width = len(itemizer)
    if cell is None:
        return "1" * width
    if len(cell) == 0:
        raise PlaFormatError("A cell must be a wildcard or hold at least one value.")
    position = _POSITION_RULES[mode]
    bits = ["0"] * width
    for value in cell:
        bits[position(itemizer, value)] = "1"
    return "".join(bits)


def onehot_rows(
    matrix: np.ndarray, variables: Sequence[Itemizer], mode: OutputMode = OutputMode.BINARY
) -> List[List[str]]:
    """Per-row lists of one-hot fields, one field per column."""
    if matrix.ndim != 2 or matrix.shape[1] != len(variables):
        raise ValueError(
            f"Matrix has {matrix.shape[-1] if matrix.ndim else 0} columns "
            f"but {len(variables)} variables were given."
        )
    return [
        [onehot_field(cell, var, mode) for cell, var in zip(row, variables)]
        for row in matrix
    ]


def encode_matrix(
    matrix: np.ndarray, variables: Sequence[Itemizer], mode: OutputMode = OutputMode.BINARY
) -> str:
    """Serialize a cell matrix into ``.mv`` PLA text."""
    fields = onehot_rows(matrix, variables, mode)
    n_rows, n_cols = matrix.shape
    widths = [str(len(var)) for var in variables]

    if mode is OutputMode.BINARY:
        lines = [" ".join([".mv", str(n_cols + 1), "0", *widths, "2"]), ".ob ON OFF"]
    else:
        lines = [" ".join([".mv", str(n_cols), "0", *widths])]
    lines.append(f".p {n_rows}")
    lines.append(".type f")

    for row in fields:
        body = "|".join(row)
        if mode is OutputMode.BINARY:
            body = f"{body}|{ON_ROW_SUFFIX}"
        lines.append(body)
    lines.append(".e")
    logger.debug("Encoded %dx%d matrix in %s mode", n_rows, n_cols, mode.value)
    return "\n".join(lines) + "\n"


class _GridBuilder:
    """Result grid that stays unsized until a ``.p`` directive arrives."""

    def __init__(self, n_vars: int) -> None:
        self.n_vars = n_vars
        self.grid: Optional[np.ndarray] = None
        self.cursor = 0

    def resize(self, n_rows: int) -> None:
        self.grid = np.full((n_rows, self.n_vars), None, dtype=object)
        self.cursor = 0

    def next_row(self) -> int:
        if self.grid is None:
            raise PlaFormatError("Body row found before any .p directive.")
        if self.cursor >= self.grid.shape[0]:
            raise PlaFormatError(f"More rows than the {self.grid.shape[0]} declared by .p.")
        row = self.cursor
        self.cursor += 1
        return row

    def append(self, row: int, col: int, value) -> None:
        cell = self.grid[row, col]
        if cell is None:
            self.grid[row, col] = [value]
        else:
            cell.append(value)

    def build(self) -> np.ndarray:
        if self.grid is None:
            return np.empty((0, self.n_vars), dtype=object)
        return self.grid


def decode_matrix(
    text: str, variables: Sequence[Itemizer], mode: OutputMode = OutputMode.BINARY
) -> np.ndarray:
    """Parse the solver's ``.mv`` answer back into a cell matrix.

    Rows are split on single spaces and the first token is skipped; the
    remaining tokens line up with ``variables``. Tokens past the last
    variable (the ON/OFF class) are ignored.
    """
    n_vars = len(variables)
    distinguished = n_vars - 1 if mode is OutputMode.NONE else None
    builder = _GridBuilder(n_vars)

    for raw in text.splitlines():
        line = raw.rstrip()
        head = line.lstrip()
        if not head:
            continue
        if head in (".e", ".end"):
            break
        if head.split()[0] == ".p":
            builder.resize(_directive_int(head))
            continue
        if head.startswith("."):
            continue

        row = builder.next_row()
        for j, token in enumerate(line.split(" ")[1:]):
            if j >= n_vars:
                break
            if j != distinguished and all(ch == "1" for ch in token):
                continue
            itemizer = variables[j]
            if len(token) > len(itemizer):
                raise PlaFormatError(
                    f"Token {token!r} is wider than variable {j} ({len(itemizer)} values)."
                )
            for p, ch in enumerate(token):
                if ch != "1":
                    continue
                try:
                    value = itemizer.value_of(p + 1)
                except UnknownIdentityError as exc:
                    raise PlaFormatError(str(exc)) from exc
                builder.append(row, j, value)

    result = builder.build()
    logger.debug("Decoded %d rows in %s mode", result.shape[0], mode.value)
    return result


def parse_matrix_text(text: str) -> np.ndarray:
    """Read a CSV-like grid: ``,`` between cells, ``/`` inside a cell, ``*`` for wildcard."""
    rows = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        cells = []
        for cell in line.split(","):
            cell = cell.strip()
            if cell in ("", "*"):
                cells.append(None)
            else:
                cells.append([v.strip() for v in cell.split("/") if v.strip()])
        rows.append(cells)
    return make_matrix(rows)


def format_matrix(matrix: np.ndarray) -> str:
    return "".join(
        ", ".join("*" if cell is None else "/".join(str(v) for v in cell) for cell in row) + "\n"
        for row in matrix
    )


__all__ = [
    "OutputMode",
    "make_matrix",
    "itemize_columns",
    "onehot_field",
    "onehot_rows",
    "encode_matrix",
    "decode_matrix",
    "parse_matrix_text",
    "format_matrix",
]
