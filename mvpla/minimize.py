"""Encode, run espresso, decode."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

import numpy as np

from .cnf import Clause, Cnf, cnf_from_table, table_from_cnf
from .itemizer import Itemizer
from .mvtable import OutputMode, decode_matrix, encode_matrix
from .pla import Table, decode_table, encode_table
from .solver import make_solver

logger = logging.getLogger(__name__)


def _solver_or_default(solver):
    return solver if solver is not None else make_solver()


def espresso(table: Table, solver=None) -> Table:
    """Minimize a single-valued table."""
    solver = _solver_or_default(solver)
    result = decode_table(solver.minimize(encode_table(table)))
    logger.info("espresso reduced %d rows to %d", len(table), len(result))
    return result


def espresso_cnf(cnf: Iterable[Clause], max_vars: Optional[int] = None, solver=None) -> Cnf:
    """Minimize a clause set through its blocking-row table."""
    return cnf_from_table(espresso(table_from_cnf(cnf, max_vars), solver))


def _run_matrix(
    matrix: np.ndarray, variables: Sequence[Itemizer], mode: OutputMode, solver, merge: bool
) -> np.ndarray:
    solver = _solver_or_default(solver)
    text = encode_matrix(matrix, variables, mode)
    answer = solver.merge(text) if merge else solver.minimize(text)
    result = decode_matrix(answer, variables, mode)
    logger.info(
        "%s (%s) reduced %d rows to %d",
        "d1merge" if merge else "espresso", mode.value, matrix.shape[0], result.shape[0],
    )
    return result


def espresso_compress(matrix: np.ndarray, variables: Sequence[Itemizer], solver=None) -> np.ndarray:
    """Pare a cell matrix down to its essential rows.

    Every row is asserted ON for a binary output class. Columns whose
    values stop mattering come back as ``None``.
    """
    return _run_matrix(matrix, variables, OutputMode.BINARY, solver, merge=False)


def espresso_reduce(matrix: np.ndarray, variables: Sequence[Itemizer], solver=None) -> np.ndarray:
    """Minimize a cell matrix whose right-most column is the target variable."""
    return _run_matrix(matrix, variables, OutputMode.NONE, solver, merge=False)


espresso_multi = espresso_reduce


def d1merge(table: Table, solver=None) -> Table:
    """Run the distance-1 merge pass over a single-valued table."""
    solver = _solver_or_default(solver)
    return decode_table(solver.merge(encode_table(table)))


def d1merge_matrix(
    matrix: np.ndarray,
    variables: Sequence[Itemizer],
    solver=None,
    mode: OutputMode = OutputMode.NONE,
) -> np.ndarray:
    """Run the distance-1 merge pass over a cell matrix."""
    return _run_matrix(matrix, variables, mode, solver, merge=True)


__all__ = [
    "espresso",
    "espresso_cnf",
    "espresso_compress",
    "espresso_reduce",
    "espresso_multi",
    "d1merge",
    "d1merge_matrix",
]
