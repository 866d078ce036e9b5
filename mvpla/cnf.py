"""Bridge between CNF clause sets and blocking-row PLA tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Sequence

from sympy import And, Not, Or, S, Symbol, symbols, to_cnf

from .errors import PlaFormatError
from .pla import Table, Ternary

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class Lit:
    """Literal over a 0-based variable index."""

    var: int
    negated: bool = False

    @classmethod
    def positive(cls, var: int) -> "Lit":
        return cls(var, False)

    @classmethod
    def negative(cls, var: int) -> "Lit":
        return cls(var, True)

    @classmethod
    def from_int(cls, value: int) -> "Lit":
        """Literal from a DIMACS integer (1-based, sign is polarity)."""
        if value == 0:
            raise ValueError("0 is a clause terminator, not a literal.")
        return cls(abs(value) - 1, value < 0)

    def to_int(self) -> int:
        return -(self.var + 1) if self.negated else self.var + 1

    def __neg__(self) -> "Lit":
        return Lit(self.var, not self.negated)

    def __str__(self) -> str:
        return f"{'~' if self.negated else ''}x{self.var}"


Clause = FrozenSet[Lit]
Cnf = List[Clause]


def clause(*lits: Lit) -> Clause:
    return frozenset(lits)


def _is_tautology(c: Clause) -> bool:
    return any(-lit in c for lit in c)


def table_from_cnf(cnf: Iterable[Clause], max_vars: Optional[int] = None) -> Table:
    """Encode each clause as the row of assignments that falsify it.

    A clause (a disjunction) is violated exactly when every literal is false,
    so by De Morgan a positive literal becomes a ``0`` cell and a negative
    literal a ``1`` cell. Variables missing from the clause stay ``-``.
    The output column is always ``1``. ``max_vars`` defaults to one past the
    highest variable index used.

    A tautological clause (one holding both ``x`` and ``~x``) blocks no
    assignment and gets no row, so the table can have fewer rows than
    there are clauses.
    """
    clauses = [frozenset(c) for c in cnf]
    if max_vars is None:
        max_vars = max((lit.var for c in clauses for lit in c), default=-1) + 1

    table = Table(max_vars, 1)
    for c in clauses:
        if _is_tautology(c):
            logger.debug("Skipping tautological clause %s", sorted(c))
            continue
        inputs = [Ternary.DONT_CARE] * max_vars
        for lit in c:
            if lit.var < 0 or lit.var >= max_vars:
                raise PlaFormatError(
                    f"Literal {lit} is outside the {max_vars} declared variables."
                )
            inputs[lit.var] = Ternary.from_bool(lit.negated)
        table.add_row(inputs, [Ternary.TRUE])
    logger.debug("Bridged %d clauses over %d variables", len(table), max_vars)
    return table


def cnf_from_table(table: Table) -> Cnf:
    """Read blocking rows back into clauses (inverse of :func:`table_from_cnf`)."""
    cnf: Cnf = []
    for row in table.rows:
        lits = []
        for idx, val in enumerate(row.inputs):
            if val is Ternary.TRUE:
                lits.append(Lit.negative(idx))
            elif val is Ternary.FALSE:
                lits.append(Lit.positive(idx))
        cnf.append(frozenset(lits))
    return cnf


def parse_clauses(text: str) -> Cnf:
    """Parse DIMACS-style clauses: signed 1-based integers ended by ``0``."""
    cnf: Cnf = []
    pending: List[Lit] = []
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("%"):
            # SATLIB trailer: end of data
            break
        if not line or line[0] in "cp":
            continue
        for token in line.split():
            try:
                value = int(token)
            except ValueError:
                raise PlaFormatError(f"Invalid literal {token!r} in clause line {line!r}") from None
            if value == 0:
                if not pending:
                    continue
                cnf.append(frozenset(pending))
                pending = []
            else:
                pending.append(Lit.from_int(value))
    if pending:
        cnf.append(frozenset(pending))
    return cnf


def format_clauses(cnf: Iterable[Clause]) -> str:
    return "".join(
        " ".join(str(lit.to_int()) for lit in sorted(c)) + " 0\n" for c in cnf
    )


def get_variables(n: int):
    """Return SymPy symbols (A, B, C, ...) for the requested variable count."""
    if n < 1:
        raise ValueError("Number of variables must be positive.")
    if n > 26:
        return symbols(f"x0:{n}")
    return symbols(" ".join(chr(65 + i) for i in range(n)), seq=True)


def cnf_from_expr(expr, vars_tuple: Sequence[Symbol]) -> Cnf:
    """Convert a SymPy boolean expression into clauses over vars_tuple."""
    index = {v: i for i, v in enumerate(vars_tuple)}
    extras = expr.free_symbols - set(index)
    if extras:
        names = ", ".join(sorted(str(sym) for sym in extras))
        raise ValueError(f"Expression contains variables outside the selected set: {names}")

    normal = to_cnf(expr)
    if normal is S.true:
        return []
    if normal is S.false:
        return [frozenset()]

    cnf: Cnf = []
    for term in (normal.args if isinstance(normal, And) else (normal,)):
        lits = []
        for lit in (term.args if isinstance(term, Or) else (term,)):
            if isinstance(lit, Not):
                lits.append(Lit.negative(index[lit.args[0]]))
            else:
                lits.append(Lit.positive(index[lit]))
        cnf.append(frozenset(lits))
    return cnf


def cnf_to_expr(cnf: Iterable[Clause], vars_tuple: Sequence[Symbol]):
    """Build the SymPy conjunction for a clause set."""
    terms = []
    for c in cnf:
        terms.append(
            Or(*[Not(vars_tuple[lit.var]) if lit.negated else vars_tuple[lit.var] for lit in sorted(c)])
        )
    return And(*terms)


__all__ = [
    "Lit",
    "Clause",
    "Cnf",
    "clause",
    "table_from_cnf",
    "cnf_from_table",
    "parse_clauses",
    "format_clauses",
    "get_variables",
    "cnf_from_expr",
    "cnf_to_expr",
]
