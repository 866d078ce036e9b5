"""Convenience exports for the PLA codecs and espresso pipelines."""

from .errors import PlaFormatError, SolverError, UnknownIdentityError, VocabularyError
from .itemizer import Itemizer
from .pla import (
    Row,
    Table,
    Ternary,
    decode_table,
    encode_table,
    table_from_minterms,
    table_to_minterms,
)
from .cnf import (
    Lit,
    clause,
    cnf_from_expr,
    cnf_from_table,
    cnf_to_expr,
    parse_clauses,
    table_from_cnf,
)
from .mvtable import (
    OutputMode,
    decode_matrix,
    encode_matrix,
    itemize_columns,
    make_matrix,
)
from .config import SolverConfig
from .solver import CallableSolver, EspressoExecutable, NativeEspresso, make_solver
from .minimize import (
    d1merge,
    d1merge_matrix,
    espresso,
    espresso_cnf,
    espresso_compress,
    espresso_multi,
    espresso_reduce,
)

__all__ = [
    "CallableSolver",
    "EspressoExecutable",
    "Itemizer",
    "Lit",
    "NativeEspresso",
    "OutputMode",
    "PlaFormatError",
    "Row",
    "SolverConfig",
    "SolverError",
    "Table",
    "Ternary",
    "UnknownIdentityError",
    "VocabularyError",
    "clause",
    "cnf_from_expr",
    "cnf_from_table",
    "cnf_to_expr",
    "d1merge",
    "d1merge_matrix",
    "decode_matrix",
    "decode_table",
    "encode_matrix",
    "encode_table",
    "espresso",
    "espresso_cnf",
    "espresso_compress",
    "espresso_multi",
    "espresso_reduce",
    "itemize_columns",
    "make_matrix",
    "make_solver",
    "parse_clauses",
    "table_from_cnf",
    "table_from_minterms",
    "table_to_minterms",
]
