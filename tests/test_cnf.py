import pytest
from sympy import And, Not, Or

from mvpla.cnf import (
    Lit,
    clause,
    cnf_from_expr,
    cnf_from_table,
    cnf_to_expr,
    format_clauses,
    get_variables,
    parse_clauses,
    table_from_cnf,
)
from mvpla.errors import PlaFormatError
from mvpla.pla import Ternary, encode_table

P = Lit.positive
N = Lit.negative


def _star_cnf():
    return [clause(P(1), P(k)) for k in range(2, 6)]


def test_blocking_rows_invert_literals():
    table = table_from_cnf(_star_cnf(), 6)
    assert encode_table(table) == (
        ".i 6\n"
        ".o 1\n"
        ".type f\n"
        "-00--- 1\n"
        "-0-0-- 1\n"
        "-0--0- 1\n"
        "-0---0 1\n"
        ".e\n"
    )


def test_negative_literal_becomes_true_cell():
    table = table_from_cnf([clause(N(0), P(2))], 3)
    row = table.rows[0]
    assert row.inputs == (Ternary.TRUE, Ternary.DONT_CARE, Ternary.FALSE)
    assert row.outputs == (Ternary.TRUE,)


def test_bridge_round_trip():
    cnf = [clause(P(0), N(3)), clause(N(1)), clause(P(2), P(4), N(0))]
    assert set(cnf_from_table(table_from_cnf(cnf, 8))) == set(cnf)


def test_width_is_inferred_and_checked():
    assert table_from_cnf([clause(P(0), N(4))]).n_inputs == 5
    with pytest.raises(PlaFormatError):
        table_from_cnf([clause(P(6))], 6)


def test_tautologies_block_nothing():
    table = table_from_cnf([clause(P(0), N(0)), clause(P(1))], 2)
    assert len(table) == 1


def test_dimacs_parsing():
    text = "c sample\np cnf 3 2\n1 -2 0\n3\n-1 0\n"
    cnf = parse_clauses(text)
    assert cnf == [clause(P(0), N(1)), clause(P(2), N(0))]
    assert format_clauses(cnf) == "1 -2 0\n-1 3 0\n"
    assert Lit.from_int(-3) == N(2)
    assert N(2).to_int() == -3
    with pytest.raises(PlaFormatError):
        parse_clauses("1 x 0\n")


def test_sympy_interop():
    a, b, c = get_variables(3)
    expr = And(Or(a, b), Or(Not(a), c))
    cnf = cnf_from_expr(expr, (a, b, c))
    assert set(cnf) == {clause(P(0), P(1)), clause(N(0), P(2))}
    assert set(cnf_from_expr(cnf_to_expr(cnf, (a, b, c)), (a, b, c))) == set(cnf)


def test_sympy_rejects_unknown_symbols():
    a, b = get_variables(2)
    assert (str(a), str(b)) == ("A", "B")
    with pytest.raises(ValueError):
        cnf_from_expr(Or(a, b), (b,))


def test_satlib_trailer_ends_the_clauses():
    cnf = parse_clauses("p cnf 2 1\n1 2 0\n%\n0\n")
    assert cnf == [clause(P(0), P(1))]
    assert parse_clauses("1 0\n0\n-2 0\n") == [clause(P(0)), clause(N(1))]
