import pytest

from mvpla.cnf import Lit, clause
from mvpla.itemizer import Itemizer
from mvpla.minimize import (
    d1merge,
    d1merge_matrix,
    espresso,
    espresso_cnf,
    espresso_compress,
    espresso_multi,
    espresso_reduce,
)
from mvpla.mvtable import format_matrix, itemize_columns, make_matrix
from mvpla.pla import decode_table, table_from_minterms


def test_espresso_round_trips_through_solver(echo_solver):
    table = table_from_minterms(4, [0, 1, 5, 7])
    assert espresso(table, echo_solver) == table


def test_espresso_reads_minimized_answer(canned_solver):
    solver = canned_solver(".i 4\n.o 1\n.p 2\n000- 1\n01-1 1\n.e\n")
    result = espresso(table_from_minterms(4, [0, 1, 5, 7]), solver)
    assert str(result) == "000- 1\n01-1 1\n"
    assert solver.sent[0].startswith(".i 4\n.o 1\n.type f\n0000 1\n")


def test_espresso_cnf(echo_solver, canned_solver):
    cnf = [clause(Lit.positive(1), Lit.positive(k)) for k in range(2, 6)]
    assert set(espresso_cnf(cnf, 6, echo_solver)) == set(cnf)

    # x1 alone blocks everything the four clauses block
    solver = canned_solver(".i 6\n.o 1\n.p 1\n-0---- 1\n.e\n")
    assert espresso_cnf(cnf, 6, solver) == [clause(Lit.positive(1))]


def test_compress(product_matrix, product_variables, canned_solver):
    solver = canned_solver(
        ".mv 4 0 2 2 2 2\n.ob ON OFF\n.p 2\n 10 10 11 10\n 01 01 11 10\n.e\n"
    )
    result = espresso_compress(product_matrix, product_variables, solver)
    assert format_matrix(result) == "A, X, *\nB, Y, *\n"
    assert solver.sent[0].startswith(".mv 4 0 2 2 2 2\n.ob ON OFF\n.p 4\n")


def test_reduce(target_matrix, canned_solver):
    variables = itemize_columns(target_matrix)
    solver = canned_solver(".mv 3 0 2 2 2\n.p 2\n 01 01 01\n 10 11 10\n.e\n")
    result = espresso_reduce(target_matrix, variables, solver)
    assert format_matrix(result) == "B, Y, V\nA, *, U\n"
    assert espresso_multi is espresso_reduce


def test_merge_paths_use_merge(canned_solver):
    solver = canned_solver(".i 2\n.o 1\n.p 1\n1- 1\n.e\n")
    solver._minimize = lambda text: pytest.fail("minimize must not be called")
    result = d1merge(table_from_minterms(2, [2, 3]), solver)
    assert result == decode_table(".i 2\n.o 1\n.type f\n1- 1\n.e\n")


def test_matrix_merge_keeps_target_column(canned_solver):
    variables = [Itemizer(["a", "b"]), Itemizer(["y", "n"])]
    solver = canned_solver(".mv 2 0 2 2\n.p 1\n 11 10\n.e\n")
    merged = d1merge_matrix(make_matrix([["a", "y"], ["b", "y"]]), variables, solver)
    assert format_matrix(merged) == "*, y\n"
    assert solver.sent[0] == ".mv 2 0 2 2\n.p 2\n.type f\n10|10\n01|10\n.e\n"
