import matplotlib

matplotlib.use("Agg")

import pytest

from mvpla.mvtable import itemize_columns, make_matrix
from mvpla.solver import CallableSolver


@pytest.fixture
def echo_solver():
    # returns the document unchanged; enough to exercise encode -> decode
    return CallableSolver(lambda text: text, lambda text: text)


@pytest.fixture
def canned_solver():
    # answers every call with a fixed document and remembers what it was sent
    def build(answer):
        sent = []

        def run(text):
            sent.append(text)
            return answer

        solver = CallableSolver(run, run)
        solver.sent = sent
        return solver

    return build


@pytest.fixture
def product_matrix():
    # column 3 is irrelevant: every (A,X) and (B,Y) pair appears with both U and V
    return make_matrix([
        ["A", "X", "U"],
        ["A", "X", "V"],
        ["B", "Y", "U"],
        ["B", "Y", "V"],
    ])


@pytest.fixture
def target_matrix():
    return make_matrix([
        ["A", "X", "U"],
        ["A", "Y", "U"],
        ["B", "Y", "V"],
    ])


@pytest.fixture
def product_variables(product_matrix):
    return itemize_columns(product_matrix)
