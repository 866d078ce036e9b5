"""Streamlit page for the PLA codecs: ``streamlit run mvpla/app.py``."""

import os
import sys

# streamlit only puts this file's directory on sys.path; the package lives one level up
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st

from mvpla.cnf import format_clauses, parse_clauses, table_from_cnf
from mvpla.config import BACKENDS, SolverConfig
from mvpla.logging_config import setup_logging
from mvpla.minimize import espresso, espresso_cnf, espresso_compress, espresso_reduce
from mvpla.mvtable import (
    OutputMode,
    encode_matrix,
    format_matrix,
    itemize_columns,
    parse_matrix_text,
)
from mvpla.pla import encode_table, table_from_minterms, table_to_minterms
from mvpla.render import draw_onehot
from mvpla.solver import make_solver

# ------------------------------- page setup -------------------------------

st.set_page_config(page_title="Multi-valued PLA workbench", layout="wide")
st.title("🧮 Multi-valued PLA workbench")
st.markdown("---")

env_cfg = SolverConfig.from_env()
setup_logging(env_cfg.log_level)

with st.sidebar:
    backend = st.selectbox("Solver backend", BACKENDS, index=BACKENDS.index(env_cfg.backend))
    library_path = st.text_input("Library path", env_cfg.library_path or "")
    executable = st.text_input("Executable", env_cfg.executable)

mode = st.radio("Input:", ["Minterms", "CNF clauses", "Categorical matrix"])

if mode == "Minterms":
    n = st.number_input("Number of inputs:", min_value=1, max_value=16, value=4, step=1)
    raw_mins = st.text_input("Minterms (e.g. 0,1,5,7):")
elif mode == "CNF clauses":
    raw_cnf = st.text_area("Clauses, DIMACS style (e.g. `1 2 0`):", height=160)
    max_vars = st.number_input("Variable count (0 = infer):", min_value=0, value=0, step=1)
else:
    raw_matrix = st.text_area(
        "Rows of cells: `,` between cells, `/` between values, `*` for any value:",
        "A, X, U\nA, X, V\nB, Y, U\nB, Y, V\n",
        height=160,
    )
    variant = st.radio("Variant:", ["compress", "reduce"], horizontal=True)

# ------------------------------- on submit -------------------------------
if st.button("Minimize 🚀"):
    try:
        cfg = SolverConfig(
            backend=backend,
            library_path=library_path or None,
            executable=executable,
            log_level=env_cfg.log_level,
        )
        solver = make_solver(cfg)

        if mode == "Minterms":
            mins = [int(x.strip()) for x in raw_mins.split(",") if x.strip()]
            table = table_from_minterms(int(n), mins)
            st.text_area("Encoded PLA:", encode_table(table), height=180)
            result = espresso(table, solver)
            st.success(f"**{len(table)} rows → {len(result)} rows**")
            st.code(encode_table(result))
            st.info(f"Covered minterms: {table_to_minterms(result)}")

        elif mode == "CNF clauses":
            cnf = parse_clauses(raw_cnf)
            width = int(max_vars) or None
            st.text_area("Encoded PLA:", encode_table(table_from_cnf(cnf, width)), height=180)
            result = espresso_cnf(cnf, width, solver)
            st.success(f"**{len(cnf)} clauses → {len(result)} clauses**")
            st.code(format_clauses(result))

        else:
            matrix = parse_matrix_text(raw_matrix)
            variables = itemize_columns(matrix)
            out_mode = OutputMode.BINARY if variant == "compress" else OutputMode.NONE
            st.text_area("Encoded PLA:", encode_matrix(matrix, variables, out_mode), height=180)

            run = espresso_compress if out_mode is OutputMode.BINARY else espresso_reduce
            result = run(matrix, variables, solver)
            st.success(f"**{matrix.shape[0]} rows → {result.shape[0]} rows**")
            st.code(format_matrix(result))

            with st.container():
                st.markdown("### One-hot encoding")
                left, right = st.columns(2)
                left.pyplot(draw_onehot(matrix, variables, out_mode))
                right.pyplot(draw_onehot(result, variables, out_mode))

    except Exception as e:
        st.error(f"Minimization failed:\n{e}")
