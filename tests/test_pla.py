import pytest

from mvpla.errors import PlaFormatError
from mvpla.pla import (
    Table,
    Ternary,
    decode_table,
    encode_table,
    table_from_minterms,
    table_to_minterms,
)

T, F, D = Ternary.TRUE, Ternary.FALSE, Ternary.DONT_CARE


def _four_row_table():
    table = Table()
    table.add_row([F, F, F, F], [T])
    table.add_row([F, F, F, T], [T])
    table.add_row([F, T, F, T], [T])
    table.add_row([F, T, T, T], [T])
    return table


def test_encode_binary_table():
    assert encode_table(_four_row_table()) == (
        ".i 4\n"
        ".o 1\n"
        ".type f\n"
        "0000 1\n"
        "0001 1\n"
        "0101 1\n"
        "0111 1\n"
        ".e\n"
    )


def test_decode_inverts_encode():
    table = Table()
    table.add_row([D, F, D, T], [T, F])
    table.add_row([F, F, F, D], [D, T])
    assert decode_table(encode_table(table)) == table
    assert decode_table(encode_table(_four_row_table())) == _four_row_table()


def test_decode_tolerates_directives_before_type():
    text = ".i 3\n.o 1\n.ilb a b c\n.ob f\n.type f\n1-0 1\n.e\n"
    table = decode_table(text)
    assert table.n_inputs == 3 and table.n_outputs == 1
    assert table.rows[0].inputs == (T, D, F)


def test_decode_rejects_directive_after_type():
    with pytest.raises(PlaFormatError):
        decode_table(".i 2\n.o 1\n.type f\n10 1\n.p 1\n.e\n")


def test_decode_without_type_line_reads_every_row():
    # espresso leaves out .type for its default output type
    text = ".i 4\n.o 1\n.p 2\n0-01 1\n01-1 1\n.e\n"
    table = decode_table(text)
    assert len(table) == 2
    assert str(table) == "0-01 1\n01-1 1\n"


def test_decode_stops_at_terminator():
    table = decode_table(".i 1\n.o 1\n.type f\n1 1\n.e\n0 1\n")
    assert len(table) == 1


def test_invalid_character_is_fatal():
    with pytest.raises(PlaFormatError):
        decode_table(".i 2\n.o 1\n.type f\n1x 1\n.e\n")
    with pytest.raises(PlaFormatError):
        decode_table(".i 2\n.o 1\n.type f\n10\n.e\n")


def test_row_width_must_match_header():
    table = Table(3, 1)
    with pytest.raises(PlaFormatError):
        table.add_row([T, F], [T])


def test_empty_table_needs_declared_header():
    assert encode_table(Table(2, 1)) == ".i 2\n.o 1\n.type f\n.e\n"
    with pytest.raises(PlaFormatError):
        encode_table(Table())


def test_minterm_helpers():
    table = table_from_minterms(4, [0, 1, 5, 7])
    assert table == _four_row_table()
    assert table_to_minterms(decode_table(".i 4\n.o 1\n.type f\n0-01 1\n.e\n")) == [1, 5]
    with pytest.raises(ValueError):
        table_from_minterms(2, [4])


def test_first_header_declaration_wins():
    text = ".i 3\n.o 1\n.i 5\n.o 2\n.type f\n1-0 1\n.e\n"
    table = decode_table(text)
    assert (table.n_inputs, table.n_outputs) == (3, 1)
    assert str(table) == "1-0 1\n"
