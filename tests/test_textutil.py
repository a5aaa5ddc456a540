from oceanlab.textutil import (
    format_float_matrix,
    format_floats,
    format_int_matrix,
    format_ints,
)


def test_format_ints():
    assert format_ints([1, 2, 3]) == "1, 2, 3, \n"


def test_format_ints_empty():
    assert format_ints([]) == "\n"


def test_format_floats_uses_g_style():
    assert format_floats([0.5, 2.0]) == "0.5, 2, \n"


def test_int_matrix_is_rows_plus_blank_line():
    rows = [[1, -2], [3, 4], [5, 6]]
    text = format_int_matrix(rows)
    assert text == "".join(format_ints(r) for r in rows) + "\n"
    assert text.count("\n") == len(rows) + 1


def test_float_matrix_is_rows_plus_blank_line():
    rows = [[0.25], [1.5]]
    text = format_float_matrix(rows)
    assert text == format_floats(rows[0]) + format_floats(rows[1]) + "\n"


def test_empty_matrix():
    assert format_int_matrix([]) == "\n"