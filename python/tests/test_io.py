import logging

import numpy as np
import pytest

import spmat
from spmat import FormatError
from spmat.io import from_text, load, save, to_text
from spmat.sparse import DOK, Coord

SAMPLE = """rows=3
cols=4
(0, 1, 5)
(2, 3, -7)

(1, 0, 2)
"""


def make_simple():
    return DOK.from_entries([(0, 1, 5), (1, 0, 2), (2, 3, -7)], shape=(3, 4))


def test_parse_sample():
    A = from_text(SAMPLE)
    assert A.shape == (3, 4)
    assert A == make_simple()
    np.testing.assert_array_equal(
        A.toarray(), np.array([[0, 5, 0, 0], [2, 0, 0, 0], [0, 0, 0, -7]])
    )


def test_classmethod_and_package_alias():
    assert DOK.from_text(SAMPLE) == spmat.from_text(SAMPLE)


def test_parse_tolerates_whitespace_and_crlf():
    text = "  rows = 2\r\ncols=2 \r\n\r\n  (0,0,1)  \r\n(1 ,1, +4)\r\n"
    A = from_text(text)
    assert A.entries == {Coord(0, 0): 1, Coord(1, 1): 4}


def test_parse_header_only():
    A = from_text("rows=2\ncols=5")
    assert A.shape == (2, 5)
    assert A.nnz == 0


def test_parse_zero_values_absorbed():
    A = from_text("rows=2\ncols=2\n(0, 0, 0)\n(1, 1, 3)\n(1, 1, 0)")
    assert A.nnz == 0


def test_parse_duplicate_last_wins():
    A = from_text("rows=2\ncols=2\n(0, 1, 3)\n(0, 1, 9)")
    assert A.entries == {Coord(0, 1): 9}


def test_reject_non_integer_value():
    with pytest.raises(FormatError):
        from_text("rows=2\ncols=2\n(0,0,x)")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "rows=2",
        "cols=2\nrows=2",
        "rows=two\ncols=2",
        "rows=2\ncols=2.5",
        "rows=0\ncols=2",
        "rows=2\ncols=-1",
        "rows=2\ncols=2\n0, 0, 1",
        "rows=2\ncols=2\n(0, 0)",
        "rows=2\ncols=2\n(0, 0, 1, 2)",
        "rows=2\ncols=2\n(0, 0, 1.5)",
        "rows=2\ncols=2\n[0, 0, 1]",
        "rows=2\ncols=2\n(0, 0, 1)(1, 1, 1)",
    ],
)
def test_reject_malformed(text):
    with pytest.raises(FormatError):
        from_text(text)


@pytest.mark.parametrize("entry", ["(2, 0, 1)", "(0, 2, 1)", "(-1, 0, 1)"])
def test_reject_out_of_bounds(entry):
    with pytest.raises(FormatError):
        from_text("rows=2\ncols=2\n" + entry)


def test_format_error_location():
    with pytest.raises(FormatError) as info:
        from_text("rows=2\ncols=2\n(0, 0, 1)\n\n(1, 1, y)")
    err = info.value
    assert err.lineno == 5
    assert err.line == "(1, 1, y)"
    assert "line 5" in str(err)
    assert isinstance(err, ValueError)


def test_to_text_row_major():
    A = make_simple()
    assert to_text(A) == "rows=3\ncols=4\n(0, 1, 5)\n(1, 0, 2)\n(2, 3, -7)"
    assert to_text(A, header=False) == "(0, 1, 5)\n(1, 0, 2)\n(2, 3, -7)"


def test_round_trip():
    A = make_simple()
    assert from_text(to_text(A)) == A


def test_zero_result_serializes_header_only():
    A = make_simple()
    assert to_text(A - A) == "rows=3\ncols=4"


def test_load_and_save(tmp_path, caplog):
    path = tmp_path / "result.txt"
    A = make_simple()
    with caplog.at_level(logging.INFO, logger="spmat.io"):
        save(A, path)
        B = load(str(path))
    assert B == A
    assert path.read_text(encoding="utf-8").endswith("(2, 3, -7)\n")
    assert any("Saved" in rec.getMessage() for rec in caplog.records)


def test_file_operation_pipeline(tmp_path):
    left = tmp_path / "matrix1.txt"
    right = tmp_path / "matrix2.txt"
    left.write_text("rows=2\ncols=2\n(0, 0, 1)\n(1, 1, 2)\n", encoding="utf-8")
    right.write_text("rows=2\ncols=2\n(0, 1, 3)\n(1, 0, 4)\n", encoding="utf-8")
    out = tmp_path / "result.txt"
    save(spmat.ops.apply("3", load(left), load(right)), out)
    assert out.read_text(encoding="utf-8") == "rows=2\ncols=2\n(0, 1, 3)\n(1, 0, 8)\n"


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load(tmp_path / "missing.txt")


def test_leading_blank_lines_keep_line_numbers():
    with pytest.raises(FormatError) as info:
        from_text("\n\nrows=2\ncols=2\n(0,0,x)")
    assert info.value.lineno == 5
    assert from_text("\n  \nrows=2\ncols=2\n(1, 1, 3)\n").entries == {Coord(1, 1): 3}


def test_round_trip_after_numpy_index_set():
    A = DOK((2, 2))
    A[np.int64(1), np.int64(0)] = 5
    assert from_text(to_text(A)) == A
