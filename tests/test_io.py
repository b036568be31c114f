"""Tests for reading data files and writing result files."""

from __future__ import annotations

import pytest

from conemine import FrequentItemset, TransactionInputError, read_transactions, write_results
from conemine.io import parse_line


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "Data.txt"
    path.write_text("3 1 2 3\n2 1 2\n2 2 3\n2 1 3\n")
    return path


class TestReadTransactions:
    def test_leading_count_is_not_an_item(self, data_file, example_rows) -> None:
        assert read_transactions(data_file) == example_rows

    def test_accepts_str_path(self, data_file) -> None:
        assert len(read_transactions(str(data_file))) == 4

    def test_blank_line_is_an_empty_row(self, tmp_path) -> None:
        path = tmp_path / "Data.txt"
        path.write_text("1 5\n\n2 5 6\n")
        assert read_transactions(path) == [[5], [], [5, 6]]

    def test_extra_whitespace(self, tmp_path) -> None:
        path = tmp_path / "Data.txt"
        path.write_text("  2\t4   7  \n")
        assert read_transactions(path) == [[4, 7]]

    def test_bad_token_names_line(self, tmp_path) -> None:
        path = tmp_path / "Data.txt"
        path.write_text("2 1 2\n2 1 x\n")
        with pytest.raises(TransactionInputError, match="Line 2: 'x' is not an integer"):
            read_transactions(path)

    def test_negative_item(self, tmp_path) -> None:
        path = tmp_path / "Data.txt"
        path.write_text("2 1 -4\n")
        with pytest.raises(TransactionInputError, match="non-negative"):
            read_transactions(path)

    def test_length_mismatch_warns(self, tmp_path) -> None:
        path = tmp_path / "Data.txt"
        path.write_text("3 1 2\n")
        with pytest.warns(UserWarning, match="row length says 3 items but 2"):
            rows = read_transactions(path)
        assert rows == [[1, 2]]

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "Data.txt"
        path.write_text("")
        with pytest.raises(TransactionInputError, match="No transactions found"):
            read_transactions(path)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            read_transactions(tmp_path / "nope.txt")


def test_parse_line_zero_length_row() -> None:
    assert parse_line("0\n", 1) == []


class TestWriteResults:
    def test_lines(self, tmp_path) -> None:
        path = tmp_path / "Results.txt"
        n = write_results(path, [FrequentItemset((1,), 3), FrequentItemset((1, 2, 3), 1)])
        assert n == 2
        assert path.read_text() == "[1] 3\n[1 2 3] 1\n"

    def test_plain_tuples(self, tmp_path) -> None:
        path = tmp_path / "Results.txt"
        write_results(path, [((4, 5), 2)])
        assert path.read_text() == "[4 5] 2\n"

    def test_creates_parent_directories(self, tmp_path) -> None:
        path = tmp_path / "out" / "nested" / "Results.txt"
        assert write_results(path, []) == 0
        assert path.read_text() == ""

    def test_overwrites(self, tmp_path) -> None:
        path = tmp_path / "Results.txt"
        path.write_text("stale\n")
        write_results(path, [FrequentItemset((9,), 2)])
        assert path.read_text() == "[9] 2\n"
