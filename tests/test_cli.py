"""Tests for the ``conemine`` command line."""

from __future__ import annotations

import pytest

from conemine.cli import build_parser, main, run


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "Data.txt"
    path.write_text("3 1 2 3\n2 1 2\n2 2 3\n2 1 3\n")
    return path


def test_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.input == "Data.txt"
    assert args.output == "Results.txt"
    assert args.min_support == 1
    assert args.verbose == 0


def test_main_writes_results(tmp_path, data_file, capsys) -> None:
    output = tmp_path / "Results.txt"
    code = main(["--input", str(data_file), "--output", str(output), "--min-support", "2"])
    assert code == 0
    assert output.read_text().splitlines() == ["[1] 3", "[1 2] 2", "[1 3] 2", "[2] 3", "[2 3] 2", "[3] 3"]

    out = capsys.readouterr().out
    assert "Time to read file:" in out
    assert "Time to run algorithm:" in out
    assert "Time to write to file:" in out
    assert out.rstrip().endswith("Simplicial Complex has successfully run.")


def test_main_verbose(tmp_path, data_file, capsys) -> None:
    output = tmp_path / "Results.txt"
    assert main(["-i", str(data_file), "-o", str(output), "-v"]) == 0
    assert "7 accepted" in capsys.readouterr().out


def test_main_missing_input(tmp_path, capsys) -> None:
    code = main(["--input", str(tmp_path / "missing.txt"), "--output", str(tmp_path / "Results.txt")])
    assert code == 1
    assert "conemine: error:" in capsys.readouterr().err
    assert not (tmp_path / "Results.txt").exists()


def test_main_bad_threshold(tmp_path, data_file, capsys) -> None:
    code = main(["--input", str(data_file), "--output", str(tmp_path / "Results.txt"), "--min-support", "0"])
    assert code == 1
    assert "min_support" in capsys.readouterr().err


def test_run_returns_timings(tmp_path, data_file) -> None:
    timings = run(str(data_file), str(tmp_path / "Results.txt"))
    assert set(timings) == {"reading", "algorithm", "writing"}
    assert all(value >= 0 for value in timings.values())


def test_nothing_to_mine_writes_empty_file(tmp_path, caplog) -> None:
    data = tmp_path / "Data.txt"
    data.write_text("1 1\n1 2\n")
    output = tmp_path / "Results.txt"
    run(str(data), str(output), min_support=1)
    assert output.read_text() == ""
    assert "nothing to mine" in caplog.text
