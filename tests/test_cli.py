"""Tests for ``bertprint.codec.cli``."""

from __future__ import annotations

import io
import json
import sys
from types import SimpleNamespace

import pytest

from bertprint.codec import cli
from bertprint.codec.errors import SourceError

TUPLE_OK = b"\x83\x68\x02\x64\x00\x02ok\x61\x05"
LONG_LIST = b"\x83\x6c\x00\x00\x00\x05" + b"".join(bytes([97, i]) for i in range(1, 6)) + b"\x6a"


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_bytes(data)
    return str(path)


def test_parse_args_defaults():
    params = cli.parse_args([])

    assert params.files == ["-"]
    assert params.indent == 2
    assert params.max_terms_per_line == 4
    assert params.bert2 is False
    assert params.max_depth is None
    assert params.viz is None
    assert params.diff is None


def test_parse_args_rejects_negative_indent(capsys):
    with pytest.raises(SystemExit):
        cli.parse_args(["--indent", "-1"])
    assert "non-negative" in capsys.readouterr().err


def test_main_prints_each_file(tmp_path, capsys):
    a = _write(tmp_path, "a.bert", TUPLE_OK)
    b = _write(tmp_path, "b.bert", LONG_LIST)

    assert cli.main([a, b]) == 0

    out = capsys.readouterr().out
    assert out == "{ok, 5}\n[\n  1,\n  2,\n  3,\n  4,\n  5\n]\n"


def test_main_applies_layout_options(tmp_path, capsys):
    path = _write(tmp_path, "a.bert", LONG_LIST)

    cli.main(["--max-terms-per-line", "5", path])
    assert capsys.readouterr().out == "[1, 2, 3, 4, 5]\n"

    cli.main(["-i", "4", path])
    assert capsys.readouterr().out.startswith("[\n    1,")


def test_failures_are_isolated_per_input(tmp_path, capsys):
    bad = _write(tmp_path, "bad.bert", b"\x00\x6a")
    missing = str(tmp_path / "missing.bert")
    good = _write(tmp_path, "good.bert", TUPLE_OK)

    assert cli.main([bad, missing, good]) == 1

    captured = capsys.readouterr()
    assert captured.out == "{ok, 5}\n"
    errors = captured.err.splitlines()
    assert errors[0] == f"bertprint: {bad}: invalid magic number at offset 0"
    assert errors[1].startswith(f"bertprint: {missing}: cannot open {missing}")


def test_read_source_from_stdin(monkeypatch):
    monkeypatch.setattr(sys, "stdin", SimpleNamespace(buffer=io.BytesIO(TUPLE_OK)))
    assert cli.read_source("-") == TUPLE_OK


def test_read_source_missing_file(tmp_path):
    with pytest.raises(SourceError) as excinfo:
        cli.read_source(str(tmp_path / "nope"))
    assert excinfo.value.source.endswith("nope")


def test_main_reads_stdin_by_default(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", SimpleNamespace(buffer=io.BytesIO(TUPLE_OK)))

    assert cli.main([]) == 0
    assert capsys.readouterr().out == "{ok, 5}\n"


def test_bert2_mode_prints_every_record(tmp_path, capsys):
    records = b"\x03\x83\x61\x01" + bytes([len(TUPLE_OK)]) + TUPLE_OK
    path = _write(tmp_path, "stream.bert2", records)

    assert cli.main(["--bert2", path]) == 0
    assert capsys.readouterr().out == "1\n{ok, 5}\n"


def test_max_depth_option(tmp_path, capsys):
    path = _write(tmp_path, "deep.bert", b"\x83\x68\x01\x68\x01\x6a")

    assert cli.main(["--max-depth", "2", path]) == 1
    assert "term nested too deeply at offset 5" in capsys.readouterr().err


def test_diff_identical_and_different(tmp_path, capsys):
    a = _write(tmp_path, "a.bert", TUPLE_OK)
    b = _write(tmp_path, "b.bert", TUPLE_OK)
    c = _write(tmp_path, "c.bert", LONG_LIST)

    assert cli.main(["--diff", a, b]) == 0
    assert capsys.readouterr().out == "Terms are identical.\n"

    assert cli.main(["--diff", a, c]) == 1
    out = capsys.readouterr().out
    assert f"--- {a}" in out
    assert "-{ok, 5}" in out
    assert "+[" in out


def test_diff_reports_the_failing_input(tmp_path, capsys):
    a = _write(tmp_path, "a.bert", TUPLE_OK)
    bad = _write(tmp_path, "bad.bert", b"\x83")

    assert cli.main(["--diff", a, bad]) == 1
    assert capsys.readouterr().err.startswith(f"bertprint: {bad}: unexpected end of input")


def test_stats_option(tmp_path, capsys):
    pytest.importorskip("networkx")
    path = _write(tmp_path, "a.bert", TUPLE_OK)

    assert cli.main(["--stats", path]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "{ok, 5}"
    assert json.loads(lines[1]) == {
        "depth": 1,
        "kinds": {"atom": 1, "int": 1, "tuple": 1},
        "nodes": 3,
    }


def test_viz_option_numbers_outputs_for_sequences(tmp_path, capsys):
    pytest.importorskip("networkx")
    pytest.importorskip("pydot")
    records = b"\x03\x83\x61\x01\x03\x83\x61\x02"
    path = _write(tmp_path, "stream.bert2", records)
    out = tmp_path / "tree.dot"

    assert cli.main(["--bert2", "--viz", str(out), path]) == 0

    assert (tmp_path / "tree_0.dot").exists()
    assert (tmp_path / "tree_1.dot").exists()
    assert "Graphviz term tree exported" in capsys.readouterr().out


def test_viz_failure_does_not_stop_later_inputs(tmp_path, capsys):
    pytest.importorskip("networkx")
    pytest.importorskip("pydot")
    a = _write(tmp_path, "a.bert", TUPLE_OK)
    b = _write(tmp_path, "b.bert", LONG_LIST)
    out = tmp_path / "no_such_dir" / "tree.dot"

    assert cli.main(["--viz", str(out), a, b]) == 1

    captured = capsys.readouterr()
    assert captured.out.startswith("{ok, 5}\n")
    assert "[\n  1,\n  2,\n  3,\n  4,\n  5\n]\n" in captured.out
    errors = captured.err.splitlines()
    assert len(errors) == 2
    assert errors[0].startswith(f"bertprint: {a}: Graphviz export to {out} failed")
    assert errors[1].startswith(f"bertprint: {b}: ")


def test_unreadable_stdin_is_a_source_error(monkeypatch, capsys):
    class BrokenStdin:
        def read(self):
            raise OSError(5, "Input/output error")

    monkeypatch.setattr(sys, "stdin", SimpleNamespace(buffer=BrokenStdin()))

    assert cli.main(["-"]) == 1
    assert capsys.readouterr().err == "bertprint: -: cannot open -: Input/output error\n"
