"""Tests for the command-line entry point."""

import logging

import pytest

from ca_schools import cli


@pytest.fixture(autouse=True)
def _restore_root_logging():
    saved_handlers = logging.root.handlers[:]
    saved_level = logging.root.level
    yield
    logging.root.handlers[:] = saved_handlers
    logging.root.setLevel(saved_level)


def test_parse_arguments_defaults():
    args = cli.parse_arguments([])
    assert args.source is None
    assert args.reports_dir is None
    assert args.strict is False
    assert args.seed == 2


def test_main_success(tmp_path, raw_tsv_file, capsys):
    out = tmp_path / "active.csv"
    code = cli.main(["--source", str(raw_tsv_file), "--output", str(out)])
    assert code == 0
    assert out.exists()
    captured = capsys.readouterr()
    assert "Wrote 3 active schools (of 5 rows)" in captured.out


def test_main_with_reports(tmp_path, raw_tsv_file, capsys):
    code = cli.main(
        [
            "-s",
            str(raw_tsv_file),
            "-o",
            str(tmp_path / "active.csv"),
            "-r",
            str(tmp_path / "reports"),
            "--seed",
            "7",
        ]
    )
    assert code == 0
    assert (tmp_path / "reports" / "caseload_sample.html").exists()
    assert "top_districts_chart:" in capsys.readouterr().out


def test_main_fetch_failure_prints_one_line(tmp_path, capsys):
    out = tmp_path / "active.csv"
    code = cli.main(
        [
            "--source",
            str(tmp_path / "missing.txt"),
            "--output",
            str(out),
            "--log-level",
            "CRITICAL",
        ]
    )
    assert code == 1
    assert not out.exists()
    err_lines = [line for line in capsys.readouterr().err.splitlines() if line]
    assert len(err_lines) == 1
    assert err_lines[0].startswith("fetch failed: Could not read")


def test_main_transform_failure_names_stage(tmp_path, make_raw_table, capsys):
    source = tmp_path / "bad.txt"
    raw = make_raw_table([{"CDSCode": "", "StatusType": "Active"}])
    source.write_text(raw.to_csv(sep="\t", index=False), encoding="utf-8")
    code = cli.main(
        ["--source", str(source), "--output", str(tmp_path / "a.csv"), "--strict"]
    )
    assert code == 1
    assert "transform failed: Row 0 is missing required field CDSCode" in (
        capsys.readouterr().err
    )


def test_main_report_failure_prints_one_line(tmp_path, capsys):
    source = tmp_path / "reduced.txt"
    source.write_text(
        "CDSCode\tStatusType\tSchool\tDistrict\n"
        "01612596006031\tActive\tExample High\tOakland Unified\n",
        encoding="utf-8",
    )
    out = tmp_path / "active.csv"
    code = cli.main(
        [
            "-s",
            str(source),
            "-o",
            str(out),
            "-r",
            str(tmp_path / "reports"),
            "--log-level",
            "CRITICAL",
        ]
    )
    assert code == 1
    assert not out.exists()
    err_lines = [line for line in capsys.readouterr().err.splitlines() if line]
    assert err_lines == [
        "report failed: Canonical table is missing report columns: "
        "OpenDate, Latitude, Longitude"
    ]


@pytest.mark.parametrize("level,expected", [("debug", logging.DEBUG), ("bogus", logging.INFO)])
def test_configure_logging_levels(level, expected):
    cli.configure_logging(level, enable_file=False)
    assert logging.root.level == expected
    assert len(logging.root.handlers) == 1


def test_configure_logging_file_handler(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "LOG_DIR", tmp_path / "logs")
    cli.configure_logging("INFO", enable_file=True)
    try:
        assert any(isinstance(h, logging.FileHandler) for h in logging.root.handlers)
        assert (tmp_path / "logs").is_dir()
    finally:
        for handler in logging.root.handlers[:]:
            handler.close()
            logging.root.removeHandler(handler)
