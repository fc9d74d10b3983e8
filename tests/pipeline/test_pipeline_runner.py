"""Tests for the end-to-end pipeline runner."""

import pandas as pd
import pytest

from ca_schools.exceptions import EmptyResultError, FetchError, ReportError
from ca_schools.pipeline.ingest import FetchConfig
from ca_schools.pipeline.runner import run_pipeline


def test_run_pipeline_writes_canonical_csv(tmp_path, raw_tsv_file):
    out = tmp_path / "out" / "active.csv"
    result = run_pipeline(raw_tsv_file, out)
    assert result.output_file == out
    assert result.input_rows == 5
    assert result.rows == 3
    assert result.columns[:2] == ["CDSCode", "ShortCDS"]
    assert result.reports == {}
    written = pd.read_csv(out, dtype=str, keep_default_na=False)
    assert written["ShortCDS"].tolist() == ["6006031", "1931047", "0120006"]


def test_run_pipeline_uses_configured_source(tmp_path, raw_tsv_file):
    out = tmp_path / "active.csv"
    result = run_pipeline(output_file=out, config=FetchConfig(source=str(raw_tsv_file)))
    assert result.rows == 3


def test_run_pipeline_renders_reports(tmp_path, raw_tsv_file):
    result = run_pipeline(
        raw_tsv_file, tmp_path / "active.csv", reports_dir=tmp_path / "reports"
    )
    assert set(result.reports) == {
        "top_districts_chart",
        "earliest_schools_map",
        "caseload_map",
    }


def test_run_pipeline_is_byte_identical_across_runs(tmp_path, raw_tsv_file):
    first = run_pipeline(raw_tsv_file, tmp_path / "a.csv").output_file
    second = run_pipeline(raw_tsv_file, tmp_path / "b.csv").output_file
    assert first.read_bytes() == second.read_bytes()


def test_fetch_failure_writes_nothing(tmp_path):
    out = tmp_path / "active.csv"
    with pytest.raises(FetchError):
        run_pipeline(tmp_path / "missing.txt", out)
    assert not out.exists()


def test_transform_failure_writes_nothing(tmp_path, make_raw_table):
    source = tmp_path / "closed.txt"
    raw = make_raw_table([{"CDSCode": "01612596006031", "StatusType": "Closed"}])
    source.write_text(raw.to_csv(sep="\t", index=False), encoding="utf-8")
    out = tmp_path / "active.csv"
    with pytest.raises(EmptyResultError):
        run_pipeline(source, out)
    assert not out.exists()


def test_missing_report_columns_fail_before_export(tmp_path):
    source = tmp_path / "reduced.txt"
    source.write_text(
        "CDSCode\tStatusType\tSchool\tDistrict\n"
        "01612596006031\tActive\tExample High\tOakland Unified\n",
        encoding="utf-8",
    )
    out = tmp_path / "active.csv"
    with pytest.raises(ReportError):
        run_pipeline(source, out, reports_dir=tmp_path / "reports")
    assert not out.exists()
    assert not (tmp_path / "reports").exists()


def test_reduced_layout_without_reports_still_exports(tmp_path):
    source = tmp_path / "reduced.txt"
    source.write_text(
        "CDSCode\tStatusType\tSchool\n01612596006031\tActive\tExample High\n",
        encoding="utf-8",
    )
    result = run_pipeline(source, tmp_path / "active.csv")
    assert result.columns == ["CDSCode", "ShortCDS", "School"]
    assert result.reports == {}
