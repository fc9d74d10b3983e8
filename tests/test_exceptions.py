"""Tests for the application exception hierarchy."""

import pytest

from ca_schools.exceptions import (
    AppError,
    ConfigurationError,
    EmptyResultError,
    ExportError,
    FetchError,
    MalformedRecordError,
    ReportError,
)


@pytest.mark.parametrize(
    "cls,code,stage",
    [
        (FetchError, "FETCH_ERROR", "fetch"),
        (MalformedRecordError, "MALFORMED_RECORD_ERROR", "transform"),
        (EmptyResultError, "EMPTY_RESULT_ERROR", "transform"),
        (ExportError, "EXPORT_ERROR", "export"),
        (ReportError, "REPORT_ERROR", "report"),
        (ConfigurationError, "CONFIGURATION_ERROR", "config"),
    ],
)
def test_error_codes_and_stages(cls, code, stage):
    err = cls("boom", context={"k": "v"})
    assert isinstance(err, AppError)
    assert err.code == code
    assert err.stage == stage
    assert not err.transient
    assert str(err) == f"{code}: boom"
    assert err.to_dict() == {
        "error_code": code,
        "stage": stage,
        "message": "boom",
        "context": {"k": "v"},
        "is_transient": False,
    }


def test_base_error_defaults():
    err = AppError("CODE", "message")
    assert err.context == {}
    assert err.stage == "pipeline"
