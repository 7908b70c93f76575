from __future__ import annotations

import pytest

from tsv_registry.core import RegistryValidationError
from tsv_registry.stages.validate import (
    IssueCode,
    RegistryRow,
    is_http_url,
    validate_rows,
)


def _row(slug: str = "a", title: str = "A", url: str = "https://a.example", tags: str = "") -> dict[str, str]:
    return {"slug": slug, "title": title, "url": url, "tags": tags}


def test_valid_rows_pass() -> None:
    report = validate_rows([_row("a"), _row("b", url="http://b.example/path?q=1")])
    assert report.passed
    assert report.rows_checked == 2
    report.raise_for_issues()


@pytest.mark.parametrize(
    ("url", "ok"),
    [
        ("https://example.com", True),
        ("http://localhost:8080/x", True),
        ("ftp://example.com", False),
        ("example.com", False),
        ("mailto:someone@example.com", False),
        ("not a url", False),
    ],
)
def test_is_http_url(url: str, ok: bool) -> None:
    assert is_http_url(url) is ok


def test_per_row_checks_accumulate() -> None:
    report = validate_rows([_row(slug="", title="", url="")])
    codes = [i.code for i in report.issues]
    assert codes == [IssueCode.EMPTY_SLUG, IssueCode.EMPTY_TITLE, IssueCode.EMPTY_URL]
    assert all(i.row == 1 for i in report.issues)


def test_slug_with_whitespace() -> None:
    report = validate_rows([_row(slug="two words")])
    assert report.messages() == ('Row 1: slug has whitespace: "two words"',)


def test_ftp_url_only_flags_that_row() -> None:
    rows = [_row("a"), _row("b", url="ftp://example.com"), _row("c")]
    report = validate_rows(rows)
    assert not report.passed
    assert [(i.code, i.row) for i in report.issues] == [(IssueCode.URL_NOT_HTTP, 2)]
    assert report.messages() == ('Row 2: url is not http(s): "ftp://example.com"',)


def test_duplicate_slug_reports_both_rows() -> None:
    rows = [_row("x"), _row("a"), _row("y"), _row(" a ")]
    report = validate_rows(rows)
    assert [i.code for i in report.issues] == [IssueCode.DUPLICATE_SLUG]
    issue = report.issues[0]
    assert issue.row == 4
    assert issue.message == 'Duplicate slug "a" at rows 2 and 4'


def test_every_repeat_is_reported_against_first_row() -> None:
    report = validate_rows([_row("a"), _row("a"), _row("a")])
    assert report.messages() == (
        'Duplicate slug "a" at rows 1 and 2',
        'Duplicate slug "a" at rows 1 and 3',
    )


def test_slugs_are_case_sensitive() -> None:
    assert validate_rows([_row("Alpha"), _row("alpha")]).passed


def test_missing_column_is_reported_even_when_other_checks_fire() -> None:
    report = validate_rows([{"slug": "a", "title": "", "url": "https://a.example"}])
    assert report.messages() == (
        'Row 1: missing column "tags"',
        "Row 1: empty title",
    )


def test_aggregated_error_lists_every_violation() -> None:
    rows = [_row("a"), _row("a", url="ftp://x.example"), _row("", title="")]
    report = validate_rows(rows)

    with pytest.raises(RegistryValidationError) as exc_info:
        report.raise_for_issues()

    err = exc_info.value
    assert str(err) == "\n".join(
        [
            "Registry validation failed:",
            '- Row 2: url is not http(s): "ftp://x.example"',
            "- Row 3: empty slug",
            "- Row 3: empty title",
            '- Duplicate slug "a" at rows 1 and 2',
        ]
    )
    assert len(err.violations) == 4
    assert report.counts() == {
        "DUPLICATE_SLUG": 1,
        "EMPTY_SLUG": 1,
        "EMPTY_TITLE": 1,
        "URL_NOT_HTTP": 1,
    }


def test_registry_row_from_mapping_trims_fields() -> None:
    row = RegistryRow.from_mapping({"slug": " a ", "title": " A ", "url": " https://a.example ", "tags": " x, y "})
    assert row == RegistryRow(slug="a", title="A", url="https://a.example", tags=" x, y ")
