from __future__ import annotations

import re
from functools import lru_cache
from typing import Callable, Mapping

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from .types import (
    CheckContext,
    IssueCode,
    ValidationIssue,
    ValidationReport,
)

_WHITESPACE = re.compile(r"\s")

RowCheck = Callable[[CheckContext], list[ValidationIssue]]


@lru_cache(maxsize=1)
def _http_url_adapter() -> TypeAdapter[AnyHttpUrl]:
    return TypeAdapter(AnyHttpUrl)


def is_http_url(value: str) -> bool:
    try:
        _http_url_adapter().validate_python(value)
    except ValidationError:
        return False
    return True


def _field(row: Mapping[str, str], key: str) -> str:
    return str(row.get(key) or "").strip()


def _issue(code: IssueCode, row: int, message: str, **details: object) -> ValidationIssue:
    return ValidationIssue(code=code, row=row, message=message, details=details or None)


def _check_row(row: Mapping[str, str], n: int, required: tuple[str, ...]) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []

    for k in required:
        if k not in row:
            issues.append(
                _issue(IssueCode.MISSING_COLUMN, n, f'Row {n}: missing column "{k}"', column=k)
            )

    slug = _field(row, "slug")
    title = _field(row, "title")
    url = _field(row, "url")

    if not slug:
        issues.append(_issue(IssueCode.EMPTY_SLUG, n, f"Row {n}: empty slug"))
    if _WHITESPACE.search(slug):
        issues.append(
            _issue(
                IssueCode.SLUG_WHITESPACE, n, f'Row {n}: slug has whitespace: "{slug}"', slug=slug
            )
        )
    if not title:
        issues.append(_issue(IssueCode.EMPTY_TITLE, n, f"Row {n}: empty title"))
    if not url:
        issues.append(_issue(IssueCode.EMPTY_URL, n, f"Row {n}: empty url"))
    if url and not is_http_url(url):
        issues.append(
            _issue(IssueCode.URL_NOT_HTTP, n, f'Row {n}: url is not http(s): "{url}"', url=url)
        )

    return issues


def check_rows(ctx: CheckContext) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for n, row in enumerate(ctx.rows, start=1):
        issues.extend(_check_row(row, n, ctx.required))
    return issues


def check_duplicate_slugs(ctx: CheckContext) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    seen: dict[str, int] = {}

    for n, row in enumerate(ctx.rows, start=1):
        slug = _field(row, "slug")
        if not slug:
            continue
        first = seen.get(slug)
        if first is None:
            seen[slug] = n
            continue
        issues.append(
            _issue(
                IssueCode.DUPLICATE_SLUG,
                n,
                f'Duplicate slug "{slug}" at rows {first} and {n}',
                slug=slug,
                first_row=first,
            )
        )

    return issues


ROW_CHECKS: tuple[RowCheck, ...] = (
    check_rows,
    check_duplicate_slugs,
)


def validate_rows(
    rows: list[Mapping[str, str]],
    *,
    checks: tuple[RowCheck, ...] = ROW_CHECKS,
) -> ValidationReport:
    ctx = CheckContext(rows=list(rows))
    issues: list[ValidationIssue] = []
    for fn in checks:
        issues.extend(fn(ctx))
    return ValidationReport(rows_checked=len(ctx.rows), issues=tuple(issues))
