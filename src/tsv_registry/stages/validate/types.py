from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Mapping

from tsv_registry.core import RegistryValidationError

REQUIRED_COLUMNS: tuple[str, ...] = ("slug", "title", "url", "tags")


class IssueCode(StrEnum):
    MISSING_COLUMN = "MISSING_COLUMN"
    EMPTY_SLUG = "EMPTY_SLUG"
    SLUG_WHITESPACE = "SLUG_WHITESPACE"
    EMPTY_TITLE = "EMPTY_TITLE"
    EMPTY_URL = "EMPTY_URL"
    URL_NOT_HTTP = "URL_NOT_HTTP"
    DUPLICATE_SLUG = "DUPLICATE_SLUG"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    code: IssueCode
    row: int
    message: str
    details: Mapping[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "code": self.code.value,
            "row": int(self.row),
            "message": self.message,
        }
        if self.details:
            d["details"] = dict(self.details)
        return d


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """
    Every violation found across the row set.

    Nothing is raised while checks run; `raise_for_issues` turns a non-empty
    report into a single `RegistryValidationError`.
    """

    rows_checked: int
    issues: tuple[ValidationIssue, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.issues

    def messages(self) -> tuple[str, ...]:
        return tuple(i.message for i in self.issues)

    def counts(self) -> dict[str, int]:
        out: dict[str, int] = {}
        for i in self.issues:
            out[i.code.value] = out.get(i.code.value, 0) + 1
        return dict(sorted(out.items()))

    def to_error(self) -> RegistryValidationError:
        lines = "\n".join(f"- {m}" for m in self.messages())
        return RegistryValidationError(
            f"Registry validation failed:\n{lines}", violations=self.messages()
        )

    def raise_for_issues(self) -> None:
        if not self.passed:
            raise self.to_error()

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows_checked": self.rows_checked,
            "passed": self.passed,
            "counts": self.counts(),
            "issues": [i.to_dict() for i in self.issues],
        }


@dataclass(frozen=True, slots=True)
class RegistryRow:
    slug: str
    title: str
    url: str
    tags: str = ""

    @classmethod
    def from_mapping(cls, row: Mapping[str, str]) -> "RegistryRow":
        return cls(
            slug=str(row.get("slug") or "").strip(),
            title=str(row.get("title") or "").strip(),
            url=str(row.get("url") or "").strip(),
            tags=str(row.get("tags") or ""),
        )


@dataclass(slots=True)
class CheckContext:
    rows: list[Mapping[str, str]]
    required: tuple[str, ...] = REQUIRED_COLUMNS
