from .checks import ROW_CHECKS, is_http_url, validate_rows
from .stage import stage_validate
from .types import (
    REQUIRED_COLUMNS,
    IssueCode,
    RegistryRow,
    ValidationIssue,
    ValidationReport,
)

__all__ = [
    "REQUIRED_COLUMNS",
    "ROW_CHECKS",
    "IssueCode",
    "RegistryRow",
    "ValidationIssue",
    "ValidationReport",
    "is_http_url",
    "validate_rows",
    "stage_validate",
]
