from __future__ import annotations

from typing import TypedDict

from tsv_registry.pipeline import RunContext
from tsv_registry.pipeline.events import EventType

from .checks import validate_rows
from .types import RegistryRow


class ValidateStageOutput(TypedDict):
    rows_checked: int
    passed: bool
    _metrics: dict[str, int]


def stage_validate(ctx: RunContext) -> ValidateStageOutput:
    if "rows" not in ctx.state:
        raise ValueError("stage_validate requires parsed rows in ctx.state['rows']")

    rows = ctx.state["rows"]
    report = validate_rows(rows)

    ctx.emit(
        EventType.VALIDATE_FINISH,
        stage="validate",
        **report.to_dict(),
    )
    report.raise_for_issues()

    ctx.state["registry_rows"] = [RegistryRow.from_mapping(r) for r in rows]

    return {
        "rows_checked": report.rows_checked,
        "passed": report.passed,
        "_metrics": {"rows": report.rows_checked, "issues": len(report.issues)},
    }
