from __future__ import annotations

from pathlib import Path
from typing import TypedDict

from tsv_registry.pipeline import RunContext
from tsv_registry.pipeline.events import EventType

from .markdown import parse_markdown_table, read_registry_markdown


class ParseStageOutput(TypedDict):
    input_path: str
    headers: list[str]
    _metrics: dict[str, int]


def stage_parse(ctx: RunContext) -> ParseStageOutput:
    if "input_path" not in ctx.meta:
        raise ValueError("stage_parse requires ctx.meta['input_path']")

    input_path = Path(ctx.meta["input_path"])
    table = parse_markdown_table(read_registry_markdown(input_path))
    ctx.state["rows"] = table.rows

    ctx.emit(
        EventType.PARSE_FINISH,
        stage="parse",
        input_path=str(input_path),
        headers=list(table.headers),
        rows=len(table.rows),
    )

    return {
        "input_path": str(input_path),
        "headers": list(table.headers),
        "_metrics": {"columns": len(table.headers), "rows": len(table.rows)},
    }
