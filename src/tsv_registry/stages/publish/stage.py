from __future__ import annotations

from pathlib import Path
from typing import Any, TypedDict

from tsv_registry.pipeline import RunContext
from tsv_registry.pipeline.events import EventType

from .artifacts import TSV_CONTENT_TYPE, write_registry_artifacts
from .tsv import build_tsv_body


class StagePublishResult(TypedDict):
    version: str
    entries: int
    stable_path: str
    hashed_path: str
    _metrics: dict[str, int]
    _artifacts: list[Any]


def stage_publish(ctx: RunContext) -> StagePublishResult:
    if "out_dir" not in ctx.meta:
        raise ValueError("stage_publish requires ctx.meta['out_dir']")
    if "registry_rows" not in ctx.state:
        raise ValueError("stage_publish requires validated rows in ctx.state")

    out_dir = Path(ctx.meta["out_dir"])
    rows = ctx.state["registry_rows"]

    ctx.emit(EventType.PUBLISH_START, stage="publish", out_dir=str(out_dir))

    body = build_tsv_body(rows)
    out = write_registry_artifacts(out_dir=out_dir, body=body, entries=len(rows))

    artifacts = [
        ctx.record_artifact(stage="publish", path=p, content_type=TSV_CONTENT_TYPE)
        for p in (out.stable_path, out.hashed_path)
    ]

    ctx.emit(EventType.PUBLISH_FINISH, stage="publish", **out.to_dict())

    return {
        "version": out.version,
        "entries": out.entries,
        "stable_path": str(out.stable_path),
        "hashed_path": str(out.hashed_path),
        "_metrics": {"entries": out.entries, "bytes": out.bytes},
        "_artifacts": artifacts,
    }
