from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from tsv_registry.core import StageError, atomic_write_json

from .stage import StageResult

REPORT_FILE = "run_report.json"


@dataclass(slots=True)
class RunReport:
    run_id: str
    started_at_utc: str
    finished_at_utc: str
    status: str  # "success" | "failed"
    duration_ms: int

    stages: list[StageResult] = field(default_factory=list)
    events_jsonl: Optional[str] = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def exit_code(self) -> int:
        return 0 if self.status == "success" else 1

    @property
    def failed_stage(self) -> StageResult | None:
        return next((s for s in self.stages if not s.ok), None)

    @property
    def error(self) -> StageError | None:
        failed = self.failed_stage
        return failed.error if failed is not None else None

    def outputs(self, stage_id: str) -> dict[str, Any]:
        for s in self.stages:
            if s.stage == stage_id:
                return s.outputs
        return {}

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["meta"] = {k: str(v) if isinstance(v, Path) else v for k, v in self.meta.items()}
        return d

    def write_json(self, path: Path) -> None:
        atomic_write_json(Path(path), self.to_dict())


def build_run_report(
    *,
    run_id: str,
    started_at_utc: str,
    finished_at_utc: str,
    duration_ms: int,
    stage_results: list[StageResult],
    events_jsonl: str | None,
    meta: dict[str, Any] | None = None,
) -> RunReport:
    status = "success" if all(s.ok for s in stage_results) else "failed"
    return RunReport(
        run_id=run_id,
        started_at_utc=started_at_utc,
        finished_at_utc=finished_at_utc,
        status=status,
        duration_ms=duration_ms,
        stages=stage_results,
        events_jsonl=events_jsonl,
        meta=meta or {},
    )
