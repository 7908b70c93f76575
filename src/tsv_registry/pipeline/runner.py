from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Sequence

from tsv_registry.core import (
    ILogger,
    Stopwatch,
    configure_logging,
    ensure_dir,
    get_logger,
    new_run_id,
    utc_now_iso,
)

from .context import RunContext
from .events import EVENTS_FILE, EventSink, EventType, host_info
from .report import REPORT_FILE, RunReport, build_run_report
from .stage import FunctionStage, Stage, StageFn, StageResult, format_duration_ms, run_stage


@dataclass(slots=True)
class RunnerConfig:
    stop_on_failure: bool = True


def default_logger() -> ILogger:
    """
    Provide a structlog BoundLogger that satisfies ILogger.
    """
    configure_logging()
    return get_logger("tsv_registry.pipeline")


class PipelineRunner:
    def __init__(
        self,
        *,
        stages: Sequence[Stage],
        cfg: RunnerConfig | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self.stages = list(stages)
        self.cfg = cfg or RunnerConfig()
        self.logger: ILogger = logger or default_logger()

        counts = Counter(s.stage_id for s in self.stages)
        dupes = sorted(sid for sid, n in counts.items() if n > 1)
        if dupes:
            raise ValueError(f"Duplicate stage_id(s): {dupes}")

    @staticmethod
    def fn(stage_id: str, fn: StageFn) -> Stage:
        return FunctionStage(stage_id=stage_id, fn=fn)

    @property
    def stage_ids(self) -> list[str]:
        return [s.stage_id for s in self.stages]

    def _run_stages(self, ctx: RunContext) -> Iterator[StageResult]:
        total = len(self.stages)
        for idx, st in enumerate(self.stages, start=1):
            res = run_stage(ctx=ctx, stage=st, index=idx, total=total)
            yield res
            if not res.ok and self.cfg.stop_on_failure:
                self.logger.error("Stopping on first failure", stage=st.stage_id)
                return

    def run(
        self,
        *,
        run_root: Path | None = None,
        run_id: str | None = None,
        meta: dict[str, Any] | None = None,
    ) -> tuple[int, RunReport]:
        """
        Execute every stage in order.

        With `run_root`, the event log and the run report are also written
        under `<run_root>/<run_id>/`; without it, events stay in memory.

        Returns: (exit_code, report)
        """
        meta = dict(meta or {})
        rid = run_id or new_run_id()
        run_dir = ensure_dir(Path(run_root) / rid) if run_root is not None else None
        events_path = run_dir / EVENTS_FILE if run_dir is not None else None

        ctx = RunContext(
            run_id=rid,
            run_root=run_dir,
            logger=self.logger,
            events=EventSink(events_path),
            meta=meta,
        )
        clock = Stopwatch()

        ctx.emit(EventType.RUN_ENV, **host_info())
        ctx.emit(EventType.RUN_START, stages=self.stage_ids, **{k: str(v) for k, v in meta.items()})
        self.logger.info(
            "Pipeline starting",
            run_id=rid,
            stages=self.stage_ids,
            run_dir=str(run_dir) if run_dir is not None else None,
        )

        results = list(self._run_stages(ctx))
        duration = clock.elapsed_ms()

        report = build_run_report(
            run_id=rid,
            started_at_utc=clock.started_at_utc,
            finished_at_utc=utc_now_iso(),
            duration_ms=duration,
            stage_results=results,
            events_jsonl=str(events_path) if events_path is not None else None,
            meta=meta,
        )
        report_path: Path | None = None
        if run_dir is not None:
            report_path = run_dir / REPORT_FILE
            report.write_json(report_path)

        ctx.emit(
            EventType.RUN_FINISH,
            status=report.status,
            duration_ms=duration,
            report_json=str(report_path) if report_path is not None else None,
        )
        self.logger.info(
            "Run complete",
            status=report.status,
            duration=format_duration_ms(duration),
            report=str(report_path) if report_path is not None else None,
        )
        return report.exit_code, report
