from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

from tsv_registry.core import StageError, Stopwatch, stage_error_from_exc, utc_now_iso

from .context import RunContext
from .events import EventType
from .types import ArtifactRef


def format_duration_ms(ms: int) -> str:
    """Return a short human-readable duration string."""
    if ms < 1000:
        return f"{ms} ms"
    return f"{ms / 1000:.2f} s"


StageFn = Callable[[RunContext], dict[str, Any] | None]


@dataclass(slots=True)
class FunctionStage:
    """
    Adapter that turns a plain function into a Stage.
    """

    stage_id: str
    fn: StageFn

    def run(self, ctx: RunContext) -> dict[str, Any] | None:
        return self.fn(ctx)


@dataclass(slots=True)
class StageResult:
    stage: str
    status: str  # "success" | "failed"
    started_at_utc: str
    finished_at_utc: str
    duration_ms: int

    outputs: dict[str, Any] = field(default_factory=dict)
    metrics: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    artifacts: list[ArtifactRef] = field(default_factory=list)
    error: Optional[StageError] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


class Stage(Protocol):
    stage_id: str

    def run(self, ctx: RunContext) -> dict[str, Any] | None: ...


@dataclass(slots=True)
class StageOutput:
    """
    A stage's return value split into plain outputs and the reserved
    `_warnings`, `_metrics` and `_artifacts` keys.
    """

    outputs: dict[str, Any]
    warnings: list[str]
    metrics: dict[str, Any]
    artifacts: list[ArtifactRef]

    @classmethod
    def split(cls, stage_id: str, raw: object) -> StageOutput:
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise TypeError(
                f"Stage {stage_id} returned {type(raw).__name__}, expected dict or None"
            )
        outputs = dict(raw)
        return cls(
            warnings=[str(w) for w in outputs.pop("_warnings", None) or []],
            metrics=dict(outputs.pop("_metrics", None) or {}),
            artifacts=list(outputs.pop("_artifacts", None) or []),
            outputs=outputs,
        )


def run_stage(
    *,
    ctx: RunContext,
    stage: Stage,
    index: int | None = None,
    total: int | None = None,
) -> StageResult:
    stage_id = stage.stage_id
    position = f"{index}/{total}" if index is not None and total is not None else None
    log = ctx.stage_logger(stage_id).bind(position=position)
    clock = Stopwatch()

    ctx.emit(EventType.STAGE_START, stage=stage_id)
    log.info("Stage starting")

    try:
        out = StageOutput.split(stage_id, stage.run(ctx))
    except Exception as e:
        duration = clock.elapsed_ms()
        error = stage_error_from_exc(e)
        ctx.emit(
            EventType.STAGE_FAILED,
            stage=stage_id,
            duration_ms=duration,
            exc_type=error.exc_type,
            message=error.message,
        )
        log.error(
            "Stage failed",
            duration=format_duration_ms(duration),
            exc_type=error.exc_type,
        )
        log.debug("Stage exception", traceback=error.traceback)
        return StageResult(
            stage=stage_id,
            status="failed",
            started_at_utc=clock.started_at_utc,
            finished_at_utc=utc_now_iso(),
            duration_ms=duration,
            error=error,
        )

    for w in out.warnings:
        ctx.emit(EventType.STAGE_WARN, stage=stage_id, message=w)
        log.warning(w)
    if out.metrics:
        ctx.emit(EventType.STAGE_METRICS, stage=stage_id, metrics=out.metrics)

    duration = clock.elapsed_ms()
    ctx.emit(EventType.STAGE_SUCCESS, stage=stage_id, duration_ms=duration)
    log.info(
        "Stage succeeded",
        duration=format_duration_ms(duration),
        metrics=out.metrics,
        outputs=sorted(out.outputs),
        artifacts=len(out.artifacts),
    )

    return StageResult(
        stage=stage_id,
        status="success",
        started_at_utc=clock.started_at_utc,
        finished_at_utc=utc_now_iso(),
        duration_ms=duration,
        outputs=out.outputs,
        metrics=out.metrics,
        warnings=out.warnings,
        artifacts=out.artifacts,
    )
