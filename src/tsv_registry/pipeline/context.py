from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from tsv_registry.core import ILogger

from .events import EventSink, EventType, make_event
from .types import ArtifactRef


@dataclass(slots=True)
class RunContext:
    """
    Context shared across stages for a single build run.

    `meta` carries run inputs (input path, output dir) and ends up in the run
    report. `state` is the in-memory hand-off between stages (parsed rows,
    validated rows) and is never serialized.
    """

    run_id: str
    run_root: Path | None
    logger: ILogger
    events: EventSink

    meta: dict[str, Any] = field(default_factory=dict)
    state: dict[str, Any] = field(default_factory=dict)

    def stage_logger(self, stage: str) -> ILogger:
        return self.logger.bind(stage=stage)

    def emit(self, event: EventType | str, *, stage: str | None = None, **data: Any) -> None:
        ev = make_event(event_type=event, run_id=self.run_id, stage=stage, **data)
        self.events.emit(ev)
        self.logger.debug(ev.type, stage=stage, **data)

    def record_artifact(
        self,
        *,
        stage: str,
        path: Path,
        content_type: str | None = None,
        rel_to: Path | None = None,
    ) -> ArtifactRef:
        art = ArtifactRef.from_file(path, content_type=content_type, rel_to=rel_to)
        self.emit(EventType.ARTIFACT_WRITTEN, stage=stage, **asdict(art))
        return art
