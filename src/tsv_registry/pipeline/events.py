from __future__ import annotations

import os
import socket
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from tsv_registry.core import utc_now_iso

from .types import Event

EVENTS_FILE = "events.jsonl"


class EventType(str, Enum):
    RUN_ENV = "run.env"
    RUN_START = "run.start"
    RUN_FINISH = "run.finish"

    STAGE_START = "stage.start"
    STAGE_WARN = "stage.warn"
    STAGE_METRICS = "stage.metrics"
    STAGE_SUCCESS = "stage.success"
    STAGE_FAILED = "stage.failed"

    ARTIFACT_WRITTEN = "artifact.written"

    PARSE_FINISH = "parse.finish"
    VALIDATE_FINISH = "validate.finish"
    PUBLISH_START = "publish.start"
    PUBLISH_FINISH = "publish.finish"


def host_info() -> dict[str, Any]:
    return {"hostname": socket.gethostname(), "pid": os.getpid(), "cwd": str(Path.cwd())}


class EventSink:
    """
    Collects run events. With a `path`, each event is also appended to that
    JSON lines file.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self.events: list[Event] = []
        self._lock = threading.Lock()
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, event: Event) -> None:
        with self._lock:
            self.events.append(event)
            if self.path is None:
                return
            with self.path.open("a", encoding="utf-8") as f:
                f.write(event.to_json() + "\n")


def make_event(
    *,
    event_type: EventType | str,
    run_id: str,
    stage: Optional[str] = None,
    **data: Any,
) -> Event:
    return Event(
        type=event_type.value if isinstance(event_type, EventType) else str(event_type),
        ts_utc=utc_now_iso(),
        run_id=run_id,
        stage=stage,
        data=dict(data),
    )
