from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from tsv_registry.core import dumps_json, relpath_posix, sha256_file


@dataclass(frozen=True, slots=True)
class ArtifactRef:
    """
    A file written by a build, as recorded in events and the run report.
    """

    name: str
    path: str
    bytes: int
    sha256: str
    content_type: Optional[str] = None

    @classmethod
    def from_file(
        cls,
        path: Path,
        *,
        content_type: str | None = None,
        rel_to: Path | None = None,
    ) -> ArtifactRef:
        p = Path(path)
        digest = sha256_file(p)
        return cls(
            name=p.name,
            path=str(p) if rel_to is None else relpath_posix(p, rel_to),
            bytes=digest.bytes,
            sha256=digest.sha256,
            content_type=content_type,
        )


@dataclass(frozen=True, slots=True)
class Event:
    """One line of events.jsonl."""

    type: str
    ts_utc: str
    run_id: str
    stage: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> str:
        return dumps_json(asdict(self))
