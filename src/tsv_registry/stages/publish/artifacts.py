from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tsv_registry.core import PublishError, atomic_write_bytes, ensure_dir, short_digest

VERSION_LENGTH = 16
VERSION_PREFIX = "#v="

STABLE_NAME = "registry.tsv"
TSV_CONTENT_TYPE = "text/tab-separated-values; charset=utf-8"


def hashed_name(version: str) -> str:
    return f"registry.{version}.tsv"


def content_version(body: str) -> str:
    """
    Version id of a TSV body.

    Only the body is hashed; the `#v=` header line is not part of the digest.
    """
    return short_digest(body.encode("utf-8"), length=VERSION_LENGTH)


def render_artifact(body: str, version: str) -> bytes:
    return f"{VERSION_PREFIX}{version}\n{body}".encode("utf-8")


@dataclass(frozen=True, slots=True)
class PublishOutput:
    version: str
    entries: int
    bytes: int
    stable_path: Path
    hashed_path: Path

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "entries": self.entries,
            "bytes": self.bytes,
            "stable_path": str(self.stable_path),
            "hashed_path": str(self.hashed_path),
        }


def write_registry_artifacts(*, out_dir: Path, body: str, entries: int) -> PublishOutput:
    version = content_version(body)
    data = render_artifact(body, version)

    out_dir = Path(out_dir)
    stable_path = out_dir / STABLE_NAME
    hashed_path = out_dir / hashed_name(version)

    try:
        ensure_dir(out_dir)
        atomic_write_bytes(stable_path, data)
        atomic_write_bytes(hashed_path, data)
    except OSError as e:
        raise PublishError(f"Failed writing registry artifacts to {out_dir}: {e}") from e

    return PublishOutput(
        version=version,
        entries=entries,
        bytes=len(data),
        stable_path=stable_path,
        hashed_path=hashed_path,
    )
