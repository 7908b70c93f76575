import json
from pathlib import Path
from typing import Any

from .fs import atomic_write_text


def dumps_json(obj: Any, *, indent: int | None = None) -> str:
    # Paths, enums and timestamps in event payloads fall back to str().
    return json.dumps(obj, ensure_ascii=False, indent=indent, default=str)


def atomic_write_json(path: Path, obj: Any, *, indent: int = 2) -> None:
    atomic_write_text(path, dumps_json(obj, indent=indent) + "\n")


def read_json(path: Path) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))
