from .config import Settings, load_settings
from .errors import (
    InputDataError,
    ParseError,
    PublishError,
    RegistryError,
    RegistryValidationError,
    ServeConfigError,
    StageError,
    stage_error_from_exc,
)
from .fs import (
    atomic_write_bytes,
    atomic_write_text,
    ensure_dir,
    relpath_posix,
)
from .hashing import FileDigest, sha256_bytes, sha256_file, short_digest
from .json import atomic_write_json, dumps_json, read_json
from .logging import ILogger, bind, clear_bindings, configure_logging, get_logger
from .provenance import new_run_id
from .time import Stopwatch, monotonic_ms, utc_now_iso

__all__ = [
    "Settings",
    "load_settings",
    "RegistryError",
    "InputDataError",
    "ParseError",
    "RegistryValidationError",
    "PublishError",
    "ServeConfigError",
    "StageError",
    "stage_error_from_exc",
    "atomic_write_bytes",
    "atomic_write_text",
    "atomic_write_json",
    "dumps_json",
    "read_json",
    "ensure_dir",
    "relpath_posix",
    "FileDigest",
    "sha256_bytes",
    "sha256_file",
    "short_digest",
    "ILogger",
    "configure_logging",
    "get_logger",
    "bind",
    "clear_bindings",
    "new_run_id",
    "Stopwatch",
    "monotonic_ms",
    "utc_now_iso",
]
