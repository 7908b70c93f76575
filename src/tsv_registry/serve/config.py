from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from tsv_registry.core import ServeConfigError
from tsv_registry.stages.publish import STABLE_NAME, TSV_CONTENT_TYPE

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8787

GZIP_EXTENSIONS: frozenset[str] = frozenset({".tsv", ".html", ".js", ".css"})
GZIP_LEVEL = 9

STABLE_PATH = f"/{STABLE_NAME}"
HASHED_PREFIX = "/registry."
HASHED_SUFFIX = ".tsv"

STABLE_CACHE_CONTROL = "public, max-age=60"
IMMUTABLE_CACHE_CONTROL = "public, max-age=31536000, immutable"


def _default_media_types() -> Mapping[str, str]:
    return MappingProxyType({".tsv": TSV_CONTENT_TYPE})


@dataclass(frozen=True, slots=True)
class ServeConfig:
    """
    Process-wide server settings, fixed before the listener starts.
    """

    directory: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    gzip_extensions: frozenset[str] = GZIP_EXTENSIONS
    gzip_level: int = GZIP_LEVEL
    media_types: Mapping[str, str] = field(default_factory=_default_media_types)

    @property
    def addr(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"

    @classmethod
    def from_args(cls, *, directory: Path | str, addr: str) -> "ServeConfig":
        host, port = parse_addr(addr)
        return cls(directory=Path(directory), host=host, port=port)


def parse_addr(addr: str) -> tuple[str, int]:
    """
    Split `host:port`. An empty host binds every interface, `[::1]:80` is IPv6.
    """
    host, sep, port_s = str(addr).strip().rpartition(":")
    if not sep:
        raise ServeConfigError(f"Listen address must be host:port, got {addr!r}")

    host = host.strip("[]") or "0.0.0.0"
    try:
        port = int(port_s)
    except ValueError as e:
        raise ServeConfigError(f"Invalid port in listen address {addr!r}") from e
    if not 0 <= port <= 65535:
        raise ServeConfigError(f"Port out of range in listen address {addr!r}")
    return host, port


def cache_control_for(path: str) -> str | None:
    if path == STABLE_PATH:
        return STABLE_CACHE_CONTROL
    if path.startswith(HASHED_PREFIX) and path.endswith(HASHED_SUFFIX):
        return IMMUTABLE_CACHE_CONTROL
    return None
