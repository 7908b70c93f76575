from .app import RegistryStaticFiles, create_app
from .config import (
    IMMUTABLE_CACHE_CONTROL,
    STABLE_CACHE_CONTROL,
    ServeConfig,
    cache_control_for,
    parse_addr,
)
from .middleware import CacheHeadersMiddleware, GzipFilesMiddleware

__all__ = [
    "IMMUTABLE_CACHE_CONTROL",
    "STABLE_CACHE_CONTROL",
    "CacheHeadersMiddleware",
    "GzipFilesMiddleware",
    "RegistryStaticFiles",
    "ServeConfig",
    "cache_control_for",
    "create_app",
    "parse_addr",
]
