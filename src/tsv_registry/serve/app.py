from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import FileResponse, Response
from starlette.routing import Mount
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

from .config import ServeConfig
from .middleware import CacheHeadersMiddleware, GzipFilesMiddleware


class RegistryStaticFiles(StaticFiles):
    """
    StaticFiles with per-extension content types taken from the config
    instead of the process-wide mimetypes table.
    """

    def __init__(
        self,
        *,
        directory: Path,
        media_types: Mapping[str, str],
        html: bool = True,
    ) -> None:
        super().__init__(directory=directory, html=html)
        self.media_types = media_types

    def file_response(
        self,
        full_path: str | os.PathLike[str],
        stat_result: os.stat_result,
        scope: Scope,
        status_code: int = 200,
    ) -> Response:
        response = super().file_response(full_path, stat_result, scope, status_code)
        media_type = self.media_types.get(Path(full_path).suffix.lower())
        if media_type is not None and isinstance(response, FileResponse):
            response.media_type = media_type
            response.headers["Content-Type"] = media_type
        return response


def create_app(cfg: ServeConfig) -> Starlette:
    files = RegistryStaticFiles(directory=cfg.directory, media_types=cfg.media_types)
    return Starlette(
        routes=[Mount("/", app=files, name="static")],
        middleware=[
            Middleware(
                GzipFilesMiddleware,
                extensions=cfg.gzip_extensions,
                level=cfg.gzip_level,
            ),
            Middleware(CacheHeadersMiddleware),
        ],
    )
