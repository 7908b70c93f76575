from __future__ import annotations

import zlib
from pathlib import PurePosixPath
from typing import Callable, Iterable

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from tsv_registry.core import get_logger

from .config import GZIP_EXTENSIONS, GZIP_LEVEL, cache_control_for

log = get_logger("tsv_registry.serve")

CompressorFactory = Callable[[int], "zlib._Compress"]


def gzip_compressor(level: int) -> "zlib._Compress":
    # wbits 16 + MAX_WBITS selects the gzip container
    return zlib.compressobj(level, zlib.DEFLATED, 16 + zlib.MAX_WBITS)


class CacheHeadersMiddleware:
    """
    Open CORS on every response and attach the registry cache directives.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        cache_control = cache_control_for(scope["path"])

        async def send_with_headers(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers["Access-Control-Allow-Origin"] = "*"
                if cache_control is not None:
                    headers["Cache-Control"] = cache_control
            await send(message)

        await self.app(scope, receive, send_with_headers)


class GzipFilesMiddleware:
    """
    Gzip successful responses for a fixed set of file extensions.

    Eligibility is decided from the request alone (Accept-Encoding and path
    extension). Non-200 responses, HEAD requests and bodies that already
    carry a Content-Encoding are passed through untouched apart from Vary.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        extensions: Iterable[str] = GZIP_EXTENSIONS,
        level: int = GZIP_LEVEL,
        compressor_factory: CompressorFactory = gzip_compressor,
    ) -> None:
        self.app = app
        self.extensions = frozenset(e.lower() for e in extensions)
        self.level = level
        self.compressor_factory = compressor_factory

    def wants_gzip(self, scope: Scope) -> bool:
        accept = Headers(scope=scope).get("accept-encoding", "")
        if "gzip" not in accept:
            return False
        return PurePosixPath(scope["path"]).suffix.lower() in self.extensions

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self.wants_gzip(scope):
            await self.app(scope, receive, send)
            return

        try:
            compressor = self.compressor_factory(self.level)
        except (zlib.error, ValueError) as e:
            log.warning("gzip unavailable, serving identity", path=scope["path"], error=str(e))
            await self.app(scope, receive, send)
            return

        compress_body = scope.get("method", "GET") != "HEAD"
        passthrough = False

        async def send_gzip(message: Message) -> None:
            nonlocal passthrough
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers.add_vary_header("Accept-Encoding")
                if (
                    not compress_body
                    or message["status"] != 200
                    or "content-encoding" in headers
                ):
                    passthrough = True
                else:
                    headers["Content-Encoding"] = "gzip"
                    del headers["Content-Length"]
                    del headers["Accept-Ranges"]
                    etag = headers.get("etag")
                    if etag is not None and not etag.startswith("W/"):
                        headers["ETag"] = f"W/{etag}"
                await send(message)
                return

            if message["type"] != "http.response.body" or passthrough:
                await send(message)
                return

            more_body = message.get("more_body", False)
            data = compressor.compress(message.get("body", b""))
            if not more_body:
                data += compressor.flush()
            await send({"type": "http.response.body", "body": data, "more_body": more_body})

        await self.app(scope, receive, send_gzip)
