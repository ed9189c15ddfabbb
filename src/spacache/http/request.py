"""Immutable HTTP request.

Frozen metadata with async body access.  Built from an ASGI scope by the
app, or directly (``Request.build``) when the handler is hosted elsewhere.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import SplitResult, quote, unquote, urlsplit

from spacache._internal.asgi import Receive
from spacache.http.headers import Headers


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is the decoded request path used for cache lookups.
    ``url`` is the full URL (scheme, host, path, query) for callbacks
    that need more than the path.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes = b""
    scheme: str = "http"
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive = _empty_receive

    # Private: mutable cache for the body
    # (dict contents are mutable even though the field reference is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Computed properties --

    @property
    def host(self) -> str:
        """Host from the Host header, falling back to the server address."""
        header = self.headers.get("host")
        if header:
            return header
        if self.server is None:
            return "localhost"
        name, port = self.server
        default_port = 443 if self.scheme == "https" else 80
        return name if port == default_port else f"{name}:{port}"

    @property
    def url(self) -> str:
        """Full request URL (scheme, host, path and query string)."""
        base = f"{self.scheme}://{self.host}{quote(self.path)}"
        if self.query_string:
            return f"{base}?{self.query_string.decode('latin-1')}"
        return base

    @property
    def split_url(self) -> SplitResult:
        """The full URL parsed into scheme/netloc/path/query/fragment."""
        return urlsplit(self.url)

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached — the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    # -- Factories --

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            scheme=scope.get("scheme", "http"),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )

    @classmethod
    def build(
        cls,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
    ) -> Request:
        """Create a Request from a URL string.

        A relative URL (``"/app.js?v=2"``) is treated as ``http://localhost``.
        The path is percent-decoded, as ASGI servers do for ``scope["path"]``.
        """
        parts = urlsplit(url)
        merged = dict(headers or {})
        if parts.netloc and not any(name.lower() == "host" for name in merged):
            merged["host"] = parts.netloc
        return cls(
            method=method.upper(),
            path=unquote(parts.path) or "/",
            headers=Headers.from_mapping(merged),
            query_string=parts.query.encode("latin-1"),
            scheme=parts.scheme or "http",
        )
