"""The SPA request handler.

Answers every request from the in-memory ``FileTable``:

- exact path hit on a regular file: the cached bytes, verbatim
- index hit or miss: the index document, with the placeholder replaced
  by the injector's output when an injector is configured
- disabled mode: the configured disabled response, without ever
  touching the disk

The handler is a plain ``async (Request) -> Response`` callable.  It owns
its file table, so several handlers (different roots, different
callbacks) can live side by side in one process.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, replace
from functools import partial
from typing import Any
from urllib.parse import SplitResult

import anyio

from spacache._internal.invoke import invoke
from spacache.cache import FileRecord, FileTable
from spacache.config import SpaConfig
from spacache.http.request import Request
from spacache.http.response import Response
from spacache.loader import load_files
from spacache.placeholder import Placeholder


@dataclass(frozen=True, slots=True)
class CallbackContext:
    """What injector and headers callbacks receive for one request.

    ``file`` is the record being served: the static file on a hit, the
    index record on an index hit or a fallback.
    """

    url: SplitResult
    request: Request
    file: FileRecord


type Injector = Callable[[CallbackContext], str | Awaitable[str]]
type HeadersCallback = Callable[
    [CallbackContext], Mapping[str, str] | Awaitable[Mapping[str, str]]
]


class SpaHandler:
    """Serve a single-page application from memory.

    Build one with :meth:`load` (or :func:`create_handler`), then call it
    once per request::

        handler = await SpaHandler.load(
            SpaConfig(dist="./dist"),
            injector=lambda ctx: f"<script>window.path = {ctx.url.path!r}</script>",
        )
        response = await handler(Request.build("/dashboard"))

    Callback exceptions are not caught: they propagate to whoever called
    the handler.
    """

    __slots__ = ("_files", "_headers", "_index_text", "_injector", "_placeholder", "config")

    def __init__(
        self,
        config: SpaConfig,
        files: FileTable | None,
        *,
        injector: Injector | None = None,
        headers: HeadersCallback | None = None,
    ) -> None:
        if files is None and not config.disabled:
            msg = "A FileTable is required unless the handler is disabled."
            raise ValueError(msg)
        self.config = config
        self._files = files
        self._injector = injector
        self._headers = headers
        self._placeholder = Placeholder.coerce(config.placeholder)
        # Decoded once; the injector path substitutes into this string.
        self._index_text = files.index.text if files is not None else ""

    # -- Construction --

    @classmethod
    async def load(
        cls,
        config: SpaConfig | None = None,
        *,
        injector: Injector | None = None,
        headers: HeadersCallback | None = None,
    ) -> SpaHandler:
        """Scan the build directory and return a ready handler.

        The scan runs in a worker thread and finishes before this
        returns.  In disabled mode nothing is scanned.

        Raises:
            LoadError: The build directory is missing or unreadable.
            MissingIndexError: No matched file equals ``config.index``.
            ConfigurationError: Invalid options.
        """
        config = config or SpaConfig()
        # Validate before touching the disk.
        Placeholder.coerce(config.placeholder)
        if config.disabled:
            return cls(config, None, injector=injector, headers=headers)

        files = await anyio.to_thread.run_sync(
            partial(
                load_files,
                config.dist,
                config.glob,
                config.index,
                include_hidden=config.include_hidden,
            )
        )
        return cls(config, files, injector=injector, headers=headers)

    # -- Introspection --

    @property
    def disabled(self) -> bool:
        return self._files is None

    @property
    def files(self) -> FileTable | None:
        """The file table, or None in disabled mode."""
        return self._files

    # -- Request handling --

    async def __call__(self, request: Request) -> Response:
        """Produce the response for one request."""
        if self._files is None:
            return self.config.disabled_response

        record = self._files.get(request.path) or self._files.index
        context = CallbackContext(url=request.split_url, request=request, file=record)

        if record.is_index and self._injector is not None:
            injected = await invoke(self._injector, context)
            body: str | bytes = self._placeholder.substitute(self._index_text, str(injected))
        else:
            body = record.content

        response = Response(body=body, content_type=record.content_type)

        if self._headers is not None:
            extra = await invoke(self._headers, context)
            if extra:
                response = response.with_headers(extra)

        return response

    def __repr__(self) -> str:
        if self._files is None:
            return "SpaHandler(disabled)"
        return f"SpaHandler({self.config.dist!s}, {len(self._files)} files)"


async def create_handler(
    config: SpaConfig | None = None,
    *,
    injector: Injector | None = None,
    headers: HeadersCallback | None = None,
    **options: Any,
) -> SpaHandler:
    """Build a :class:`SpaHandler`; keyword *options* override *config*.

    Shorthand for the common case::

        handler = await create_handler(dist="./build", placeholder=re.compile(r"<!--\\s*ssr\\s*-->"))
    """
    config = config or SpaConfig()
    if options:
        config = replace(config, **options)
    return await SpaHandler.load(config, injector=injector, headers=headers)
