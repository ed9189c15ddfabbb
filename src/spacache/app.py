"""ASGI application wrapping a SpaHandler.

Builds the handler during lifespan startup (or on the first request when
the server does not speak lifespan), then answers every HTTP request
through it.
"""

import logging

import anyio

from spacache._internal.asgi import Receive, Scope, Send
from spacache.config import SpaConfig
from spacache.handler import HeadersCallback, Injector, SpaHandler
from spacache.http.request import Request
from spacache.http.response import Response
from spacache.server.sender import send_response

logger = logging.getLogger("spacache.server")


class App:
    """ASGI 3.0 application serving one SPA build directory.

    Usage::

        app = App(SpaConfig(dist="./dist"), injector=render_initial_state)

        # any ASGI server
        #   pounce myproject:app
        # or the bundled runner
        app.run()

    Construction errors (missing directory, missing index) fail lifespan
    startup, so the server refuses to start.  Exceptions raised while
    handling a request, including from callbacks, are logged and
    answered with a plain 500.
    """

    __slots__ = ("_handler", "_headers", "_injector", "_load_lock", "config")

    def __init__(
        self,
        config: SpaConfig | None = None,
        *,
        injector: Injector | None = None,
        headers: HeadersCallback | None = None,
    ) -> None:
        self.config: SpaConfig = config or SpaConfig()
        self._injector = injector
        self._headers = headers
        self._handler: SpaHandler | None = None
        self._load_lock: anyio.Lock | None = None  # Created lazily on first use

    @property
    def handler(self) -> SpaHandler | None:
        """The loaded handler, or None before startup."""
        return self._handler

    async def startup(self) -> SpaHandler:
        """Build the handler if needed and return it.

        Concurrent first requests serialize on a lock; exactly one of
        them scans the build directory.
        """
        if self._handler is not None:
            return self._handler
        if self._load_lock is None:
            self._load_lock = anyio.Lock()
        async with self._load_lock:
            if self._handler is None:
                self._handler = await SpaHandler.load(
                    self.config,
                    injector=self._injector,
                    headers=self._headers,
                )
        return self._handler

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve this app with pounce (``pip install spacache[server]``)."""
        from spacache.server.runner import run_server

        run_server(self, host or self.config.host, port or self.config.port)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope, receive)
        try:
            handler = await self.startup()
            response = await handler(request)
        except Exception:
            logger.exception("500 %s %s", request.method, request.path)
            response = Response(
                body="Internal Server Error",
                status=500,
                content_type="text/plain; charset=utf-8",
            )

        await send_response(response, send, method=request.method)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Loads the build directory at startup, before the first request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.error("Startup failed: %s", exc)
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
