"""Run a spacache App on the pounce ASGI server.

pounce is an optional dependency (``pip install spacache[server]``); it
is imported only when a server is actually started.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spacache.app import App


def run_server(app: App, host: str, port: int) -> None:
    """Start a single-worker pounce server with the given App.

    Pounce's ``run()`` takes an import string, but here we hold a live
    ``App`` object, so ``pounce.Server`` is used directly with the ASGI
    callable.  Blocks until the server stops.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1)
    server = Server(config, app)
    server.run()
