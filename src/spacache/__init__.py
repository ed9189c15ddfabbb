"""spacache — serve a single-page application bundle from memory.

Loads a build directory once, answers every request from the cache,
falls back to the index document for unknown paths, and can splice
per-request content into that document.

Basic usage::

    from spacache import App, SpaConfig

    app = App(SpaConfig(dist="./dist"))
    app.run()

Hosting the handler yourself::

    from spacache import Request, create_handler

    handler = await create_handler(dist="./dist", injector=render_state)
    response = await handler(Request.build("http://example.com/dashboard"))
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "CallbackContext",
    "ConfigurationError",
    "FileRecord",
    "FileTable",
    "LoadError",
    "MissingIndexError",
    "Placeholder",
    "Request",
    "Response",
    "SpaCacheError",
    "SpaConfig",
    "SpaHandler",
    "create_handler",
    "load_files",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import spacache`` fast while providing a clean top-level API.
    """
    if name == "App":
        from spacache.app import App

        return App

    if name == "SpaConfig":
        from spacache.config import SpaConfig

        return SpaConfig

    if name in ("SpaHandler", "CallbackContext", "create_handler"):
        import spacache.handler as _handler

        return getattr(_handler, name)

    if name in ("FileRecord", "FileTable"):
        import spacache.cache as _cache

        return getattr(_cache, name)

    if name == "load_files":
        from spacache.loader import load_files

        return load_files

    if name == "Placeholder":
        from spacache.placeholder import Placeholder

        return Placeholder

    if name == "Request":
        from spacache.http.request import Request

        return Request

    if name == "Response":
        from spacache.http.response import Response

        return Response

    if name in ("SpaCacheError", "ConfigurationError", "LoadError", "MissingIndexError"):
        import spacache.errors as _errors

        return getattr(_errors, name)

    msg = f"module 'spacache' has no attribute {name!r}"
    raise AttributeError(msg)
