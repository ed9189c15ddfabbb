"""spacache exception hierarchy.

Shared by the loader, handler, and ASGI app so every module raises and
catches the same types.
"""

from pathlib import Path


class SpaCacheError(Exception):
    """Base for all spacache-specific errors."""


class ConfigurationError(SpaCacheError):
    """Raised when handler options are invalid.

    Checked when the handler is built, before any file is read.
    """


class LoadError(SpaCacheError):
    """The build directory could not be scanned or a file could not be read.

    The underlying ``OSError`` (when there is one) is chained as
    ``__cause__``.
    """

    def __init__(self, path: str | Path, detail: str = "") -> None:
        self.path = Path(path)
        self.detail = detail or "unable to load"
        super().__init__(f"{self.detail}: {self.path}")


class MissingIndexError(LoadError):
    """No loaded file matches the configured index filename.

    Raised both when the index does not exist on disk and when the glob
    pattern filters it out.
    """

    def __init__(self, index: str, root: str | Path, glob: str) -> None:
        self.index = index
        self.glob = glob
        super().__init__(
            root,
            f"index file {index!r} not found among files matching {glob!r}",
        )
