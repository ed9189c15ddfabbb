"""Build directory loader.

Scans a directory once, reads every matching file into memory, and
returns the frozen ``FileTable`` the handler serves from.  Nothing is
re-read after this returns; no file handles stay open.
"""

import glob as globlib
import logging
import mimetypes
from pathlib import Path

from spacache.cache import FileRecord, FileTable
from spacache.errors import ConfigurationError, LoadError, MissingIndexError

logger = logging.getLogger("spacache.loader")

# Extensions whose mapping is missing or inconsistent across platforms'
# mime.types files.
_EXTRA_TYPES: dict[str, str] = {
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".map": "application/json",
    ".wasm": "application/wasm",
    ".webmanifest": "application/manifest+json",
    ".woff2": "font/woff2",
}

# Non-text types that are still served with a UTF-8 charset.
_TEXTUAL_TYPES = frozenset(
    {
        "application/json",
        "application/manifest+json",
        "application/javascript",
        "application/xml",
        "image/svg+xml",
    }
)


def guess_content_type(path: str | Path) -> str:
    """Return the Content-Type to serve *path* with.

    Text types carry ``; charset=utf-8``.  Unknown extensions and
    transfer-encoded files (``.gz``, ``.br``) are served as
    ``application/octet-stream``.
    """
    name = str(path)
    suffix = Path(name).suffix.lower()
    content_type = _EXTRA_TYPES.get(suffix)
    if content_type is None:
        content_type, encoding = mimetypes.guess_type(name)
        if content_type is None or encoding is not None:
            return "application/octet-stream"
    if content_type.startswith("text/") or content_type in _TEXTUAL_TYPES:
        return f"{content_type}; charset=utf-8"
    return content_type


def load_files(
    root: str | Path,
    pattern: str = "**/*",
    index: str = "index.html",
    *,
    include_hidden: bool = False,
) -> FileTable:
    """Load every file under *root* matching *pattern* into a FileTable.

    Args:
        root: Build output directory to scan.
        pattern: Glob pattern relative to *root* (``**`` recurses).
        index: Relative path of the fallback document.  Compared by
            string equality against each matched entry, not as a glob.
        include_hidden: Let ``*`` and ``**`` match dot-files and
            dot-directories.

    Raises:
        ConfigurationError: If *index* or *pattern* is empty.
        LoadError: If *root* is not a readable directory or a file
            cannot be read.
        MissingIndexError: If no matched entry equals *index*.
    """
    if not index:
        msg = "Index filename must not be empty."
        raise ConfigurationError(msg)
    if not pattern:
        msg = "Glob pattern must not be empty."
        raise ConfigurationError(msg)

    root_path = Path(root)
    try:
        if not root_path.is_dir():
            raise LoadError(root_path, "build directory does not exist")
        root_path = root_path.resolve(strict=True)
    except OSError as exc:
        raise LoadError(root_path, "build directory is not readable") from exc

    entries = globlib.glob(
        pattern,
        root_dir=root_path,
        recursive=True,
        include_hidden=include_hidden,
    )

    records: list[FileRecord] = []
    for entry in sorted(entries):
        source = root_path / entry
        if not source.is_file():
            continue
        # glob returns OS separators; keys always use forward slashes.
        relative = Path(entry).as_posix()
        try:
            content = source.read_bytes()
        except OSError as exc:
            raise LoadError(source, "unable to read file") from exc

        record = FileRecord(
            path=f"/{relative}",
            content_type=guess_content_type(relative),
            content=content,
            is_index=relative == index,
            source=source,
        )
        logger.debug("Loaded %s (%s, %d bytes)", record.path, record.content_type, record.size)
        records.append(record)

    if not any(record.is_index for record in records):
        raise MissingIndexError(index, root_path, pattern)

    table = FileTable(records)
    logger.info(
        "Loaded %d files (%d bytes) from %s", len(table), table.total_bytes, root_path
    )
    return table
