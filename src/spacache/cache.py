"""In-memory file table.

``FileRecord`` holds one loaded file; ``FileTable`` maps canonical request
paths (``/assets/app.js``) to records.  Both are read-only once the loader
returns, so concurrent requests share them without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from spacache.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class FileRecord:
    """One file from the build directory, loaded once at startup."""

    path: str
    content_type: str
    content: bytes = field(repr=False)
    is_index: bool = False
    source: Path | None = None

    @property
    def text(self) -> str:
        """Content decoded as UTF-8 (undecodable bytes are replaced)."""
        return self.content.decode("utf-8", errors="replace")

    @property
    def size(self) -> int:
        return len(self.content)


class FileTable(Mapping[str, FileRecord]):
    """Read-only mapping from canonical request path to ``FileRecord``.

    A lookup miss is not an error: ``get()`` returns ``None`` and the
    handler serves the index record instead.
    """

    __slots__ = ("_index", "_records")

    def __init__(self, records: Iterable[FileRecord]) -> None:
        table: dict[str, FileRecord] = {}
        # Later records win when two entries share a path.
        for record in records:
            table[record.path] = record

        indexes = [record for record in table.values() if record.is_index]
        if len(indexes) != 1:
            msg = f"FileTable needs exactly one index record, got {len(indexes)}."
            raise ConfigurationError(msg)

        self._records: Mapping[str, FileRecord] = MappingProxyType(table)
        self._index = indexes[0]

    @property
    def index(self) -> FileRecord:
        """The fallback record served for unmatched paths."""
        return self._index

    @property
    def total_bytes(self) -> int:
        return sum(record.size for record in self._records.values())

    def __getitem__(self, path: str) -> FileRecord:
        return self._records[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, path: object) -> bool:
        return path in self._records

    def __repr__(self) -> str:
        return f"FileTable({len(self)} files, index={self._index.path!r})"
