"""Handler and server configuration.

SpaConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from spacache.http.response import Response
from spacache.placeholder import Placeholder

DEFAULT_PLACEHOLDER = "<!-- spacache-placeholder -->"


def _default_disabled_response() -> Response:
    return Response(
        body="spacache disabled",
        status=501,
        content_type="text/plain; charset=utf-8",
    )


@dataclass(frozen=True, slots=True)
class SpaConfig:
    """Configuration for one SPA handler. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SpaConfig(dist="./build", index="app.html", port=3000)
    """

    # Build output
    dist: str | Path = "./dist"
    glob: str = "**/*"
    index: str = "index.html"
    include_hidden: bool = False  # Match dot-files with * and **

    # Index injection
    placeholder: str | re.Pattern[str] | Placeholder = DEFAULT_PLACEHOLDER

    # Disabled mode — nothing is loaded, every request gets disabled_response
    disabled: bool = False
    disabled_response: Response = field(default_factory=_default_disabled_response)

    # Server (CLI / App.run only)
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"
