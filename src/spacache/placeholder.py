"""Placeholder matching for index document injection.

A placeholder is either a literal substring or a compiled regular
expression.  It is stored as a tagged value so the substitution code
dispatches on ``kind`` instead of inspecting types on every request.

Usage::

    Placeholder.literal("<!-- app-state -->")
    Placeholder.pattern(re.compile(r"<!--\\s*state\\s*-->"))
    Placeholder.coerce("<!-- app-state -->")  # same as literal()
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from spacache.errors import ConfigurationError

type PlaceholderKind = Literal["literal", "pattern"]


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Where injected content is spliced into the index document.

    ``literal`` placeholders replace every occurrence of ``text``.
    ``pattern`` placeholders replace every non-overlapping match of
    ``regex``, or only the first match when ``replace_all`` is False.
    The injected string is always inserted verbatim — backreferences
    such as ``\\1`` are not expanded.
    """

    kind: PlaceholderKind
    text: str = ""
    regex: re.Pattern[str] | None = None
    replace_all: bool = True

    def __post_init__(self) -> None:
        if self.kind == "literal" and not self.text:
            msg = "Literal placeholder must not be empty."
            raise ConfigurationError(msg)
        if self.kind == "pattern" and self.regex is None:
            msg = "Pattern placeholder requires a regex."
            raise ConfigurationError(msg)

    @classmethod
    def literal(cls, text: str) -> Placeholder:
        """Match *text* exactly."""
        return cls(kind="literal", text=text)

    @classmethod
    def pattern(cls, regex: str | re.Pattern[str], *, replace_all: bool = True) -> Placeholder:
        """Match a regular expression (compiled if given as a string)."""
        compiled = re.compile(regex) if isinstance(regex, str) else regex
        return cls(kind="pattern", regex=compiled, replace_all=replace_all)

    @classmethod
    def coerce(cls, value: str | re.Pattern[str] | Placeholder) -> Placeholder:
        """Normalize a configuration value into a Placeholder."""
        if isinstance(value, Placeholder):
            return value
        if isinstance(value, str):
            return cls.literal(value)
        if isinstance(value, re.Pattern):
            return cls.pattern(value)
        msg = f"Placeholder must be a str, re.Pattern or Placeholder, not {type(value).__name__}."
        raise ConfigurationError(msg)

    def substitute(self, document: str, replacement: str) -> str:
        """Return *document* with the placeholder replaced by *replacement*."""
        if self.kind == "literal":
            return document.replace(self.text, replacement)

        regex = self.regex
        if regex is None:
            msg = "Pattern placeholder requires a regex."
            raise ConfigurationError(msg)
        count = 0 if self.replace_all else 1
        return regex.sub(lambda _match: replacement, document, count=count)
