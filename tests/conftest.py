"""Shared fixtures: a small SPA build directory on disk."""

from pathlib import Path

import pytest

INDEX_HTML = (
    "<!doctype html><html><head><title>App</title><!--X--></head>"
    '<body><div id="root"></div><!--X--></body></html>'
)
APP_JS = "console.log('hello');"


@pytest.fixture
def dist(tmp_path: Path) -> Path:
    """Build output with an index, assets, a nested route file and a dot-file."""
    root = tmp_path / "dist"
    root.mkdir()
    (root / "index.html").write_text(INDEX_HTML)
    (root / "app.js").write_text(APP_JS)
    (root / "favicon.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "data.bin").write_bytes(b"\x00\x01\x02\x03")

    assets = root / "assets"
    assets.mkdir()
    (assets / "style.css").write_text("body { color: red; }")
    (assets / "chunk-1a2b.js").write_text("export default 1;")

    (root / ".env").write_text("SECRET=1")
    return root
