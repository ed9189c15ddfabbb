"""Initial State — seed a client-side app with per-request data.

Every route the bundle does not contain is answered with index.html.
Before it is sent, the placeholder comment in the document is replaced
with a ``<script>`` that hands the requested path and query to the
client, so the first render needs no extra round trip.

Static assets get a long cache lifetime; the HTML shell is never cached.

Run:
    python app.py
"""

import json
from pathlib import Path
from urllib.parse import parse_qs

from spacache import App, CallbackContext, SpaConfig

DIST_DIR = Path(__file__).parent / "dist"


def initial_state(ctx: CallbackContext) -> str:
    state = {"path": ctx.url.path, "query": parse_qs(ctx.url.query)}
    # "</" would close the script element early.
    payload = json.dumps(state).replace("</", "<\\/")
    return f"<script>window.__INITIAL_STATE__ = {payload};</script>"


def cache_headers(ctx: CallbackContext) -> dict[str, str]:
    if ctx.file.is_index:
        return {"Cache-Control": "no-store"}
    return {"Cache-Control": "public, max-age=31536000, immutable"}


app = App(SpaConfig(dist=DIST_DIR), injector=initial_state, headers=cache_headers)

if __name__ == "__main__":
    app.run()
