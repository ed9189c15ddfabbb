"""Invoke helper — call sync or async callbacks uniformly.

Injector and headers callbacks can be ``def`` or ``async def``.  The
handler always awaits through this helper, so the sync/async check lives
in exactly one place.
"""

import inspect
from collections.abc import Callable
from typing import Any


async def invoke(callback: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call *callback* and await the result if it is awaitable.

    Works with plain functions, coroutine functions, and callables that
    return a future::

        def injector(ctx):
            return "<script>window.user = null</script>"

        async def injector(ctx):
            user = await load_user(ctx.request)
            return f"<script>window.user = {user.json()}</script>"
    """
    result = callback(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
