"""Helpers shared by CLI commands."""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

import click

from cpm.context import CpmContext

T = TypeVar("T")


def get_context(click_ctx: click.Context) -> CpmContext:
    """The CpmContext for this invocation.

    Tests pass one in through obj={"cpm": ...}; otherwise a production
    context is created on first use.
    """
    obj = click_ctx.ensure_object(dict)
    if "cpm" not in obj:
        obj["cpm"] = CpmContext.create()
    return obj["cpm"]


def run_async(ctx: CpmContext, coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion, closing the HTTP client afterwards."""

    async def runner() -> T:
        try:
            return await coro
        finally:
            await ctx.http.aclose()

    return asyncio.run(runner())
