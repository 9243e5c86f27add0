"""
Database utilities and transaction management.
"""

import functools
from typing import Any, Callable, TypeVar

from asgiref.sync import sync_to_async
from django.db import transaction

T = TypeVar("T")


def atomic_unit(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run ``func`` inside a single database transaction."""
    with transaction.atomic():
        return func(*args, **kwargs)


async def run_in_transaction(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Run a synchronous unit of work atomically from async code.

    The whole unit executes in one thread-sensitive call, so every ORM
    statement inside it shares the same connection and transaction.

    Usage:
        result = await run_in_transaction(self._execute, command)
    """
    return await sync_to_async(functools.partial(atomic_unit, func, *args, **kwargs))()


async def run_sync(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a read-only synchronous query from async code."""
    return await sync_to_async(functools.partial(func, *args, **kwargs))()
