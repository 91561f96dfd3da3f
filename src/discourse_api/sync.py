"""
Sync API wrappers for async client methods.
"""

import asyncio
import threading
from functools import wraps
from typing import Any, Callable, Coroutine, Optional, TypeVar, cast

from .core.sync import (
    detect_event_loop_state,
    create_thread_local_loop,
    run_in_background_loop,
)
from .models import APIResult

F = TypeVar("F", bound=Callable[..., Any])

_thread_local = threading.local()


def get_or_create_event_loop() -> asyncio.AbstractEventLoop:
    """Get this thread's private event loop, creating it on first use."""
    loop = getattr(_thread_local, "loop", None)
    if loop is None or loop.is_closed():
        loop = create_thread_local_loop()
        _thread_local.loop = loop
    return cast(asyncio.AbstractEventLoop, loop)


def run_sync(coro: Coroutine[Any, Any, Any]) -> Any:
    """Block until the coroutine completes and return its result.

    Each thread drives its own long-lived loop. Inside a running loop, which
    cannot be re-entered, the coroutine runs on the shared background loop.
    """
    if detect_event_loop_state() == "running":
        return run_in_background_loop(coro)
    loop = get_or_create_event_loop()
    return loop.run_until_complete(coro)


def sync_wrapper(async_func: F) -> F:
    """
    Decorator to create sync version of async method.

    Handles thread-safe event loop management. The thread-local loop is
    reused across calls so pooled connections stay bound to one loop.
    """

    @wraps(async_func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return run_sync(async_func(*args, **kwargs))

    return cast(F, wrapper)


class SyncClientMixin:
    """Mixin providing sync versions of the request verbs.

    Endpoint helpers can be run from blocking code with ``run_sync``::

        client.run_sync(client.get_topic(42))
    """

    def run_sync(self, coro: Coroutine[Any, Any, Any]) -> Any:
        return run_sync(coro)

    def execute_sync(
        self,
        method: str,
        path: str,
        params: Any = None,
        acting_user: Optional[str] = None,
    ) -> APIResult:
        """Synchronous version of execute."""
        return sync_wrapper(getattr(self, "execute"))(method, path, params, acting_user)

    def get_sync(
        self, path: str, params: Any = None, acting_user: Optional[str] = None
    ) -> APIResult:
        """Synchronous version of get."""
        return sync_wrapper(getattr(self, "get"))(path, params, acting_user)

    def put_sync(
        self, path: str, params: Any = None, acting_user: Optional[str] = None
    ) -> APIResult:
        """Synchronous version of put."""
        return sync_wrapper(getattr(self, "put"))(path, params, acting_user)

    def post_sync(
        self, path: str, params: Any = None, acting_user: Optional[str] = None
    ) -> APIResult:
        """Synchronous version of post."""
        return sync_wrapper(getattr(self, "post"))(path, params, acting_user)

    def delete_sync(
        self, path: str, params: Any = None, acting_user: Optional[str] = None
    ) -> APIResult:
        """Synchronous version of delete."""
        return sync_wrapper(getattr(self, "delete"))(path, params, acting_user)

    def close_sync(self) -> None:
        """Synchronous version of close."""
        sync_wrapper(getattr(self, "close"))()
