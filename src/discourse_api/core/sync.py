"""
Pure functions for sync wrapper operations.

Functions for event loop detection and the shared background loop used to
run the async client from blocking code that is itself inside a running
event loop.
"""

import asyncio
import threading
from typing import Any, Coroutine, Optional

_background_loop: Optional[asyncio.AbstractEventLoop] = None
_background_lock = threading.Lock()


def detect_event_loop_state() -> str:
    """Detect current event loop state.

    Returns:
        - "running": An event loop is running in the current thread
        - "none": No running event loop in the current thread
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return "none"
    return "running"


def create_thread_local_loop() -> asyncio.AbstractEventLoop:
    """Create a new event loop for thread-local use."""
    return asyncio.new_event_loop()


def get_background_loop() -> asyncio.AbstractEventLoop:
    """Return the process-wide loop running forever on a daemon thread."""
    global _background_loop
    with _background_lock:
        if _background_loop is None or _background_loop.is_closed():
            loop = asyncio.new_event_loop()
            thread = threading.Thread(
                target=loop.run_forever, name="discourse-api-loop", daemon=True
            )
            thread.start()
            _background_loop = loop
        return _background_loop


def run_in_background_loop(
    coro: Coroutine[Any, Any, Any], timeout: Optional[float] = None
) -> Any:
    """Run coroutine on the background loop and wait for its result.

    The loop outlives the call, so HTTP clients bound to it stay usable.
    """
    future = asyncio.run_coroutine_threadsafe(coro, get_background_loop())
    return future.result(timeout=timeout)
