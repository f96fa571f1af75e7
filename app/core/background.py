"""Fire-and-forget work that must never hold up a response (e.g. saving a chat after streaming)."""
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial

logger = logging.getLogger(__name__)

_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="background")


def _log_failure(description: str, future: Future) -> None:
    if future.cancelled():
        logger.warning("%s: cancelled", description)
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Failed to %s: %s", description, exc, exc_info=exc)


def run_detached(fn, *args, description: str = "run background task", **kwargs) -> Future:
    """Submit fn and return immediately. The result is only ever logged."""
    future = _executor.submit(fn, *args, **kwargs)
    future.add_done_callback(partial(_log_failure, description))
    return future
