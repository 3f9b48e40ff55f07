"""Bounded deadlines for blocking calls to external services."""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Any, Callable, Optional

from core.exceptions import ServiceTimeout
from core.logging import log


def call_with_deadline(func: Callable[..., Any],
                       *args,
                       service: str,
                       timeout: Optional[float],
                       **kwargs) -> Any:
    """Run ``func(*args, **kwargs)`` and give up after ``timeout`` seconds.
    
    The call runs on a worker thread; when the deadline passes the caller gets
    ``ServiceTimeout`` immediately while the abandoned call is left to finish
    on its own. Exceptions raised by ``func`` propagate unchanged.
    
    Args:
        func: Blocking callable
        service: Service name reported in the timeout error
        timeout: Deadline in seconds (None or <= 0 disables the deadline)
        
    Returns:
        Whatever ``func`` returns
        
    Raises:
        ServiceTimeout: If the deadline is exceeded
    """
    if not timeout or timeout <= 0:
        return func(*args, **kwargs)
    
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"deadline-{service}")
    try:
        future = executor.submit(func, *args, **kwargs)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            log.error(f"{service} call timed out after {timeout}s")
            raise ServiceTimeout(service, timeout)
    finally:
        executor.shutdown(wait=False)
