"""
Timing Wrapper

Runs a unit of work exactly once and reports how long it took, whether it
succeeded, and (on failure) the original exception.
"""

from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar
from dataclasses import dataclass
import time

T = TypeVar("T")


def _elapsed_ms(start: float) -> float:
    return round(max(time.perf_counter() - start, 0.0) * 1000, 2)


@dataclass
class TimedResult(Generic[T]):
    """Outcome of a timed operation."""
    data: Optional[T]
    elapsed_ms: float
    succeeded: bool
    error: Optional[Exception] = None

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None

    def unwrap(self) -> T:
        """Return the data, re-raising the captured error if the operation failed."""
        if self.error is not None:
            raise self.error
        return self.data


def timed(operation: Callable[..., T], *args: Any, **kwargs: Any) -> TimedResult[T]:
    """
    Invoke ``operation`` once and measure it with a monotonic clock.

    Failures are captured rather than raised: ``elapsed_ms`` then covers the
    time until the failure and ``error`` holds the exception untouched.
    """
    start = time.perf_counter()
    try:
        data = operation(*args, **kwargs)
    except Exception as exc:
        return TimedResult(data=None, elapsed_ms=_elapsed_ms(start), succeeded=False, error=exc)
    return TimedResult(data=data, elapsed_ms=_elapsed_ms(start), succeeded=True)


async def timed_async(
    operation: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
) -> TimedResult[T]:
    """Coroutine counterpart of :func:`timed`."""
    start = time.perf_counter()
    try:
        data = await operation(*args, **kwargs)
    except Exception as exc:
        return TimedResult(data=None, elapsed_ms=_elapsed_ms(start), succeeded=False, error=exc)
    return TimedResult(data=data, elapsed_ms=_elapsed_ms(start), succeeded=True)
