"""
Common decorators for TAR threshold estimation.
"""
import time
import logging
import functools
from typing import Any, Callable, Optional, TypeVar, cast

F = TypeVar('F', bound=Callable[..., Any])
logger = logging.getLogger(__name__)


def error_handler(
    fallback_value: Any = None,
    log_level: str = "error",
    include_traceback: bool = True,
    exception_types: tuple = (Exception,)
) -> Callable[[F], F]:
    """
    Log and swallow errors, returning a fallback value.

    Only for collaborator layers (plotting, file export) whose failure must
    not abort an estimation run. Estimator code lets errors propagate.
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except exception_types as e:
                log_method = getattr(logger, log_level.lower(), logger.error)
                log_method(f"Error in {func.__name__}: {str(e)}", exc_info=include_traceback)
                return fallback_value() if callable(fallback_value) else fallback_value
        return cast(F, wrapper)
    return decorator


def performance_tracker(name: Optional[str] = None, level: str = "debug") -> Callable[[F], F]:
    """Track function execution time."""
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            func_name = name or func.__name__
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
                elapsed = time.perf_counter() - start_time
                log_method = getattr(logger, level.lower(), logger.debug)
                log_method(f"{func_name} completed in {elapsed:.3f} seconds")
                return result
            except Exception as e:
                elapsed = time.perf_counter() - start_time
                logger.debug(f"{func_name} failed after {elapsed:.3f} seconds: {str(e)}")
                raise

        return cast(F, wrapper)
    return decorator


class performance_context:
    """Context manager for performance tracking."""

    def __init__(self, name: str, level: str = "debug"):
        self.name = name
        self.level = level
        self.start_time = 0.0
        self.elapsed = 0.0

    def __enter__(self) -> 'performance_context':
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.elapsed = time.perf_counter() - self.start_time
        log_method = getattr(logger, self.level.lower(), logger.debug)

        if exc_type:
            log_method(f"{self.name} failed after {self.elapsed:.3f} seconds: {str(exc_val)}")
        else:
            log_method(f"{self.name} completed in {self.elapsed:.3f} seconds")
