"""Common decorators for error handling and performance logging."""

from __future__ import annotations

import time
import types
from functools import wraps

from ..logging import get_logger
from ..exceptions import CaptureDecodeError, CaptureIOError


logger = get_logger(__name__)


def _wrap_generator(gen, func_name):
    """Yield from ``gen`` while translating stream failures."""
    try:
        for item in gen:
            yield item
    except CaptureDecodeError:
        raise
    except OSError as exc:
        logger.error("%s failed reading stream: %s", func_name, exc)
        raise CaptureIOError(str(exc), context=func_name) from exc


def handle_decode_errors(func):
    """Wrap decoder entry points to raise :class:`CaptureIOError` on I/O failure.

    :class:`CaptureDecodeError` subclasses pass through unchanged; any other
    exception is left to propagate.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            result = func(*args, **kwargs)
        except CaptureDecodeError:
            raise
        except OSError as exc:
            logger.error("I/O error in %s: %s", func.__name__, exc)
            raise CaptureIOError(str(exc), context=func.__name__) from exc
        if isinstance(result, types.GeneratorType):
            return _wrap_generator(result, func.__name__)
        return result

    return wrapper


def log_performance(func):
    """Log execution duration for ``func``."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception:
            duration = time.perf_counter() - start_time
            logger.info("%s call failed after %.3f seconds", func.__name__, duration)
            raise

        if isinstance(result, types.GeneratorType):
            def generator_wrapper():
                try:
                    for item in result:
                        yield item
                finally:
                    duration = time.perf_counter() - start_time
                    logger.info(
                        "%s (generator) iteration finished in %.3f seconds (total from initial call)",
                        func.__name__,
                        duration,
                    )

            return generator_wrapper()

        duration = time.perf_counter() - start_time
        logger.info("%s executed in %.3f seconds", func.__name__, duration)
        return result

    return wrapper
