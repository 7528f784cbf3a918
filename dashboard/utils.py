import functools
import inspect

from loguru import logger


def logged_operation(func):
    """
    A decorator that logs coroutine entry, exit, and exceptions.

    Features:
    - Logs operation name and parameters before execution
    - Logs the exception type and message, then re-raises it unchanged
    - Logs a success message after successful execution
    - Preserves function metadata and return values
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        func_name = func.__qualname__

        sig = inspect.signature(func)
        bound_args = sig.bind(*args, **kwargs)
        bound_args.apply_defaults()
        params = {k: v for k, v in bound_args.arguments.items() if k != "self"}

        logger.debug(f"Entering {func_name} with params: {params}")

        try:
            result = await func(*args, **kwargs)
            logger.debug(f"{func_name} succeeded")
            return result
        except Exception as e:
            logger.info(f"{func_name} failed: {type(e).__name__}: {e}")
            raise

    return wrapper
