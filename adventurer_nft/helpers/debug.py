import functools
import logging

logger = logging.getLogger("calls")


def log_call(fn):
    """Log every call of a contract operation with its arguments."""
    @functools.wraps(fn)
    def __wrapped(*args, **kwargs):
        # args[0] is the contract instance
        logger.info(f"Calling {fn.__name__} {args[1:]} {kwargs}")
        return fn(*args, **kwargs)
    return __wrapped
