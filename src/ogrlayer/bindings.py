# src/ogrlayer/bindings.py

"""
This module is the single place where ogrlayer talks to the GDAL Python bindings.

It handles three concerns every engine call shares:
- Exception mode: the bindings are switched to status-code mode for the
  duration of a call, so OGRErr values and None results can be inspected
  instead of being turned into a generic RuntimeError.
- Error capture: a quiet error handler is installed for the call; the last
  engine error message is attached to the raised exception and warnings are
  forwarded to the package logger.
- String checks: strings are rejected before any call if they cannot cross
  the C boundary.
"""

import logging
from contextlib import contextmanager, ExitStack
from typing import Generator, Optional

from osgeo import gdal, ogr, osr

from .errors import OgrError, NullPointerError, CplError, EncodingError

log = logging.getLogger(__name__)

__all__ = [
    "gdal",
    "ogr",
    "osr",
    "OGRERR_NONE",
    "OGRERR_FAILURE",
    "engine_call",
    "check_ogrerr",
    "null_pointer_error",
    "pending_failure",
    "ensure_c_string",
]

OGRERR_NONE = 0
OGRERR_FAILURE = 6

_MODULES = (gdal, ogr, osr)


@contextmanager
def engine_call(method_name: Optional[str] = None) -> Generator[None, None, None]:
    """
    Context manager wrapping one or more engine calls.

    The previous exception mode of each binding module and the previous error
    handler are restored on exit, so host applications that rely on
    gdal.UseExceptions() are not affected.

    Args:
        method_name: Name of the engine function being called, used in log messages.
    """
    with ExitStack() as stack:
        for module in _MODULES:
            stack.enter_context(module.ExceptionMgr(useExceptions=False))
        gdal.PushErrorHandler("CPLQuietErrorHandler")
        stack.callback(gdal.PopErrorHandler)
        gdal.ErrorReset()
        yield
        if gdal.GetLastErrorType() == gdal.CE_Warning:
            log.debug(f"{method_name or 'GDAL'} warning: {gdal.GetLastErrorMsg()}")


def _last_error_msg() -> str:
    return (gdal.GetLastErrorMsg() or "").strip()


def check_ogrerr(rv: Optional[int], method_name: str) -> None:
    """Raise OgrError if an OGR status code is not OGRERR_NONE."""
    # Some binding methods return None instead of OGRERR_NONE
    if rv is None or rv == OGRERR_NONE:
        return
    raise OgrError(rv, method_name, _last_error_msg())


def null_pointer_error(method_name: str) -> NullPointerError:
    """Build a NullPointerError carrying the engine's last error message."""
    return NullPointerError(method_name, _last_error_msg())


def pending_failure(method_name: str) -> Optional[CplError]:
    """
    Returns a CplError if the engine reported a failure since the last reset.

    Engine calls that signal "nothing to return" with a None result do so
    without touching the error state, while genuine failures also leave a
    CE_Failure (or CE_Fatal) entry behind. This helper tells the two apart.
    """
    err_class = gdal.GetLastErrorType()
    if err_class >= gdal.CE_Failure:
        return CplError(err_class, gdal.GetLastErrorNo(), _last_error_msg(), method_name)
    return None


def ensure_c_string(value: str, what: str = "string") -> str:
    """
    Validates that a string can be passed to the engine.

    Args:
        value: The string to check.
        what: Description of the value for the error message (e.g. "field name").

    Returns:
        str: The unchanged value.

    Raises:
        TypeError: If value is not a str.
        EncodingError: If value contains an embedded NUL character.
    """
    if not isinstance(value, str):
        raise TypeError(f"Expected str for {what}, got {type(value).__name__}")
    if "\x00" in value:
        raise EncodingError(what, value)
    return value
