# src/ogrlayer/errors.py

"""
This module defines the exceptions raised by ogrlayer.

Engine failures fall into three groups:
- OgrError: an OGR call returned a status code other than OGRERR_NONE
- NullPointerError: an engine call returned nothing where a result was expected
- CplError: the engine reported a failure through its error handler

The remaining exceptions guard the wrapper's own ownership rules and are raised
before the engine is ever called.
"""

from typing import Optional

__all__ = [
    "GdalError",
    "OgrError",
    "NullPointerError",
    "CplError",
    "EncodingError",
    "InvalidFieldNameError",
    "UnsupportedFieldValueError",
    "DatasetClosedError",
    "LayerBusyError",
    "ConsumedHandleError",
    "OGRERR_NAMES",
]

# Values of the engine's OGRErr enumeration
OGRERR_NAMES = {
    0: "OGRERR_NONE",
    1: "OGRERR_NOT_ENOUGH_DATA",
    2: "OGRERR_NOT_ENOUGH_MEMORY",
    3: "OGRERR_UNSUPPORTED_GEOMETRY_TYPE",
    4: "OGRERR_UNSUPPORTED_OPERATION",
    5: "OGRERR_CORRUPT_DATA",
    6: "OGRERR_FAILURE",
    7: "OGRERR_UNSUPPORTED_SRS",
    8: "OGRERR_INVALID_HANDLE",
    9: "OGRERR_NON_EXISTING_FEATURE",
}


class GdalError(RuntimeError):
    """Base class for every error raised by ogrlayer."""


class OgrError(GdalError):
    """An OGR call returned a non-success status code."""

    def __init__(self, err: int, method_name: str, message: Optional[str] = None):
        self.err = err
        self.method_name = method_name
        self.message = message or ""
        text = f"OGR method '{method_name}' returned error: {self.err_name}"
        if self.message:
            text += f" ({self.message})"
        super().__init__(text)

    @property
    def err_name(self) -> str:
        return OGRERR_NAMES.get(self.err, f"OGRERR_{self.err}")


class NullPointerError(GdalError):
    """An engine call returned no object where one was expected."""

    def __init__(self, method_name: str, message: Optional[str] = None):
        self.method_name = method_name
        self.message = message or ""
        text = f"GDAL method '{method_name}' returned a NULL pointer"
        if self.message:
            text += f". Error msg: '{self.message}'"
        super().__init__(text)


class CplError(GdalError):
    """The engine reported a failure through its error handler."""

    def __init__(self, err_class: int, err_no: int, message: str, method_name: Optional[str] = None):
        self.err_class = err_class
        self.err_no = err_no
        self.message = message
        self.method_name = method_name
        where = f" in '{method_name}'" if method_name else ""
        super().__init__(f"CPL error{where}: class={err_class} number={err_no} msg='{message}'")


class EncodingError(GdalError, ValueError):
    """A string handed to the engine contains an embedded NUL character."""

    def __init__(self, what: str, value: str):
        self.what = what
        self.value = value
        super().__init__(
            f"{what} contains an embedded NUL character at position {value.index(chr(0))} "
            f"and cannot be passed to the engine"
        )


class InvalidFieldNameError(GdalError, KeyError):
    """A feature field was looked up by a name absent from the schema."""

    def __init__(self, field_name: str, method_name: str):
        self.field_name = field_name
        self.method_name = method_name
        super().__init__(f"Invalid field name '{field_name}' used on method {method_name}")

    def __str__(self) -> str:
        return self.args[0]


class UnsupportedFieldValueError(GdalError, TypeError):
    """A value of a type the engine cannot store was assigned to a field."""


class DatasetClosedError(GdalError):
    """An object was used after the dataset that owns it was closed."""


class LayerBusyError(GdalError):
    """A layer operation needs exclusive access but a feature iterator is active."""


class ConsumedHandleError(GdalError):
    """A wrapper was used after it released or handed over its engine object."""
