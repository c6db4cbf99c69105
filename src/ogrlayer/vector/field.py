# src/ogrlayer/vector/field.py

"""
This module provides the field types and the detached field descriptor used to extend a layer schema.

A FieldDefn lives on its own until add_to_layer() asks the engine to copy it
into a layer's schema. The engine keeps its own duplicate, so the FieldDefn
still owns (and eventually releases) only its own descriptor.
"""

import logging
from enum import IntEnum
from typing import TYPE_CHECKING, Union

from ..bindings import ogr, engine_call, check_ogrerr, null_pointer_error, ensure_c_string
from ..handle import OwnedHandle

if TYPE_CHECKING:
    from .layer import Layer

log = logging.getLogger(__name__)

__all__ = [
    "FieldType",
    "FieldDefn"
]

class FieldType(IntEnum):
    """Attribute field types, numbered as the engine's OGRFieldType."""
    INTEGER = 0
    INTEGER_LIST = 1
    REAL = 2
    REAL_LIST = 3
    STRING = 4
    STRING_LIST = 5
    WIDE_STRING = 6
    WIDE_STRING_LIST = 7
    BINARY = 8
    DATE = 9
    TIME = 10
    DATE_TIME = 11
    INTEGER64 = 12
    INTEGER64_LIST = 13


class FieldDefn(OwnedHandle):
    """
    Detached, owned field descriptor.

    Args:
        name: Field name.
        field_type: FieldType member or the equivalent engine integer.

    Raises:
        EncodingError: If the name contains an embedded NUL character.
        NullPointerError: If the engine cannot allocate the descriptor.
    """
    def __init__(self, name: str, field_type: Union[FieldType, int]):
        ensure_c_string(name, "field name")
        field_type = FieldType(field_type)
        with engine_call("OGR_Fld_Create"):
            handle = ogr.FieldDefn(name, int(field_type))
            if handle is None:
                raise null_pointer_error("OGR_Fld_Create")
        super().__init__(handle)
        self._attached = False

    @property
    def name(self) -> str:
        return self.handle.GetName()

    @property
    def field_type(self) -> FieldType:
        return FieldType(self.handle.GetType())

    @property
    def width(self) -> int:
        return self.handle.GetWidth()

    @property
    def precision(self) -> int:
        return self.handle.GetPrecision()

    @property
    def attached(self) -> bool:
        """True once the descriptor was copied into at least one layer schema."""
        return self._attached

    def set_width(self, width: int) -> None:
        self.handle.SetWidth(int(width))

    def set_precision(self, precision: int) -> None:
        self.handle.SetPrecision(int(precision))

    def add_to_layer(self, layer: "Layer") -> None:
        """
        Adds a copy of this field definition to the layer's schema.

        Args:
            layer: Target layer.

        Raises:
            OgrError: If the layer rejects the field (read-only driver,
                duplicate name, field creation unsupported, ...).
        """
        raw_layer = layer._raw("OGR_L_CreateField")
        with engine_call("OGR_L_CreateField"):
            rv = raw_layer.CreateField(self.handle, 1)
            check_ogrerr(rv, "OGR_L_CreateField")
        self._attached = True
        log.debug(f"Added field '{self.name}' ({self.field_type.name}) to layer '{layer.name}'")

    def __repr__(self):
        if self.closed:
            return "<FieldDefn released>"
        return f"<FieldDefn name={self.name!r} type={self.field_type.name} width={self.width} precision={self.precision}>"
