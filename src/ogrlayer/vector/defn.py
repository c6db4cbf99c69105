# src/ogrlayer/vector/defn.py

"""
This module defines the schema descriptor of a layer.

A Defn is built once per Layer wrapper and shared by reference by every
Feature and FeatureIterator produced from that layer. It reads through to the
engine's schema object for the layer, so fields added through the same Layer
show up immediately. Schema changes made through another engine handle on the
same data are not tracked.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, List, Optional

from ..bindings import engine_call, ensure_c_string
from .field import FieldType

if TYPE_CHECKING:
    from ..dataset import Dataset

log = logging.getLogger(__name__)

__all__ = [
    "FieldInfo",
    "GeomFieldInfo",
    "Defn"
]

@dataclass(frozen=True)
class FieldInfo:
    """
    Description of one attribute field.

    Args:
        name: Field name
        field_type: Field type
        width: Formatting width (0 if unset)
        precision: Formatting precision (0 if unset)
    """
    name: str
    field_type: FieldType
    width: int
    precision: int

@dataclass(frozen=True)
class GeomFieldInfo:
    """
    Description of one geometry field.

    Args:
        name: Geometry field name (may be empty for single-geometry drivers)
        geometry_type: Engine geometry type code (e.g. ogr.wkbPolygon)
    """
    name: str
    geometry_type: int


class Defn:
    def __init__(self, handle: Any, owner: "Dataset"):
        self._handle = handle
        self._owner = owner

    @property
    def handle(self) -> Any:
        self._owner.ensure_open("OGR_L_GetLayerDefn")
        return self._handle

    @property
    def name(self) -> str:
        return self.handle.GetName()

    @property
    def field_count(self) -> int:
        return self.handle.GetFieldCount()

    def fields(self) -> List[FieldInfo]:
        handle = self.handle
        infos = []
        with engine_call("OGR_FD_GetFieldDefn"):
            for i in range(handle.GetFieldCount()):
                fd = handle.GetFieldDefn(i)
                infos.append(FieldInfo(fd.GetName(), FieldType(fd.GetType()), fd.GetWidth(), fd.GetPrecision()))
        return infos

    def geom_fields(self) -> List[GeomFieldInfo]:
        handle = self.handle
        infos = []
        with engine_call("OGR_FD_GetGeomFieldDefn"):
            for i in range(handle.GetGeomFieldCount()):
                gfd = handle.GetGeomFieldDefn(i)
                infos.append(GeomFieldInfo(gfd.GetName(), gfd.GetType()))
        return infos

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields()]

    def field_index(self, name: str) -> Optional[int]:
        """Position of the named field, or None if the schema has no such field."""
        idx = self.handle.GetFieldIndex(ensure_c_string(name, "field name"))
        return idx if idx >= 0 else None

    def __iter__(self) -> Iterator[FieldInfo]:
        return iter(self.fields())

    def __repr__(self):
        return f"<Defn name={self.name!r} fields={self.field_names}>"
