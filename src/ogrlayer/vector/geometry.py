# src/ogrlayer/vector/geometry.py

"""
This module defines the owned geometry wrapper passed to and returned from layers.

A Geometry owns its engine object. Handing it to a feature (see
Feature.set_geometry and Layer.create_feature) transfers that ownership: the
Geometry is consumed and must not be used afterwards.
"""

import logging

import shapely.wkb
from shapely.geometry.base import BaseGeometry

from ..bindings import ogr, engine_call, null_pointer_error, ensure_c_string
from ..handle import OwnedHandle
from .envelope import Envelope

log = logging.getLogger(__name__)

__all__ = [
    "Geometry"
]

class Geometry(OwnedHandle):
    @classmethod
    def from_wkt(cls, wkt: str) -> "Geometry":
        ensure_c_string(wkt, "WKT")
        with engine_call("OGR_G_CreateFromWkt"):
            handle = ogr.CreateGeometryFromWkt(wkt)
            if handle is None:
                raise null_pointer_error("OGR_G_CreateFromWkt")
        return cls(handle)

    @classmethod
    def from_wkb(cls, wkb: bytes) -> "Geometry":
        with engine_call("OGR_G_CreateFromWkb"):
            handle = ogr.CreateGeometryFromWkb(bytes(wkb))
            if handle is None:
                raise null_pointer_error("OGR_G_CreateFromWkb")
        return cls(handle)

    @classmethod
    def from_shapely(cls, geom: BaseGeometry) -> "Geometry":
        if not isinstance(geom, BaseGeometry):
            raise TypeError(f"Expected shapely geometry, got {type(geom)}")
        return cls.from_wkb(geom.wkb)

    @classmethod
    def bbox(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> "Geometry":
        """Creates a rectangular polygon from the given bounds."""
        with engine_call("OGR_G_CreateGeometry"):
            ring = ogr.Geometry(ogr.wkbLinearRing)
            for x, y in ((min_x, min_y), (max_x, min_y), (max_x, max_y), (min_x, max_y), (min_x, min_y)):
                ring.AddPoint_2D(float(x), float(y))
            polygon = ogr.Geometry(ogr.wkbPolygon)
            polygon.AddGeometry(ring)
        return cls(polygon)

    def to_wkt(self) -> str:
        with engine_call("OGR_G_ExportToWkt"):
            return self.handle.ExportToWkt()

    def to_wkb(self) -> bytes:
        with engine_call("OGR_G_ExportToWkb"):
            return bytes(self.handle.ExportToWkb())

    def to_shapely(self) -> BaseGeometry:
        return shapely.wkb.loads(self.to_wkb())

    def envelope(self) -> Envelope:
        with engine_call("OGR_G_GetEnvelope"):
            return Envelope.from_ogr(self.handle.GetEnvelope())

    @property
    def geometry_type(self) -> int:
        return self.handle.GetGeometryType()

    @property
    def geometry_name(self) -> str:
        return self.handle.GetGeometryName()

    @property
    def is_empty(self) -> bool:
        return bool(self.handle.IsEmpty())

    def clone(self) -> "Geometry":
        with engine_call("OGR_G_Clone"):
            handle = self.handle.Clone()
            if handle is None:
                raise null_pointer_error("OGR_G_Clone")
        return Geometry(handle)

    def __eq__(self, other):
        if not isinstance(other, Geometry):
            return NotImplemented
        with engine_call("OGR_G_Equals"):
            return bool(self.handle.Equals(other.handle))

    __hash__ = None

    def __repr__(self):
        if self.closed:
            return "<Geometry consumed>" if self.transferred else "<Geometry released>"
        return f"<Geometry {self.to_wkt()}>"
