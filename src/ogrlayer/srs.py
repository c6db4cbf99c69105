# src/ogrlayer/srs.py

"""
This module wraps the engine's spatial reference object.

Parsing and transformation stay in the engine; this wrapper only owns a copy
of the object and converts it to a pyproj CRS for use with GeoPandas.
"""

import logging
from typing import Optional, Union

from pyproj import CRS

from .bindings import osr, engine_call, check_ogrerr, null_pointer_error, ensure_c_string
from .handle import OwnedHandle

log = logging.getLogger(__name__)

__all__ = [
    "SpatialRef"
]

class SpatialRef(OwnedHandle):
    """Owned spatial reference system, always using x/y (easting/northing) axis order."""

    def __init__(self, handle):
        super().__init__(handle)
        handle.SetAxisMappingStrategy(osr.OAMS_TRADITIONAL_GIS_ORDER)

    @classmethod
    def from_epsg(cls, code: int) -> "SpatialRef":
        srs = osr.SpatialReference()
        with engine_call("OSRImportFromEPSG"):
            check_ogrerr(srs.ImportFromEPSG(int(code)), "OSRImportFromEPSG")
        return cls(srs)

    @classmethod
    def from_wkt(cls, wkt: str) -> "SpatialRef":
        srs = osr.SpatialReference()
        with engine_call("OSRImportFromWkt"):
            check_ogrerr(srs.ImportFromWkt(ensure_c_string(wkt, "WKT")), "OSRImportFromWkt")
        return cls(srs)

    @classmethod
    def from_user_input(cls, value: Union[str, int, "SpatialRef", CRS]) -> "SpatialRef":
        """
        Builds a SpatialRef from an EPSG code, an "AUTHORITY:CODE" string, WKT,
        PROJ string, pyproj CRS or another SpatialRef (which is cloned).
        """
        if isinstance(value, SpatialRef):
            return value.clone()
        if isinstance(value, int):
            return cls.from_epsg(value)
        if isinstance(value, CRS):
            return cls.from_wkt(value.to_wkt())

        srs = osr.SpatialReference()
        with engine_call("OSRSetFromUserInput"):
            check_ogrerr(srs.SetFromUserInput(ensure_c_string(value, "spatial reference")), "OSRSetFromUserInput")
        return cls(srs)

    @classmethod
    def from_layer_handle(cls, raw_layer) -> "SpatialRef":
        """Clones the spatial reference the engine holds for a layer."""
        with engine_call("OGR_L_GetSpatialRef"):
            ref = raw_layer.GetSpatialRef()
            if ref is None:
                raise null_pointer_error("OGR_L_GetSpatialRef")
            return cls(ref.Clone())

    def clone(self) -> "SpatialRef":
        with engine_call("OSRClone"):
            return SpatialRef(self.handle.Clone())

    def to_wkt(self) -> str:
        with engine_call("OSRExportToWkt"):
            return self.handle.ExportToWkt()

    @property
    def auth_name(self) -> Optional[str]:
        return self.handle.GetAuthorityName(None)

    @property
    def auth_code(self) -> Optional[int]:
        code = self.handle.GetAuthorityCode(None)
        return int(code) if code else None

    def to_crs(self) -> CRS:
        return CRS.from_wkt(self.to_wkt())

    def __eq__(self, other):
        if not isinstance(other, SpatialRef):
            return NotImplemented
        return bool(self.handle.IsSame(other.handle))

    __hash__ = None

    def __repr__(self):
        if self.closed:
            return "<SpatialRef released>"
        if self.auth_code is not None:
            return f"<SpatialRef {self.auth_name}:{self.auth_code}>"
        return f"<SpatialRef {self.handle.GetName()!r}>"
