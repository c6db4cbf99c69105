# src/ogrlayer/vector/caps.py

"""
This module defines the capability flags a layer can be queried for.
"""

from enum import Enum

__all__ = [
    "LayerCaps"
]

class LayerCaps(Enum):
    """
    Layer capabilities. Each member's value is the engine's capability token.

    Options:
        RANDOM_READ: Random read by feature id is efficient.
        SEQUENTIAL_WRITE: New features can be created.
        RANDOM_WRITE: Existing features can be rewritten.
        FAST_SPATIAL_FILTER: Spatial filtering is done with an index.
        FAST_FEATURE_COUNT: Feature count is cheap.
        FAST_GET_EXTENT: Extent is cheap.
        CREATE_FIELD: Fields can be created.
        DELETE_FIELD: Fields can be deleted.
        REORDER_FIELDS: Fields can be reordered.
        ALTER_FIELD_DEFN: Field definitions can be altered.
        TRANSACTIONS: Layer supports transactions.
        DELETE_FEATURE: Features can be deleted.
        FAST_SET_NEXT_BY_INDEX: Setting the next feature by index is cheap.
        STRINGS_AS_UTF8: String fields are returned as UTF-8.
        IGNORE_FIELDS: Fields can be skipped when reading.
        CREATE_GEOM_FIELD: Geometry fields can be created.
        CURVE_GEOMETRIES: Curve geometries are supported.
        MEASURED_GEOMETRIES: Measured (M) geometries are supported.
    """
    RANDOM_READ = "RandomRead"
    SEQUENTIAL_WRITE = "SequentialWrite"
    RANDOM_WRITE = "RandomWrite"
    FAST_SPATIAL_FILTER = "FastSpatialFilter"
    FAST_FEATURE_COUNT = "FastFeatureCount"
    FAST_GET_EXTENT = "FastGetExtent"
    CREATE_FIELD = "CreateField"
    DELETE_FIELD = "DeleteField"
    REORDER_FIELDS = "ReorderFields"
    ALTER_FIELD_DEFN = "AlterFieldDefn"
    TRANSACTIONS = "Transactions"
    DELETE_FEATURE = "DeleteFeature"
    FAST_SET_NEXT_BY_INDEX = "FastSetNextByIndex"
    STRINGS_AS_UTF8 = "StringsAsUTF8"
    IGNORE_FIELDS = "IgnoreFields"
    CREATE_GEOM_FIELD = "CreateGeomField"
    CURVE_GEOMETRIES = "CurveGeometries"
    MEASURED_GEOMETRIES = "MeasuredGeometries"

    @property
    def token(self) -> str:
        return self.value
