# src/ogrlayer/__init__.py
#
# Copyright (c) The ogrlayer project contributors
# This software is distributed under the Apache-2.0 license.
# See the NOTICE file for more information

"""
ogrlayer wraps the GDAL/OGR vector layer API behind an ownership-checked interface:
layers that cannot outlive their dataset, a single active feature cursor per layer,
and explicit ownership transfer of geometries and field definitions.
"""

__version__ = "0.1.0"

from .errors import (
    GdalError,
    OgrError,
    NullPointerError,
    CplError,
    EncodingError,
    InvalidFieldNameError,
    UnsupportedFieldValueError,
    DatasetClosedError,
    LayerBusyError,
    ConsumedHandleError
)

from .config import (
    EngineConfig
)

from .handle import (
    OwnedHandle
)

from .srs import (
    SpatialRef
)

from .dataset import (
    Dataset
)

from .vector import (
    Layer,
    FeatureIterator,
    Defn,
    FieldInfo,
    GeomFieldInfo,
    FieldType,
    FieldDefn,
    Feature,
    Geometry,
    Envelope,
    LayerCaps,
    read_dataframe,
    write_dataframe
)

__all__ = [
    # Errors
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

    # Configuration and resources
    "EngineConfig",
    "OwnedHandle",
    "SpatialRef",
    "Dataset",

    # Vector
    "Layer",
    "FeatureIterator",
    "Defn",
    "FieldInfo",
    "GeomFieldInfo",
    "FieldType",
    "FieldDefn",
    "Feature",
    "Geometry",
    "Envelope",
    "LayerCaps",
    "read_dataframe",
    "write_dataframe"
]
