# src/ogrlayer/vector/__init__.py
#
# Copyright (c) The ogrlayer project contributors
# This software is distributed under the Apache-2.0 license.
# See the NOTICE file for more information

"""
The vector subpackage provides the layer wrapper and the types it exchanges with callers:
features, geometries, field definitions, schema descriptors and capability flags.
"""

# Layer and iteration
from .layer import (
    Layer,
    FeatureIterator
)

# Schema
from .defn import (
    Defn,
    FieldInfo,
    GeomFieldInfo
)

from .field import (
    FieldType,
    FieldDefn
)

# Values
from .feature import (
    Feature
)

from .geometry import (
    Geometry
)

from .envelope import (
    Envelope
)

from .caps import (
    LayerCaps
)

# GeoDataFrame bridge
from .io import (
    read_dataframe,
    write_dataframe
)

__all__ = [
    # Layer and iteration
    "Layer",
    "FeatureIterator",

    # Schema
    "Defn",
    "FieldInfo",
    "GeomFieldInfo",
    "FieldType",
    "FieldDefn",

    # Values
    "Feature",
    "Geometry",
    "Envelope",
    "LayerCaps",

    # GeoDataFrame bridge
    "read_dataframe",
    "write_dataframe"
]
