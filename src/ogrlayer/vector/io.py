# src/ogrlayer/vector/io.py

"""
This module converts between layers and GeoPandas GeoDataFrames.

Both directions go through the regular Layer API (features() and
create_feature_fields()), so filters, cursor exclusivity and ownership
transfer apply exactly as they do for direct callers.
"""

import logging
from typing import Any, List, Optional

import geopandas as gpd
import pandas as pd

from ..errors import NullPointerError
from .feature import Feature
from .field import FieldType
from .geometry import Geometry
from .layer import Layer

log = logging.getLogger(__name__)

__all__ = [
    "read_dataframe",
    "write_dataframe"
]

def _field_type_for(dtype) -> FieldType:
    if pd.api.types.is_bool_dtype(dtype):
        return FieldType.INTEGER
    if pd.api.types.is_integer_dtype(dtype):
        return FieldType.INTEGER64
    if pd.api.types.is_float_dtype(dtype):
        return FieldType.REAL
    if pd.api.types.is_datetime64_any_dtype(dtype):
        return FieldType.DATE_TIME
    return FieldType.STRING

def _to_field_value(value: Any) -> Any:
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value

def read_dataframe(layer: Layer, columns: Optional[List[str]] = None) -> gpd.GeoDataFrame:
    """
    Reads the features matching the layer's current filters into a GeoDataFrame.

    Args:
        layer: Source layer. No other iterator may be active on it.
        columns: Optional subset of attribute fields to read (default all).

    Returns:
        gpd.GeoDataFrame: One row per feature, indexed by feature id, with the
            layer CRS when the layer has one.
    """
    names = layer.defn.field_names
    if columns is not None:
        unknown = [c for c in columns if c not in names]
        if unknown:
            raise ValueError(f"Unknown fields {unknown}. Available fields: {names}")
        names = list(columns)

    records, geometries, fids = [], [], []
    with layer.features() as features:
        for feature in features:
            with feature:
                records.append([feature.field(name) for name in names])
                geom = feature.geometry()
                geometries.append(geom.to_shapely() if geom is not None else None)
                fids.append(feature.fid)

    try:
        crs = layer.spatial_ref().to_crs()
    except NullPointerError:
        log.debug(f"Layer '{layer.name}' has no spatial reference. Returning a naive GeoDataFrame.")
        crs = None

    index = pd.Index(fids, name="fid")
    df = pd.DataFrame(records, columns=names, index=index)
    return gpd.GeoDataFrame(df, geometry=gpd.GeoSeries(geometries, index=index), crs=crs)

def write_dataframe(gdf: gpd.GeoDataFrame, layer: Layer, create_fields: bool = True) -> int:
    """
    Appends the rows of a GeoDataFrame to a layer as new features.

    Args:
        gdf: Source data. The active geometry column becomes the feature geometry.
        layer: Target layer, opened for writing.
        create_fields: If True, columns without a matching layer field are
            created first (types inferred from the column dtypes).

    Returns:
        int: Number of features written.

    Raises:
        ValueError: If a column has no matching field and create_fields is False.
        GdalError: If the engine rejects a field or a feature. Features written
            before the failure are kept.
    """
    if not isinstance(gdf, gpd.GeoDataFrame):
        raise TypeError(f"Expected GeoDataFrame, got {type(gdf)}")

    geom_col = gdf.geometry.name
    columns = [c for c in gdf.columns if c != geom_col]
    existing = set(layer.defn.field_names)
    missing = [(str(c), _field_type_for(gdf[c].dtype)) for c in columns if c not in existing]

    if missing:
        if not create_fields:
            raise ValueError(f"Columns {[m[0] for m in missing]} have no matching field in layer '{layer.name}'")
        log.info(f"Creating fields {[m[0] for m in missing]} on layer '{layer.name}'")
        layer.create_defn_fields(missing)

    names = [str(c) for c in columns]
    count = 0
    for row, geom in zip(gdf[columns].itertuples(index=False, name=None), gdf.geometry):
        values = [_to_field_value(v) for v in row]
        if geom is None:
            with Feature.new(layer.defn) as feature:
                for name, value in zip(names, values):
                    feature.set_field(name, value)
                feature.create(layer)
        else:
            layer.create_feature_fields(Geometry.from_shapely(geom), names, values)
        count += 1

    log.info(f"Wrote {count} features to layer '{layer.name}'")
    return count
