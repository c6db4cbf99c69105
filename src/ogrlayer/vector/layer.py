# src/ogrlayer/vector/layer.py

"""
This module defines the Layer wrapper and the cursor-based feature iterator.

The engine keeps a single read position per layer handle. Iterating with two
cursors at once, or changing filters halfway through an iteration, silently
corrupts that position. Layer therefore hands out at most one active
FeatureIterator at a time and refuses every mutating operation while one is
alive. Random access by feature id does not use the cursor and is always
allowed.
"""

import logging
import weakref
from typing import TYPE_CHECKING, Any, Iterator, Optional, Sequence, Tuple, Union

from ..bindings import (
    engine_call,
    check_ogrerr,
    pending_failure,
    ensure_c_string,
    OGRERR_FAILURE,
)
from ..errors import LayerBusyError, OgrError
from ..srs import SpatialRef
from .caps import LayerCaps
from .defn import Defn
from .envelope import Envelope
from .feature import Feature
from .field import FieldDefn, FieldType
from .geometry import Geometry

if TYPE_CHECKING:
    from ..dataset import Dataset

log = logging.getLogger(__name__)

__all__ = [
    "Layer",
    "FeatureIterator"
]

class Layer:
    """
    Layer in a vector dataset.

    Obtain layers from a Dataset (Dataset.layer, Dataset.layer_by_name,
    Dataset.create_layer). A Layer is only usable while its Dataset is open.

        with Dataset.open("roads.geojson") as ds:
            layer = ds.layer(0)
            for feature in layer.features():
                print(feature.fid, feature.field("name"))
    """
    def __init__(self, dataset: "Dataset", raw_layer: Any):
        if raw_layer is None:
            raise ValueError("Layer cannot wrap a NULL handle")
        self._dataset = dataset
        self._layer = raw_layer
        self._defn = Defn(raw_layer.GetLayerDefn(), dataset)
        self._cursor: Optional[weakref.ref] = None
        self._attribute_filter: Optional[str] = None

    # --- Handle access ---

    def _raw(self, operation: str) -> Any:
        """Returns the engine layer after checking that the dataset is still open."""
        self._dataset.ensure_open(operation)
        return self._layer

    def _active_cursor(self) -> Optional["FeatureIterator"]:
        if self._cursor is None:
            return None
        it = self._cursor()
        if it is None or not it.active:
            self._cursor = None
            return None
        return it

    def _exclusive(self, operation: str) -> Any:
        """Returns the engine layer for an operation that needs exclusive access."""
        if self._active_cursor() is not None:
            raise LayerBusyError(
                f"Cannot run {operation} on layer '{self.name}' while a feature iterator is active; "
                f"exhaust or close() the iterator first"
            )
        return self._raw(operation)

    def _release_cursor(self, iterator: "FeatureIterator") -> None:
        if self._cursor is not None and self._cursor() is iterator:
            self._cursor = None

    @property
    def dataset(self) -> "Dataset":
        return self._dataset

    # --- Properties ---

    @property
    def name(self) -> str:
        return self._raw("OGR_L_GetName").GetName()

    @property
    def defn(self) -> Defn:
        return self._defn

    @property
    def geometry_type(self) -> int:
        return self._raw("OGR_L_GetGeomType").GetGeomType()

    @property
    def fid_column(self) -> str:
        return self._raw("OGR_L_GetFIDColumn").GetFIDColumn()

    @property
    def geometry_column(self) -> str:
        return self._raw("OGR_L_GetGeometryColumn").GetGeometryColumn()

    @property
    def attribute_filter(self) -> Optional[str]:
        """The attribute filter installed through this wrapper, if any."""
        return self._attribute_filter

    def has_capability(self, capability: LayerCaps) -> bool:
        """Asks the engine whether the layer currently supports a capability."""
        raw = self._raw("OGR_L_TestCapability")
        with engine_call("OGR_L_TestCapability"):
            return bool(raw.TestCapability(LayerCaps(capability).token))

    def spatial_ref(self) -> SpatialRef:
        """
        Fetches the spatial reference system of this layer.

        Raises:
            NullPointerError: If the layer has no spatial reference.
        """
        return SpatialRef.from_layer_handle(self._raw("OGR_L_GetSpatialRef"))

    # --- Reading ---

    def feature(self, fid: int) -> Optional[Feature]:
        """
        Returns the feature with the given feature id, or None if not found.

        Unaffected by spatial and attribute filters. Not all drivers do this
        efficiently, but it always works if the feature exists: the fallback
        scans the whole layer.
        """
        raw = self._raw("OGR_L_GetFeature")
        with engine_call("OGR_L_GetFeature"):
            handle = raw.GetFeature(int(fid))
        if handle is None:
            return None
        return Feature(self._defn, handle)

    def features(self) -> "FeatureIterator":
        """
        Returns an iterator over the features matching the current filters.

        Resets the read position first. Only one iterator can be active per
        layer; exhaust or close() it before starting another one or changing
        filters.

        Raises:
            LayerBusyError: If another iterator on this layer is still active.
        """
        raw = self._exclusive("OGR_L_ResetReading")
        with engine_call("OGR_L_ResetReading"):
            raw.ResetReading()
        iterator = FeatureIterator(self)
        self._cursor = weakref.ref(iterator)
        return iterator

    def __iter__(self) -> Iterator[Feature]:
        return self.features()

    # --- Filters ---

    def set_spatial_filter(self, geometry: Geometry) -> None:
        """Restricts iteration to features intersecting the geometry (which stays owned by the caller)."""
        raw = self._exclusive("OGR_L_SetSpatialFilter")
        with engine_call("OGR_L_SetSpatialFilter"):
            raw.SetSpatialFilter(geometry.handle)

    def set_spatial_filter_rect(self, min_x: float, min_y: float, max_x: float, max_y: float) -> None:
        """Restricts iteration to features intersecting the rectangle."""
        raw = self._exclusive("OGR_L_SetSpatialFilterRect")
        with engine_call("OGR_L_SetSpatialFilterRect"):
            raw.SetSpatialFilterRect(float(min_x), float(min_y), float(max_x), float(max_y))

    def clear_spatial_filter(self) -> None:
        raw = self._exclusive("OGR_L_SetSpatialFilter")
        with engine_call("OGR_L_SetSpatialFilter"):
            raw.SetSpatialFilter(None)

    def set_attribute_filter(self, query: str) -> None:
        """
        Restricts iteration with a restricted SQL WHERE expression.

        Installing a filter generally resets the read position. If the engine
        rejects the expression, the previously installed filter is put back.

        Args:
            query: Boolean expression, e.g. "population > 1000 AND kind = 'city'".

        Raises:
            EncodingError: If the query contains an embedded NUL character.
            OgrError: If the engine rejects the expression.
        """
        ensure_c_string(query, "attribute filter")
        raw = self._exclusive("OGR_L_SetAttributeFilter")
        with engine_call("OGR_L_SetAttributeFilter"):
            rv = raw.SetAttributeFilter(query)
            try:
                check_ogrerr(rv, "OGR_L_SetAttributeFilter")
            except OgrError:
                raw.SetAttributeFilter(self._attribute_filter)
                raise
        self._attribute_filter = query

    def clear_attribute_filter(self) -> None:
        raw = self._exclusive("OGR_L_SetAttributeFilter")
        with engine_call("OGR_L_SetAttributeFilter"):
            raw.SetAttributeFilter(None)
        self._attribute_filter = None

    # --- Schema ---

    def create_defn_fields(self, fields_def: Sequence[Tuple[str, Union[FieldType, int]]]) -> None:
        """
        Creates one field per (name, type) pair, in order.

        Stops at the first failure; fields created before it are kept.
        """
        for name, field_type in fields_def:
            with FieldDefn(name, field_type) as fdefn:
                fdefn.add_to_layer(self)

    # --- Writing ---

    def _create_raw_feature(self, feature: Feature) -> None:
        raw = self._exclusive("OGR_L_CreateFeature")
        with engine_call("OGR_L_CreateFeature"):
            rv = raw.CreateFeature(feature.handle)
            check_ogrerr(rv, "OGR_L_CreateFeature")

    def create_feature(self, geometry: Geometry) -> None:
        """
        Creates a feature holding only the given geometry.

        The geometry's ownership moves into the new feature; the Geometry
        wrapper is consumed.

        Raises:
            OgrError: If the geometry cannot be attached or the feature cannot be created.
        """
        self._exclusive("OGR_L_CreateFeature")
        with Feature.new(self._defn) as feature:
            feature.set_geometry(geometry)
            self._create_raw_feature(feature)

    def create_feature_fields(
        self,
        geometry: Geometry,
        field_names: Sequence[str],
        values: Sequence[Any]
    ) -> None:
        """
        Creates a feature with a geometry and attribute values.

        Names and values are paired by position. If the sequences differ in
        length, the extra items of the longer one are ignored.

        Raises:
            InvalidFieldNameError: If a name is not a field of this layer.
            OgrError: If the geometry cannot be attached or the feature cannot be created.
        """
        self._exclusive("OGR_L_CreateFeature")
        with Feature.new(self._defn) as feature:
            feature.set_geometry(geometry)
            for name, value in zip(field_names, values):
                feature.set_field(name, value)
            feature.create(self)

    # --- Counts and extents ---

    def feature_count(self) -> int:
        """
        Returns the number of features, even if that requires a full scan.

        Takes the spatial filter into account. For live databases the count may not be exact.
        Drivers without a fast count scan the layer with its own read cursor, so
        this is refused while an iterator is active.

        Raises:
            LayerBusyError: If a feature iterator on this layer is still active.
        """
        raw = self._exclusive("OGR_L_GetFeatureCount")
        with engine_call("OGR_L_GetFeatureCount"):
            return int(raw.GetFeatureCount(1))

    def try_feature_count(self) -> Optional[int]:
        """Returns the number of features if the engine can tell cheaply, otherwise None."""
        raw = self._raw("OGR_L_GetFeatureCount")
        with engine_call("OGR_L_GetFeatureCount"):
            count = int(raw.GetFeatureCount(0))
        return None if count < 0 else count

    def get_extent(self) -> Envelope:
        """
        Returns the extent of the layer, even if that requires a full scan.

        Depending on the driver the spatial filter may or may not be taken
        into account, so call this without a spatial filter.

        Raises:
            OgrError: OGRERR_FAILURE if the layer has no geometry to bound.
            CplError: If the engine reported another failure.
            LayerBusyError: If a feature iterator on this layer is still active
                (a forced extent may scan the layer with its read cursor).
        """
        raw = self._exclusive("OGR_L_GetExtent")
        with engine_call("OGR_L_GetExtent"):
            extent = raw.GetExtent(force=1, can_return_null=True)
            if extent is None:
                err = pending_failure("OGR_L_GetExtent")
                if err is not None:
                    raise err
                raise OgrError(OGRERR_FAILURE, "OGR_L_GetExtent", "no meaningful extent")
        return Envelope.from_ogr(extent)

    def try_get_extent(self) -> Optional[Envelope]:
        """
        Returns the extent of the layer if the engine can compute it cheaply.

        Returns:
            Envelope, or None when the engine reports that no extent is available.

        Raises:
            CplError: If the engine reported any other failure.
        """
        raw = self._raw("OGR_L_GetExtent")
        with engine_call("OGR_L_GetExtent"):
            extent = raw.GetExtent(force=0, can_return_null=True)
            if extent is None:
                err = pending_failure("OGR_L_GetExtent")
                if err is not None:
                    raise err
                return None
        return Envelope.from_ogr(extent)

    def __repr__(self):
        if self._dataset.closed:
            return "<Layer (dataset closed)>"
        return f"<Layer name={self.name!r} fields={self._defn.field_names}>"


class FeatureIterator:
    """
    Single-pass iterator over the features of a layer.

    Produced by Layer.features(). Holds the layer's cursor until it is
    exhausted, closed, or garbage collected.
    """
    def __init__(self, layer: Layer):
        self._layer = layer
        self._defn = layer.defn
        self._size_hint = layer.try_feature_count() if layer.dataset.config.size_hint else None
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    @property
    def size_hint(self) -> Tuple[int, Optional[int]]:
        """(lower, upper) bound on the number of features, as known when iteration started."""
        if self._size_hint is None:
            return (0, None)
        return (self._size_hint, self._size_hint)

    def __length_hint__(self) -> int:
        return self._size_hint or 0

    def __iter__(self) -> "FeatureIterator":
        return self

    def __next__(self) -> Feature:
        if not self._active:
            raise StopIteration
        raw = self._layer._raw("OGR_L_GetNextFeature")
        with engine_call("OGR_L_GetNextFeature"):
            handle = raw.GetNextFeature()
            err = pending_failure("OGR_L_GetNextFeature") if handle is None else None
        if handle is None:
            self.close()
            if err is not None:
                raise err
            raise StopIteration
        return Feature(self._defn, handle)

    def close(self) -> None:
        """Stops the iteration and gives the cursor back to the layer."""
        if self._active:
            self._active = False
            self._layer._release_cursor(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self):
        state = "active" if self._active else "finished"
        if self._layer.dataset.closed:
            return f"<FeatureIterator (dataset closed) {state}>"
        return f"<FeatureIterator layer={self._layer.name!r} {state}>"
