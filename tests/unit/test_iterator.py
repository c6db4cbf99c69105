# tests/unit/test_iterator.py

import gc
import operator

import pytest

from osgeo import gdal

from ogrlayer import EngineConfig, Dataset, Geometry, Layer, LayerBusyError, DatasetClosedError, CplError
from helpers import collect

# --- Cursor exclusivity ---

def test_second_iterator_is_refused(places_layer):
    first = places_layer.features()
    next(first)
    with pytest.raises(LayerBusyError):
        places_layer.features()

def test_mutations_refused_while_iterating(places_layer):
    it = places_layer.features()
    next(it)

    with pytest.raises(LayerBusyError):
        places_layer.set_attribute_filter("name = 'a'")
    with pytest.raises(LayerBusyError):
        places_layer.clear_attribute_filter()
    with pytest.raises(LayerBusyError):
        places_layer.set_spatial_filter_rect(0, 0, 1, 1)
    with pytest.raises(LayerBusyError):
        places_layer.clear_spatial_filter()

    geom = Geometry.from_wkt("POINT (1 1)")
    with pytest.raises(LayerBusyError):
        places_layer.create_feature(geom)
    # Refused before ownership moved
    assert not geom.transferred

def test_forced_queries_refused_while_iterating(memory_layer):
    """A filtered Memory layer counts and bounds by scanning with the shared cursor."""
    for i, name in enumerate(("x", "y", "z")):
        memory_layer.create_feature_fields(Geometry.from_wkt(f"POINT ({i} {i})"), ["name"], [name])
    memory_layer.set_attribute_filter("name <> 'q'")

    it = memory_layer.features()
    assert next(it).field("name") == "x"

    with pytest.raises(LayerBusyError):
        memory_layer.feature_count()
    with pytest.raises(LayerBusyError):
        memory_layer.get_extent()

    assert [f.field("name") for f in it] == ["y", "z"]
    assert memory_layer.feature_count() == 3

def test_random_access_allowed_while_iterating(places_layer):
    """feature(fid) does not use the cursor, so iteration continues undisturbed."""
    it = places_layer.features()
    assert next(it).field("name") == "a"
    assert places_layer.feature(3).field("name") == "c"
    assert [f.field("name") for f in it] == ["b", "c"]

def test_exhaustion_releases_cursor(places_layer):
    it = places_layer.features()
    assert len(list(it)) == 3
    assert not it.active
    assert collect(places_layer) == ["a", "b", "c"]

def test_close_releases_cursor(places_layer):
    it = places_layer.features()
    next(it)
    it.close()
    assert not it.active
    places_layer.set_attribute_filter("name = 'c'")
    assert collect(places_layer) == ["c"]

def test_context_manager_releases_cursor(places_layer):
    with places_layer.features() as it:
        next(it)
    places_layer.set_spatial_filter_rect(4, 4, 6, 6)
    assert collect(places_layer) == ["b"]

def test_abandoned_iterator_releases_cursor(places_layer):
    it = places_layer.features()
    next(it)
    del it
    gc.collect()
    assert collect(places_layer) == ["a", "b", "c"]

def test_break_out_of_loop_releases_cursor(places_layer):
    for feature in places_layer:
        if feature.field("name") == "a":
            break
    gc.collect()
    places_layer.set_attribute_filter("name = 'b'")
    assert collect(places_layer) == ["b"]

# --- Single pass ---

def test_iterator_is_single_pass(places_layer):
    it = places_layer.features()
    assert len(list(it)) == 3
    assert list(it) == []
    with pytest.raises(StopIteration):
        next(it)

# --- Size hint ---

def test_size_hint(places_layer):
    it = places_layer.features()
    cheap = places_layer.try_feature_count()
    if cheap is None:
        assert it.size_hint == (0, None)
    else:
        assert it.size_hint == (3, 3)
        assert operator.length_hint(it) == 3
    it.close()

def test_size_hint_disabled(places_path):
    with Dataset.open(places_path, config=EngineConfig(size_hint=False)) as ds:
        it = ds.layer(0).features()
        assert it.size_hint == (0, None)
        assert operator.length_hint(it) == 0
        assert len(list(it)) == 3

# --- Dataset lifetime ---

def test_layer_unusable_after_dataset_close(places_path):
    ds = Dataset.open(places_path)
    layer = ds.layer(0)
    defn = layer.defn
    ds.close()

    with pytest.raises(DatasetClosedError):
        layer.feature_count()
    with pytest.raises(DatasetClosedError):
        layer.features()
    with pytest.raises(DatasetClosedError):
        layer.name
    with pytest.raises(DatasetClosedError):
        defn.fields()

def test_iterator_unusable_after_dataset_close(places_path):
    ds = Dataset.open(places_path)
    it = ds.layer(0).features()
    next(it)
    ds.close()

    with pytest.raises(DatasetClosedError):
        next(it)

def test_iterator_repr_after_dataset_close(places_path):
    ds = Dataset.open(places_path)
    it = ds.layer(0).features()
    ds.close()
    assert "dataset closed" in repr(it)

# --- Engine failures ---

class FailingReads:
    """Engine layer stand-in whose reads report a CPL failure and return nothing."""
    def __init__(self, raw):
        self._raw = raw

    def GetLayerDefn(self):
        return self._raw.GetLayerDefn()

    def GetName(self):
        return "failing"

    def ResetReading(self):
        pass

    def GetFeatureCount(self, force=1):
        return 0

    def GetNextFeature(self):
        gdal.Error(gdal.CE_Failure, 1, "simulated read failure")
        return None

    def GetExtent(self, force=1, can_return_null=False):
        gdal.Error(gdal.CE_Failure, 1, "simulated extent failure")
        return None

@pytest.fixture
def failing_layer(memory_ds, memory_layer):
    return Layer(memory_ds, FailingReads(memory_layer._layer))

def test_iterator_raises_engine_failure(failing_layer):
    """A failed read is reported, not mistaken for the end of the layer."""
    it = failing_layer.features()
    with pytest.raises(CplError, match="simulated read failure") as excinfo:
        next(it)
    assert excinfo.value.method_name == "OGR_L_GetNextFeature"
    assert not it.active

def test_try_get_extent_raises_engine_failure(failing_layer):
    """A failed extent query is reported, not mistaken for an absent extent."""
    with pytest.raises(CplError, match="simulated extent failure") as excinfo:
        failing_layer.try_get_extent()
    assert excinfo.value.method_name == "OGR_L_GetExtent"

    with pytest.raises(CplError):
        failing_layer.get_extent()
