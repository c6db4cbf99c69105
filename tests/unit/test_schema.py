# tests/unit/test_schema.py

import pytest
from osgeo import ogr

from ogrlayer import FieldDefn, FieldType, FieldInfo, OgrError, EncodingError

# --- FieldDefn ---

def test_field_defn_properties():
    fdefn = FieldDefn("height", FieldType.REAL)
    fdefn.set_width(10)
    fdefn.set_precision(3)

    assert fdefn.name == "height"
    assert fdefn.field_type == FieldType.REAL
    assert fdefn.width == 10
    assert fdefn.precision == 3
    assert not fdefn.attached

def test_field_defn_accepts_engine_integers():
    assert FieldDefn("n", ogr.OFTInteger64).field_type == FieldType.INTEGER64

def test_field_types_match_engine():
    assert FieldType.INTEGER == ogr.OFTInteger
    assert FieldType.STRING == ogr.OFTString
    assert FieldType.DATE_TIME == ogr.OFTDateTime
    assert FieldType.INTEGER64_LIST == ogr.OFTInteger64List

def test_field_defn_embedded_nul():
    with pytest.raises(EncodingError):
        FieldDefn("bad\x00name", FieldType.STRING)

def test_add_to_layer(memory_layer):
    fdefn = FieldDefn("height", FieldType.REAL)
    fdefn.set_width(8)
    fdefn.set_precision(2)
    fdefn.add_to_layer(memory_layer)

    assert fdefn.attached
    # The engine copied the definition; the wrapper still owns its own descriptor
    assert fdefn.name == "height"
    fdefn.close()

    assert memory_layer.defn.fields()[-1] == FieldInfo("height", FieldType.REAL, 8, 2)

def test_add_to_readonly_layer_fails(readonly_layer):
    with FieldDefn("extra", FieldType.STRING) as fdefn:
        with pytest.raises(OgrError) as excinfo:
            fdefn.add_to_layer(readonly_layer)
        assert excinfo.value.method_name == "OGR_L_CreateField"
        assert not fdefn.attached

# --- Defn ---

def test_defn_is_cached(places_layer):
    """The layer hands out the same schema object every time, with stable field order."""
    first = places_layer.defn
    assert places_layer.defn is first
    assert first.field_names == ["name", "population"]
    assert places_layer.defn.field_names == ["name", "population"]

def test_defn_fields(places_layer):
    fields = places_layer.defn.fields()
    assert [f.field_type for f in fields] == [FieldType.STRING, FieldType.INTEGER64]
    assert places_layer.defn.field_count == 2
    assert places_layer.defn.name == "places"

def test_defn_geom_fields(places_layer):
    geom_fields = places_layer.defn.geom_fields()
    assert len(geom_fields) == 1
    assert geom_fields[0].geometry_type == ogr.wkbPoint

def test_defn_field_index(places_layer):
    assert places_layer.defn.field_index("population") == 1
    assert places_layer.defn.field_index("missing") is None

def test_create_defn_fields_in_order(memory_layer):
    """Bulk creation appends fields in the given order with the given types."""
    before = memory_layer.defn.field_names
    memory_layer.create_defn_fields([("a", FieldType.INTEGER), ("b", FieldType.STRING)])

    fields = memory_layer.defn.fields()
    assert [f.name for f in fields] == before + ["a", "b"]
    assert fields[-2].field_type == FieldType.INTEGER
    assert fields[-1].field_type == FieldType.STRING

def test_create_defn_fields_stops_at_first_failure(memory_layer):
    """Fields before the failing one stay; fields after it are never created."""
    with pytest.raises(EncodingError):
        memory_layer.create_defn_fields([
            ("ok", FieldType.INTEGER),
            ("bad\x00", FieldType.STRING),
            ("never", FieldType.REAL),
        ])

    names = memory_layer.defn.field_names
    assert "ok" in names
    assert "never" not in names

def test_create_defn_fields_readonly(readonly_layer):
    with pytest.raises(OgrError):
        readonly_layer.create_defn_fields([("extra", FieldType.INTEGER)])
    assert readonly_layer.defn.field_names == ["name", "population"]
