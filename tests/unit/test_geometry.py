# tests/unit/test_geometry.py

import pytest
from osgeo import ogr
from shapely.geometry import Point, Polygon

from ogrlayer import Geometry, Envelope, NullPointerError, EncodingError, ConsumedHandleError

def test_from_wkt():
    geom = Geometry.from_wkt("POINT (1 2)")
    assert geom.geometry_type == ogr.wkbPoint
    assert geom.geometry_name == "POINT"
    assert not geom.is_empty
    assert geom.to_wkt() == "POINT (1 2)"

def test_from_wkt_invalid():
    with pytest.raises(NullPointerError, match="OGR_G_CreateFromWkt"):
        Geometry.from_wkt("POINT (one two)")

def test_from_wkt_embedded_nul():
    with pytest.raises(EncodingError):
        Geometry.from_wkt("POINT (1 2)\x00garbage")

def test_shapely_interop(valid_crown_poly):
    """Shapely -> engine -> shapely keeps the shape."""
    geom = Geometry.from_shapely(valid_crown_poly)
    assert geom.geometry_type == ogr.wkbPolygon
    back = geom.to_shapely()
    assert isinstance(back, Polygon)
    assert back.equals(valid_crown_poly)

def test_from_shapely_rejects_other_types():
    with pytest.raises(TypeError):
        Geometry.from_shapely("POINT (1 2)")

def test_bbox():
    geom = Geometry.bbox(0, 1, 10, 11)
    assert geom.geometry_type == ogr.wkbPolygon
    assert geom.envelope() == Envelope(0.0, 10.0, 1.0, 11.0)
    assert geom.to_shapely().equals(Polygon([(0, 1), (10, 1), (10, 11), (0, 11)]))

def test_equality():
    a = Geometry.from_wkt("POINT (1 2)")
    b = Geometry.from_shapely(Point(1, 2))
    c = Geometry.from_wkt("POINT (2 1)")
    assert a == b
    assert a != c
    assert a != "POINT (1 2)"

def test_clone_is_independent():
    geom = Geometry.from_wkt("POINT (1 2)")
    copy = geom.clone()
    geom.close()
    assert copy.to_wkt() == "POINT (1 2)"

def test_take_consumes_geometry():
    geom = Geometry.from_wkt("POINT (1 2)")
    raw = geom.take()
    assert raw.ExportToWkt() == "POINT (1 2)"
    assert geom.transferred
    assert repr(geom) == "<Geometry consumed>"
    with pytest.raises(ConsumedHandleError):
        geom.to_wkt()
