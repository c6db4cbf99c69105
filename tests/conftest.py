# tests/conftest.py

import pytest
import geopandas as gpd
from shapely.geometry import Point, Polygon
from osgeo import gdal, ogr, osr

from ogrlayer import Dataset, FieldType

# Host applications usually run the bindings in exception mode; the wrapper
# must behave the same way regardless.
gdal.UseExceptions()
ogr.UseExceptions()
osr.UseExceptions()

PLACES = [
    ("a", 10, (0.0, 0.0)),
    ("b", 20, (5.0, 5.0)),
    ("c", 30, (10.0, 10.0)),
]

@pytest.fixture
def places_path(tmp_path):
    """
    Fixture: Creates a GeoPackage with one point layer 'places' (EPSG:4326)
    holding the three PLACES records, written with the raw bindings.
    """
    path = tmp_path / "places.gpkg"

    srs = osr.SpatialReference()
    srs.ImportFromEPSG(4326)

    ds = ogr.GetDriverByName("GPKG").CreateDataSource(str(path))
    lyr = ds.CreateLayer("places", srs, ogr.wkbPoint)
    lyr.CreateField(ogr.FieldDefn("name", ogr.OFTString))
    lyr.CreateField(ogr.FieldDefn("population", ogr.OFTInteger64))

    for name, population, (x, y) in PLACES:
        feat = ogr.Feature(lyr.GetLayerDefn())
        feat.SetField("name", name)
        feat.SetField("population", population)
        feat.SetGeometry(ogr.CreateGeometryFromWkt(f"POINT ({x} {y})"))
        lyr.CreateFeature(feat)
        feat = None

    lyr = None
    ds = None
    return path

@pytest.fixture
def places_ds(places_path):
    """Opens the places GeoPackage in update mode."""
    ds = Dataset.open(places_path, update=True)
    yield ds
    ds.close()

@pytest.fixture
def places_layer(places_ds):
    return places_ds.layer_by_name("places")

@pytest.fixture
def readonly_layer(places_path):
    """The places layer opened read-only."""
    ds = Dataset.open(places_path)
    yield ds.layer(0)
    ds.close()

@pytest.fixture
def memory_ds():
    ds = Dataset.memory()
    yield ds
    ds.close()

@pytest.fixture
def memory_layer(memory_ds):
    """An in-memory point layer without spatial reference and with a 'name' string field."""
    layer = memory_ds.create_layer("mem", geometry_type=ogr.wkbPoint)
    layer.create_defn_fields([("name", FieldType.STRING)])
    return layer

@pytest.fixture
def typed_layer(memory_ds):
    """An in-memory layer with one field of each commonly used type."""
    layer = memory_ds.create_layer("typed", geometry_type=ogr.wkbUnknown)
    layer.create_defn_fields([
        ("i", FieldType.INTEGER),
        ("i64", FieldType.INTEGER64),
        ("r", FieldType.REAL),
        ("s", FieldType.STRING),
        ("d", FieldType.DATE),
        ("t", FieldType.TIME),
        ("dt", FieldType.DATE_TIME),
        ("il", FieldType.INTEGER_LIST),
        ("rl", FieldType.REAL_LIST),
        ("sl", FieldType.STRING_LIST),
        ("b", FieldType.BINARY),
    ])
    return layer

@pytest.fixture
def empty_gpkg_layer(tmp_path):
    """A point layer with no features in a fresh GeoPackage."""
    ds = Dataset.create("GPKG", tmp_path / "empty.gpkg")
    layer = ds.create_layer("empty", spatial_ref=4326, geometry_type=ogr.wkbPoint)
    yield layer
    ds.close()

@pytest.fixture
def valid_crown_poly():
    """Returns a simple square polygon."""
    return Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])

@pytest.fixture
def rich_gdf(valid_crown_poly):
    """
    Returns a GDF with multiple features and attributes
    to test the GeoDataFrame bridge.
    """
    poly2 = Polygon([(20, 20), (30, 20), (30, 30), (20, 30)])

    return gpd.GeoDataFrame(
        {
            'crown_id': [1, 2],
            'species': ['Abies', 'Picea'],
            'height': [15.5, 22.0],
            'geometry': [valid_crown_poly, poly2]
        },
        crs="EPSG:32619"
    )

@pytest.fixture
def point_gdf():
    return gpd.GeoDataFrame(
        {'name': ['x', None], 'geometry': [Point(1, 2), Point(3, 4)]},
        crs="EPSG:4326"
    )
