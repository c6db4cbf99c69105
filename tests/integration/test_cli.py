# tests/integration/test_cli.py

import pytest

from ogrlayer.cli import main

def test_info(places_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["info", str(places_path), "--exact"])
    assert excinfo.value.code == 0

    out = capsys.readouterr().out
    assert "Layer: places" in out
    assert "Feature count: 3" in out
    assert "Spatial reference: EPSG:4326" in out
    assert "  population: INTEGER64" in out
    assert "RandomRead" in out

def test_info_with_filters(places_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["info", str(places_path), "--where", "population > 15", "--bbox", "4", "4", "6", "6", "--exact"])
    assert excinfo.value.code == 0
    assert "Feature count: 1" in capsys.readouterr().out

def test_info_single_feature(places_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["info", str(places_path), "--fid", "2"])
    assert excinfo.value.code == 0

    out = capsys.readouterr().out
    assert "Feature 2" in out
    assert "name = 'b'" in out
    assert "geometry = POINT (5 5)" in out

def test_info_missing_feature(places_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["info", str(places_path), "--fid", "99"])
    assert excinfo.value.code == 1

def test_info_missing_file(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["info", str(tmp_path / "ghost.gpkg")])
    assert excinfo.value.code == 1
