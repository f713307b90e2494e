"""Tests for reading and writing input/output files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from gmaps_coords.exceptions import InputFileError, OutputNotWritableError
from gmaps_coords.files import (
    ensure_writable,
    is_csv,
    read_csv_rows,
    read_feature_collection,
    write_feature_collection,
)
from gmaps_coords.models import FeatureCollection


class TestIsCsv:
    @pytest.mark.parametrize("name,expected", [
        ("places.csv", True),
        ("Places.CSV", True),
        ("places.geojson", False),
        ("places.json", False),
        ("places", False),
    ])
    def test_extension(self, name, expected):
        assert is_csv(Path(name)) is expected


class TestEnsureWritable:
    def test_creates_missing_file(self, tmp_path):
        out = tmp_path / "out.geojson"
        ensure_writable(out)
        assert out.exists()

    def test_does_not_truncate(self, tmp_path):
        out = tmp_path / "out.geojson"
        out.write_text("keep me")
        ensure_writable(out)
        assert out.read_text() == "keep me"

    def test_missing_directory(self, tmp_path):
        with pytest.raises(OutputNotWritableError):
            ensure_writable(tmp_path / "nope" / "out.geojson")

    def test_is_an_os_error(self, tmp_path):
        with pytest.raises(OSError):
            ensure_writable(tmp_path / "nope" / "out.geojson")


class TestGeoJSON:
    def test_read(self, tmp_path):
        path = tmp_path / "in.geojson"
        path.write_text(json.dumps({
            "type": "FeatureCollection",
            "features": [{
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [0, 0]},
                "properties": {"google_maps_url": "https://maps.app.goo.gl/x"},
            }],
        }))
        collection = read_feature_collection(path)
        assert len(collection.features) == 1
        assert collection.features[0].needs_coordinates

    def test_read_invalid(self, tmp_path):
        path = tmp_path / "in.geojson"
        path.write_text("not json")
        with pytest.raises(InputFileError):
            read_feature_collection(path)

    def test_read_missing(self, tmp_path):
        with pytest.raises(InputFileError):
            read_feature_collection(tmp_path / "missing.geojson")

    def test_write_unicode(self, tmp_path):
        path = tmp_path / "out.geojson"
        collection = FeatureCollection.model_validate({
            "type": "FeatureCollection",
            "features": [{
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [139.7, 35.6]},
                "properties": {"name": "東京駅"},
            }],
        })
        write_feature_collection(path, collection)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["features"][0]["properties"]["name"] == "東京駅"
        assert data["features"][0]["geometry"]["coordinates"] == [139.7, 35.6]


class TestCsv:
    def test_rows_keyed_by_header(self, tmp_path):
        path = tmp_path / "in.csv"
        path.write_text(
            "Title,Note,URL,Comment\n"
            "Cafe,,\"https://maps.example/?q=-25.0,160.0\",\n"
            "Bar,Late,https://maps.app.goo.gl/x,Busy\n",
            encoding="utf-8",
        )
        rows = list(read_csv_rows(path))
        assert rows[0] == {
            "Title": "Cafe", "Note": "", "URL": "https://maps.example/?q=-25.0,160.0", "Comment": "",
        }
        assert rows[1]["Comment"] == "Busy"

    def test_utf8_bom(self, tmp_path):
        path = tmp_path / "in.csv"
        path.write_bytes("Title,URL\nCafe,u\n".encode("utf-8-sig"))
        assert list(read_csv_rows(path)) == [{"Title": "Cafe", "URL": "u"}]

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputFileError):
            list(read_csv_rows(tmp_path / "missing.csv"))

    def test_invalid_utf8_row_does_not_end_file(self, tmp_path):
        path = tmp_path / "in.csv"
        path.write_bytes(b"Title,URL\nBad\xff,u\nGood,v\n")
        rows = list(read_csv_rows(path))
        assert len(rows) == 2
        assert rows[1] == {"Title": "Good", "URL": "v"}
