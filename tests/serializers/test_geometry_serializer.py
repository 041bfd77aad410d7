"""Tests for the GeoJSON geometry encoder in geoformat.serializers.geometry."""

from __future__ import annotations

import json

import pytest

from geoformat import (
    DimensionalFlag,
    CoordinateReferenceSystem,
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    PreconditionError,
    UnsupportedGeometryTypeError,
)
from geoformat.schemas import responses
from geoformat.serializers import GeometrySerializer, SerializationContext, dumps, serialize, to_dict, to_model

CRS_4326 = {"type": "name", "properties": {"name": "EPSG:4326"}}


def depth(value) -> int:
    """Return the list nesting depth of a coordinates value."""
    d = 0
    while isinstance(value, list) and value:
        d += 1
        value = value[0]
    return d


def test_point_with_crs(point: Point, default_context: SerializationContext) -> None:
    """Point(10, 20) in EPSG:4326 with default flags."""
    assert dumps(point, default_context) == (
        '{"type":"Point","crs":{"type":"name","properties":{"name":"EPSG:4326"}},"coordinates":[10.0,20.0]}'
    )


def test_point_with_crs_suppressed(point: Point, suppress_crs: SerializationContext) -> None:
    """The suppression flag drops the crs block entirely."""
    assert dumps(point, suppress_crs) == '{"type":"Point","coordinates":[10.0,20.0]}'


def test_empty_line_string(wgs84: CoordinateReferenceSystem, default_context: SerializationContext) -> None:
    """Empty geometries always carry an empty coordinates list."""
    result = to_dict(LineString.of([], crs=wgs84), default_context)
    assert result == {"type": "LineString", "crs": CRS_4326, "coordinates": []}


def test_line_string_coordinates(line_string: LineString, suppress_crs: SerializationContext) -> None:
    """Positions keep their order, one tuple each."""
    text = dumps(line_string, suppress_crs)
    assert text.endswith('"coordinates":[[0.0,0.0],[1.0,1.0],[2.0,2.0]]}')


def test_field_order_is_stable(line_string: LineString, default_context: SerializationContext) -> None:
    """type, crs, coordinates, in that order, on every call."""
    first = dumps(line_string, default_context)
    assert list(json.loads(first)) == ["type", "crs", "coordinates"]
    assert dumps(line_string, default_context) == first


def test_sink_call_protocol(point: Point, recording_sink, suppress_crs: SerializationContext) -> None:
    """The encoder pushes exactly this sequence into the sink."""
    serialize(point, recording_sink, suppress_crs)
    assert recording_sink.calls == [
        ("write_object_start", ()),
        ("write_string_field", ("type", "Point")),
        ("write_field_name", ("coordinates",)),
        ("write_number_array", ([10.0, 20.0],)),
        ("write_object_end", ()),
    ]


def test_crs_block_shape(point: Point, recording_sink, default_context: SerializationContext) -> None:
    """The CRS block is a named CRS with the authority:code string."""
    GeometrySerializer(default_context).serialize(point, recording_sink)
    assert recording_sink.calls[2:10] == [
        ("write_field_name", ("crs",)),
        ("write_object_start", ()),
        ("write_string_field", ("type", "name")),
        ("write_field_name", ("properties",)),
        ("write_object_start", ()),
        ("write_string_field", ("name", "EPSG:4326")),
        ("write_object_end", ()),
        ("write_object_end", ()),
    ]


def test_other_crs_identifier(default_context: SerializationContext) -> None:
    """The crs name is the reference system's string form."""
    lambert = CoordinateReferenceSystem.from_srid(31370)
    assert to_dict(Point.of(1, 2, crs=lambert), default_context)["crs"]["properties"]["name"] == "EPSG:31370"


def test_point_ordinate_order(suppress_crs: SerializationContext) -> None:
    """Ordinates come out as X, Y, Z, M."""
    assert to_dict(Point.of(1, 2, 3, 4), suppress_crs)["coordinates"] == [1.0, 2.0, 3.0, 4.0]
    assert to_dict(Point.of(1, 2, m=4), suppress_crs)["coordinates"] == [1.0, 2.0, 4.0]


def test_nesting_depth_per_type(
    point: Point, line_string: LineString, square: Polygon, suppress_crs: SerializationContext
) -> None:
    """Point 1, LineString 2, Polygon 3, each Multi one more."""
    cases = [
        (point, 1),
        (line_string, 2),
        (square, 3),
        (MultiPoint((point, Point.of(3, 4))), 2),
        (MultiLineString((line_string,)), 3),
        (MultiPolygon((square, square)), 4),
    ]
    for geometry, expected in cases:
        assert depth(to_dict(geometry, suppress_crs)["coordinates"]) == expected


def test_polygon_rings(square: Polygon, suppress_crs: SerializationContext) -> None:
    """Polygons list the exterior ring first, then holes."""
    coordinates = to_dict(square, suppress_crs)["coordinates"]
    assert len(coordinates) == 2
    assert coordinates[0][0] == [0.0, 0.0]
    assert coordinates[1][1] == [2.0, 1.0]


@pytest.mark.parametrize(
    "geometry",
    [Point.empty(), LineString.of([]), Polygon(()), MultiPoint(()), MultiLineString(()), MultiPolygon(())],
)
def test_empty_geometries_serialize_empty_list(geometry, suppress_crs: SerializationContext) -> None:
    """Empty positions give [] whatever the type."""
    assert to_dict(geometry, suppress_crs)["coordinates"] == []


def test_multipoint_with_empty_member(suppress_crs: SerializationContext) -> None:
    """Empty members keep their slot as an empty list."""
    multi = MultiPoint((Point.of(1, 2), Point.empty()))
    assert to_dict(multi, suppress_crs)["coordinates"] == [[1.0, 2.0], []]


def test_geometry_collection_reserializes_members(
    point: Point, line_string: LineString, default_context: SerializationContext
) -> None:
    """Members are complete geometry objects under 'coordinates', each with its own crs."""
    result = to_dict(GeometryCollection((point, line_string)), default_context)
    assert list(result) == ["type", "crs", "coordinates"]
    assert [g["type"] for g in result["coordinates"]] == ["Point", "LineString"]
    assert all(g["crs"] == CRS_4326 for g in result["coordinates"])


def test_geometry_collection_honors_suppression(point: Point, suppress_crs: SerializationContext) -> None:
    """Suppression applies to nested members too."""
    text = dumps(GeometryCollection((point, GeometryCollection())), suppress_crs)
    assert "crs" not in text
    assert json.loads(text) == {
        "type": "GeometryCollection",
        "coordinates": [
            {"type": "Point", "coordinates": [10.0, 20.0]},
            {"type": "GeometryCollection", "coordinates": []},
        ],
    }


def test_linear_ring_fails_explicitly(recording_sink, default_context: SerializationContext) -> None:
    """LinearRing has no GeoJSON form and fails before writing anything."""
    ring = LinearRing.of([(0, 0), (1, 0), (1, 1), (0, 0)])
    with pytest.raises(UnsupportedGeometryTypeError):
        serialize(ring, recording_sink, default_context)
    assert recording_sink.calls == []


def test_none_is_rejected_before_writing(recording_sink, default_context: SerializationContext) -> None:
    """A missing geometry never reaches the sink."""
    with pytest.raises(PreconditionError):
        serialize(None, recording_sink, default_context)  # type: ignore[arg-type]
    assert recording_sink.calls == []


def test_sink_errors_propagate(point: Point, default_context: SerializationContext) -> None:
    """Writer failures surface unchanged."""

    class BrokenSink:
        def __getattr__(self, name):
            def fail(*args):
                raise OSError("disk full")
            return fail

    with pytest.raises(OSError, match="disk full"):
        serialize(point, BrokenSink(), default_context)


def test_to_model_validates_shape(square: Polygon, default_context: SerializationContext) -> None:
    """Encoded output fits the GeoJSON response schemas."""
    model = to_model(square, default_context)
    assert isinstance(model, responses.Polygon)
    assert model.crs is not None
    assert model.crs.properties.name == "EPSG:4326"

    collection = to_model(GeometryCollection((square, Point.empty())), default_context)
    assert isinstance(collection, responses.GeometryCollection)
    assert isinstance(collection.coordinates[1], responses.Point)


def test_default_context_comes_from_settings(point: Point, monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an explicit context the environment settings apply."""
    from geoformat.core.settings import Settings

    monkeypatch.setattr(Settings, "SUPPRESS_CRS_SERIALIZATION", True)
    assert "crs" not in to_dict(point)
    monkeypatch.setattr(Settings, "SUPPRESS_CRS_SERIALIZATION", False)
    assert "crs" in to_dict(point)


def test_nested_linear_ring_fails_before_writing(
    point: Point, recording_sink, default_context: SerializationContext
) -> None:
    """Unsupported members deep inside collections are found before any output."""
    ring = LinearRing.of([(0, 0), (1, 0), (1, 1), (0, 0)])
    nested = GeometryCollection((point, GeometryCollection((point, ring))))
    with pytest.raises(UnsupportedGeometryTypeError):
        serialize(nested, recording_sink, default_context)
    assert recording_sink.calls == []


def test_to_model_accepts_empty_multipoint_member(default_context: SerializationContext) -> None:
    """An empty member point validates as an empty tuple."""
    model = to_model(MultiPoint((Point.of(1, 2), Point.empty())), default_context)
    assert isinstance(model, responses.MultiPoint)
    assert model.coordinates == [(1.0, 2.0), ()]


def test_collection_of_measured_3d_members(suppress_crs: SerializationContext) -> None:
    """ZM members keep all four ordinates, identically on every call."""
    collection = GeometryCollection((
        Point.of(1, 2, 3, 4),
        MultiLineString((LineString.of([(0, 0, 0, 0), (1, 1, 1, 1)]),)),
        MultiPoint((Point.of(5, 6, 7, 8), Point.empty(DimensionalFlag.D3DM))),
    ))
    first = dumps(collection, suppress_crs)
    assert dumps(collection, suppress_crs) == first

    members = json.loads(first)["coordinates"]
    assert members[0]["coordinates"] == [1.0, 2.0, 3.0, 4.0]
    assert members[1]["coordinates"] == [[[0.0, 0.0, 0.0, 0.0], [1.0, 1.0, 1.0, 1.0]]]
    assert members[2]["coordinates"] == [[5.0, 6.0, 7.0, 8.0], []]
    assert isinstance(to_model(collection, suppress_crs), responses.GeometryCollection)
