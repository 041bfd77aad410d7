"""Shared fixtures for the geoformat test suite."""

from __future__ import annotations

from typing import Any, Iterable

import pytest

from geoformat import CoordinateReferenceSystem, LineString, Point, Polygon
from geoformat.serializers import SerializationContext
from geoformat.enums import SerializationFeature


class RecordingSink:
    """In-memory sink fake that records every call as a ``(method, args)`` tuple."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def write_object_start(self) -> None:
        self.calls.append(("write_object_start", ()))

    def write_object_end(self) -> None:
        self.calls.append(("write_object_end", ()))

    def write_field_name(self, name: str) -> None:
        self.calls.append(("write_field_name", (name,)))

    def write_string_field(self, name: str, value: str) -> None:
        self.calls.append(("write_string_field", (name, value)))

    def write_array_start(self) -> None:
        self.calls.append(("write_array_start", ()))

    def write_array_end(self) -> None:
        self.calls.append(("write_array_end", ()))

    def write_number_array(self, values: Iterable[float]) -> None:
        self.calls.append(("write_number_array", (list(values),)))


@pytest.fixture
def recording_sink() -> RecordingSink:
    """Return a fresh recording sink."""
    return RecordingSink()


@pytest.fixture
def wgs84() -> CoordinateReferenceSystem:
    """Return the EPSG:4326 reference system."""
    return CoordinateReferenceSystem.parse("EPSG:4326")


@pytest.fixture
def default_context() -> SerializationContext:
    """Return a context with no feature set."""
    return SerializationContext()


@pytest.fixture
def suppress_crs() -> SerializationContext:
    """Return a context suppressing the CRS block."""
    return SerializationContext.of([SerializationFeature.SUPPRESS_CRS_SERIALIZATION])


@pytest.fixture
def point(wgs84: CoordinateReferenceSystem) -> Point:
    """Return Point(10.0, 20.0) in EPSG:4326."""
    return Point.of(10.0, 20.0, crs=wgs84)


@pytest.fixture
def line_string(wgs84: CoordinateReferenceSystem) -> LineString:
    """Return the diagonal line (0,0) -> (1,1) -> (2,2)."""
    return LineString.of([(0, 0), (1, 1), (2, 2)], crs=wgs84)


@pytest.fixture
def square(wgs84: CoordinateReferenceSystem) -> Polygon:
    """Return a unit square with a small square hole."""
    return Polygon.of(
        [(0, 0), (4, 0), (4, 4), (0, 4), (0, 0)],
        [(1, 1), (2, 1), (2, 2), (1, 1)],
        crs=wgs84,
    )
