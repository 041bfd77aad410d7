from geoformat.core.constants import CRS_TYPE_NAME
from geoformat.core.logging import get_logger
from geoformat.core.models import CoordinateReferenceSystem, Geometry, GeometryCollection, LineString, \
    LinearRing, MultiLineString, MultiPoint, MultiPolygon, Point, Polygon, PositionSequence
from geoformat.enums.serialization_feature import SerializationFeature
from geoformat.errors import PreconditionError, UnsupportedGeometryTypeError
from geoformat.schemas import responses
from geoformat.serializers.context import SerializationContext
from geoformat.serializers.sinks import JsonSink, TextJsonSink, TreeJsonSink
from typing import Any, Callable
import io

logger = get_logger(__name__)


class GeometrySerializer:
    """Writes a geometry as a GeoJSON geometry object into a ``JsonSink``.

    Fields are always emitted in the order ``type``, ``crs`` (unless the context
    suppresses it), ``coordinates``. Geometry collections carry their members under
    ``coordinates`` as well, each member being a complete geometry object encoded with the
    same context.
    """

    def __init__(self, context: SerializationContext | None = None):
        self.context = context if context is not None else SerializationContext.from_settings()

    def serialize(self, geometry: Geometry, sink: JsonSink) -> None:
        if not isinstance(geometry, Geometry):
            raise PreconditionError(f'Expected a Geometry, got {geometry!r}')
        # Resolve every writer, nested members included, before touching the sink
        self._check_supported(geometry)
        logger.trace('Serializing %s as JSON', geometry.geometry_type.camel_cased)
        self._write(geometry, sink)

    def _check_supported(self, geometry: Geometry):
        self._coordinate_writer(geometry)
        if isinstance(geometry, GeometryCollection):
            for member in geometry.geometries:
                self._check_supported(member)

    def _write(self, geometry: Geometry, sink: JsonSink):
        writer = self._coordinate_writer(geometry)
        sink.write_object_start()
        sink.write_string_field('type', geometry.geometry_type.camel_cased)
        self._write_crs(sink, geometry.crs)
        writer(sink, geometry)
        sink.write_object_end()

    def _coordinate_writer(self, geometry: Geometry) -> Callable[[JsonSink, Any], None]:
        if isinstance(geometry, GeometryCollection):
            return self._write_geometries
        # LinearRing is a LineString subclass but has no GeoJSON counterpart
        if isinstance(geometry, LinearRing) or type(geometry) not in _NESTING:
            raise UnsupportedGeometryTypeError(geometry.geometry_type, 'GeoJSON')
        return self._write_coordinates

    def _write_crs(self, sink: JsonSink, crs: CoordinateReferenceSystem):
        if self.context.is_feature_set(SerializationFeature.SUPPRESS_CRS_SERIALIZATION):
            return
        sink.write_field_name('crs')
        sink.write_object_start()
        sink.write_string_field('type', CRS_TYPE_NAME)
        sink.write_field_name('properties')
        sink.write_object_start()
        sink.write_string_field('name', str(crs))
        sink.write_object_end()
        sink.write_object_end()

    def _write_coordinates(self, sink: JsonSink, geometry: Geometry):
        sink.write_field_name('coordinates')
        if geometry.is_empty:
            sink.write_array_start()
            sink.write_array_end()
            return
        _NESTING[type(geometry)](sink, geometry)

    def _write_geometries(self, sink: JsonSink, collection: GeometryCollection):
        sink.write_field_name('coordinates')
        sink.write_array_start()
        for member in collection.geometries:
            self._write(member, sink)
        sink.write_array_end()


def _write_positions(sink: JsonSink, positions: PositionSequence):
    sink.write_array_start()
    for row in positions.to_array().tolist():
        sink.write_number_array(row)
    sink.write_array_end()


def _write_point(sink: JsonSink, point: Point):
    sink.write_number_array(point.positions.to_array()[0].tolist())


def _write_line_string(sink: JsonSink, line_string: LineString):
    _write_positions(sink, line_string.positions)


def _write_polygon(sink: JsonSink, polygon: Polygon):
    sink.write_array_start()
    for ring in polygon.rings:
        _write_positions(sink, ring.positions)
    sink.write_array_end()


def _write_members(member_writer: Callable[[JsonSink, Any], None]) -> Callable[[JsonSink, Any], None]:
    def write(sink: JsonSink, geometry):
        sink.write_array_start()
        for member in geometry.geometries:
            # Empty members keep their slot as []
            if member.is_empty:
                sink.write_array_start()
                sink.write_array_end()
            else:
                member_writer(sink, member)
        sink.write_array_end()
    return write


_NESTING: dict[type, Callable[[JsonSink, Any], None]] = {
    Point: _write_point,
    LineString: _write_line_string,
    Polygon: _write_polygon,
    MultiPoint: _write_members(_write_point),
    MultiLineString: _write_members(_write_line_string),
    MultiPolygon: _write_members(_write_polygon),
}


def serialize(geometry: Geometry, sink: JsonSink, context: SerializationContext | None = None) -> None:
    GeometrySerializer(context).serialize(geometry, sink)


def dumps(geometry: Geometry, context: SerializationContext | None = None) -> str:
    buffer = io.StringIO()
    serialize(geometry, TextJsonSink(buffer), context)
    return buffer.getvalue()


def to_dict(geometry: Geometry, context: SerializationContext | None = None) -> dict[str, Any]:
    sink = TreeJsonSink()
    serialize(geometry, sink, context)
    return sink.result


def to_model(geometry: Geometry, context: SerializationContext | None = None) -> responses.Geometry:
    return responses.GeometryAdapter.validate_python(to_dict(geometry, context))
