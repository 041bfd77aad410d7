from geoformat.core.models import (
    CoordinateReferenceSystem,
    Geometry,
    GeometryCollection,
    LAMBERT_72,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Position,
    PositionSequence,
    WGS_84,
)
from geoformat.enums import DimensionalFlag, GeometryType, SerializationFeature
from geoformat.errors import GeoFormatError, PreconditionError, SinkStateError, UnsupportedGeometryTypeError
from geoformat.codec.wkt_tokenizer import tokenize
from geoformat.serializers import GeometrySerializer, SerializationContext, dumps, serialize, to_dict, to_model
