from geoformat.codec import wkt_token
from geoformat.codec.wkt_token import WktToken
from geoformat.core.logging import get_logger
from geoformat.core.models import Geometry, GeometryCollection, LineString, Point, Polygon
from geoformat.enums.dimensional_flag import DimensionalFlag
from geoformat.errors import PreconditionError, UnsupportedGeometryTypeError
from typing import Iterator

logger = get_logger(__name__)


def tokenize(geometry: Geometry) -> Iterator[WktToken]:
    """Yield the WKT token stream of a complete document for ``geometry``."""
    if not isinstance(geometry, Geometry):
        raise PreconditionError(f'Expected a Geometry, got {geometry!r}')
    logger.trace('Tokenizing %s', geometry.geometry_type.wkt_tag)
    yield from _document(geometry)
    yield wkt_token.end()


def _document(geometry: Geometry) -> Iterator[WktToken]:
    flag = geometry.dimensional_flag
    yield wkt_token.geometry_tag(geometry.geometry_type, flag.is_measured)
    if flag != DimensionalFlag.D2D:
        yield wkt_token.dimension_marker(flag)
    yield from _body(geometry)


def _body(geometry: Geometry) -> Iterator[WktToken]:
    if isinstance(geometry, GeometryCollection):
        if not geometry.geometries:
            yield wkt_token.empty()
            return
        yield from _list(geometry.geometries, _document)
        return
    if geometry.is_empty:
        yield wkt_token.empty()
        return

    if isinstance(geometry, (Point, LineString)):
        yield from _sequence(geometry)
    elif isinstance(geometry, Polygon):
        yield from _list(geometry.rings, _sequence)
    elif geometry.geometry_type.is_collection:
        yield from _list(geometry.geometries, _body)
    else:
        raise UnsupportedGeometryTypeError(geometry.geometry_type, 'WKT')


def _sequence(geometry: Geometry) -> Iterator[WktToken]:
    if geometry.is_empty:
        yield wkt_token.empty()
        return
    yield wkt_token.start_list()
    yield wkt_token.point_sequence(geometry.positions)
    yield wkt_token.end_list()


def _list(members, emit) -> Iterator[WktToken]:
    yield wkt_token.start_list()
    for i, member in enumerate(members):
        if i > 0:
            yield wkt_token.element_separator()
        yield from emit(member)
    yield wkt_token.end_list()
