from geoformat.core.models import CoordinateReferenceSystem, Geometry, GeometryCollection, LinearRing, LineString, \
    MultiLineString, MultiPoint, MultiPolygon, Point, Polygon, PositionSequence, WGS_84
from geoformat.enums.dimensional_flag import DimensionalFlag
from geoformat.errors import PreconditionError, UnsupportedGeometryTypeError
import numpy as np
import shapely
from shapely import geometry as sg


def _sequence(coords, flag: DimensionalFlag) -> PositionSequence:
    array = np.asarray(coords, dtype=np.float64)
    if array.size == 0:
        return PositionSequence.empty(flag)
    return PositionSequence(array[:, :flag.coordinate_dimension], flag)


_SIMPLE_TYPES = {
    'Point': Point,
    'LineString': LineString,
    'LinearRing': LinearRing,
}

_MULTI_TYPES = {
    'MultiPoint': MultiPoint,
    'MultiLineString': MultiLineString,
    'MultiPolygon': MultiPolygon,
    'GeometryCollection': GeometryCollection,
}


def from_shape(shape: shapely.Geometry, crs: CoordinateReferenceSystem = WGS_84) -> Geometry:
    if not isinstance(shape, shapely.Geometry):
        raise PreconditionError(f'Expected a shapely geometry, got {shape!r}')
    flag = DimensionalFlag.D3D if shape.has_z else DimensionalFlag.D2D

    geom_type = shape.geom_type
    if geom_type in _SIMPLE_TYPES:
        return _SIMPLE_TYPES[geom_type](_sequence(shape.coords, flag), crs=crs)
    if geom_type == 'Polygon':
        if shape.is_empty:
            return Polygon((), crs=crs)
        rings = [shape.exterior, *shape.interiors]
        return Polygon(tuple(LinearRing(_sequence(r.coords, flag), crs=crs) for r in rings), crs=crs)
    if geom_type in _MULTI_TYPES:
        return _MULTI_TYPES[geom_type](tuple(from_shape(g, crs) for g in shape.geoms), crs=crs)
    raise UnsupportedGeometryTypeError(shape.geom_type, 'geoformat geometry')


def _xyz(positions: PositionSequence) -> list[tuple[float, ...]]:
    # shapely has no measure ordinate here, M is dropped
    width = 3 if positions.dimensional_flag.is_3d else 2
    return [tuple(row[:width]) for row in positions.to_array().tolist()]


def to_shape(geometry: Geometry) -> shapely.Geometry:
    if not isinstance(geometry, Geometry):
        raise PreconditionError(f'Expected a Geometry, got {geometry!r}')

    if isinstance(geometry, Point):
        return sg.Point(*_xyz(geometry.positions)) if not geometry.is_empty else sg.Point()
    if isinstance(geometry, LinearRing):
        return sg.LinearRing(_xyz(geometry.positions))
    if isinstance(geometry, LineString):
        return sg.LineString(_xyz(geometry.positions))
    if isinstance(geometry, Polygon):
        if not geometry.rings:
            return sg.Polygon()
        return sg.Polygon(_xyz(geometry.rings[0].positions), [_xyz(r.positions) for r in geometry.interiors])
    if isinstance(geometry, MultiPoint):
        return sg.MultiPoint([to_shape(g) for g in geometry])
    if isinstance(geometry, MultiLineString):
        return sg.MultiLineString([to_shape(g) for g in geometry])
    if isinstance(geometry, MultiPolygon):
        return sg.MultiPolygon([to_shape(g) for g in geometry])
    if isinstance(geometry, GeometryCollection):
        return sg.GeometryCollection([to_shape(g) for g in geometry])
    raise UnsupportedGeometryTypeError(geometry.geometry_type, 'shapely geometry')
