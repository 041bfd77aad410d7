from geoformat.schemas.responses.geojson import (
    Geometry,
    GeometryAdapter,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    NamedCrs,
    Point,
    Polygon,
)
