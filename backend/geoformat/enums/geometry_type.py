from dataclasses import dataclass
from enum import StrEnum


class GeometryType(StrEnum):
    POINT = 'POINT'
    LINESTRING = 'LINESTRING'
    LINEARRING = 'LINEARRING'
    POLYGON = 'POLYGON'
    MULTIPOINT = 'MULTIPOINT'
    MULTILINESTRING = 'MULTILINESTRING'
    MULTIPOLYGON = 'MULTIPOLYGON'
    GEOMETRYCOLLECTION = 'GEOMETRYCOLLECTION'

    @property
    def wkt_tag(self) -> str:
        return GEOMETRY_TYPE_DESCRIPTORS[self].wkt_tag

    @property
    def camel_cased(self) -> str:
        return GEOMETRY_TYPE_DESCRIPTORS[self].camel_cased

    @property
    def is_collection(self) -> bool:
        return GEOMETRY_TYPE_DESCRIPTORS[self].is_collection

    @classmethod
    def from_camel_cased(cls, name: str) -> 'GeometryType':
        for geometry_type, descriptor in GEOMETRY_TYPE_DESCRIPTORS.items():
            if descriptor.camel_cased == name:
                return geometry_type
        raise ValueError(f'Unknown geometry type: {name}')

    @classmethod
    def from_wkt_tag(cls, tag: str) -> 'GeometryType':
        for geometry_type, descriptor in GEOMETRY_TYPE_DESCRIPTORS.items():
            if descriptor.wkt_tag == tag.upper():
                return geometry_type
        raise ValueError(f'Unknown WKT tag: {tag}')


@dataclass(frozen=True)
class GeometryTypeDescriptor:
    wkt_tag: str
    camel_cased: str
    is_collection: bool = False


# Single source for both name presentations
GEOMETRY_TYPE_DESCRIPTORS: dict[GeometryType, GeometryTypeDescriptor] = {
    GeometryType.POINT: GeometryTypeDescriptor('POINT', 'Point'),
    GeometryType.LINESTRING: GeometryTypeDescriptor('LINESTRING', 'LineString'),
    GeometryType.LINEARRING: GeometryTypeDescriptor('LINEARRING', 'LinearRing'),
    GeometryType.POLYGON: GeometryTypeDescriptor('POLYGON', 'Polygon'),
    GeometryType.MULTIPOINT: GeometryTypeDescriptor('MULTIPOINT', 'MultiPoint', is_collection=True),
    GeometryType.MULTILINESTRING: GeometryTypeDescriptor('MULTILINESTRING', 'MultiLineString', is_collection=True),
    GeometryType.MULTIPOLYGON: GeometryTypeDescriptor('MULTIPOLYGON', 'MultiPolygon', is_collection=True),
    GeometryType.GEOMETRYCOLLECTION: GeometryTypeDescriptor('GEOMETRYCOLLECTION', 'GeometryCollection', is_collection=True),
}
