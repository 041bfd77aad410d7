from typing import Annotated, Any, Literal, Union
from pydantic import BaseModel, Field, TypeAdapter

COORDINATES_TYPE = tuple[float, float] | tuple[float, float, float] | tuple[float, float, float, float]

# ----- CRS -----
class CrsProperties(BaseModel):
    name: str

class NamedCrs(BaseModel):
    type: Literal["name"]
    properties: CrsProperties

# ----- Geometry Types -----
class _GeometryBase(BaseModel):
    crs: NamedCrs | None = None

class Point(_GeometryBase):
    type: Literal["Point"]
    # Empty points serialize as []
    coordinates: COORDINATES_TYPE | tuple[()]

class MultiPoint(_GeometryBase):
    type: Literal["MultiPoint"]
    coordinates: list[COORDINATES_TYPE | tuple[()]]

class LineString(_GeometryBase):
    type: Literal["LineString"]
    coordinates: list[COORDINATES_TYPE]

class MultiLineString(_GeometryBase):
    type: Literal["MultiLineString"]
    coordinates: list[list[COORDINATES_TYPE]]

class Polygon(_GeometryBase):
    type: Literal["Polygon"]
    # Each linear ring: at least 4 positions, first == last per RFC 7946 (not enforced here)
    coordinates: list[list[COORDINATES_TYPE]]

class MultiPolygon(_GeometryBase):
    type: Literal["MultiPolygon"]
    coordinates: list[list[list[COORDINATES_TYPE]]]

class GeometryCollection(_GeometryBase):
    type: Literal["GeometryCollection"]
    # Members are complete geometry objects
    coordinates: list["Geometry"]

Geometry = Annotated[
    Union[Point, MultiPoint, LineString, MultiLineString, Polygon, MultiPolygon, GeometryCollection],
    Field(discriminator="type"),
]

GeometryCollection.model_rebuild()

GeometryAdapter: TypeAdapter[Any] = TypeAdapter(Geometry)

