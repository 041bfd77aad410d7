from dataclasses import dataclass, field
from geoformat.core.constants import EPSG_AUTHORITY, LAMBERT_72_SRID, WGS_84_SRID
from geoformat.enums.dimensional_flag import DimensionalFlag
from geoformat.enums.geometry_type import GeometryType
from geoformat.errors import PreconditionError
from typing import ClassVar, Iterable, Iterator, Sequence
import numpy as np
import pyproj


## Coordinate reference systems

@dataclass(frozen=True)
class CoordinateReferenceSystem:
    authority: str
    code: str

    def __post_init__(self):
        if not self.authority or not self.code:
            raise PreconditionError(f'Invalid CRS identifier: {self.authority!r}:{self.code!r}')
        object.__setattr__(self, 'authority', self.authority.upper())
        object.__setattr__(self, 'code', str(self.code))

    def __str__(self) -> str:
        return f'{self.authority}:{self.code}'

    @property
    def srid(self) -> int | None:
        if self.authority == EPSG_AUTHORITY and self.code.isdigit():
            return int(self.code)
        return None

    @classmethod
    def parse(cls, value: str) -> 'CoordinateReferenceSystem':
        authority, sep, code = value.strip().partition(':')
        if not sep:
            raise PreconditionError(f'Expected authority:code, got {value!r}')
        return cls(authority, code)

    @classmethod
    def from_srid(cls, srid: int) -> 'CoordinateReferenceSystem':
        return cls(EPSG_AUTHORITY, str(srid))

    @classmethod
    def from_pyproj(cls, crs: pyproj.CRS) -> 'CoordinateReferenceSystem':
        authority = crs.to_authority()
        if authority is None:
            raise PreconditionError(f'CRS has no authority identifier: {crs.name}')
        return cls(*authority)


WGS_84 = CoordinateReferenceSystem.from_srid(WGS_84_SRID)
LAMBERT_72 = CoordinateReferenceSystem.from_srid(LAMBERT_72_SRID)


## Positions

@dataclass(frozen=True)
class Position:
    x: float
    y: float
    z: float | None = None
    m: float | None = None

    def __post_init__(self):
        for name in ('x', 'y', 'z', 'm'):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, float(value))

    @property
    def dimensional_flag(self) -> DimensionalFlag:
        return DimensionalFlag.from_flags(self.z is not None, self.m is not None)

    @property
    def coordinate_dimension(self) -> int:
        return self.dimensional_flag.coordinate_dimension

    def to_array(self) -> tuple[float, ...]:
        return tuple(v for v in (self.x, self.y, self.z, self.m) if v is not None)

    @classmethod
    def from_array(cls, values: Sequence[float], flag: DimensionalFlag) -> 'Position':
        if len(values) != flag.coordinate_dimension:
            raise PreconditionError(f'{flag.name} needs {flag.coordinate_dimension} ordinates, got {len(values)}')
        x, y, *rest = (float(v) for v in values)
        z = rest.pop(0) if flag.is_3d else None
        m = rest.pop(0) if flag.is_measured else None
        return cls(x, y, z, m)


_FLAG_BY_TUPLE_LENGTH = {
    2: DimensionalFlag.D2D,
    3: DimensionalFlag.D3D,
    4: DimensionalFlag.D3DM,
}


class PositionSequence:
    """Ordered positions sharing one dimension, stored as a read-only (n, dimension) array."""

    __slots__ = ('_coords', '_flag')

    def __init__(self, coords: np.ndarray, flag: DimensionalFlag):
        if not isinstance(flag, DimensionalFlag):
            raise PreconditionError(f'Expected a DimensionalFlag, got {flag!r}')
        array = np.array(coords, dtype=np.float64)
        if array.size == 0:
            array = np.empty((0, flag.coordinate_dimension), dtype=np.float64)
        elif array.ndim != 2 or array.shape[1] != flag.coordinate_dimension:
            raise PreconditionError(f'{flag.name} needs shape (n, {flag.coordinate_dimension}), got {array.shape}')
        array.flags.writeable = False
        self._coords = array
        self._flag = flag

    @classmethod
    def of(cls, positions: Iterable[Position], flag: DimensionalFlag | None = None) -> 'PositionSequence':
        positions = list(positions)
        for position in positions:
            if not isinstance(position, Position):
                raise PreconditionError(f'Expected a Position, got {position!r}')
        if flag is None:
            flag = positions[0].dimensional_flag if positions else DimensionalFlag.D2D
        for position in positions:
            if position.dimensional_flag != flag:
                raise PreconditionError(f'Mixed dimensions in sequence: {position.dimensional_flag.name} != {flag.name}')
        return cls(np.array([p.to_array() for p in positions]), flag)

    @classmethod
    def from_coordinates(cls, coordinates: Iterable[Sequence[float]], flag: DimensionalFlag | None = None) -> 'PositionSequence':
        rows = [tuple(c) for c in coordinates]
        if flag is None:
            if not rows:
                flag = DimensionalFlag.D2D
            elif len(rows[0]) in _FLAG_BY_TUPLE_LENGTH:
                flag = _FLAG_BY_TUPLE_LENGTH[len(rows[0])]
            else:
                raise PreconditionError(f'Cannot infer dimension from {len(rows[0])} ordinates')
        for row in rows:
            if len(row) != flag.coordinate_dimension:
                raise PreconditionError(f'{flag.name} needs {flag.coordinate_dimension} ordinates, got {len(row)}')
        return cls(np.array(rows), flag)

    @classmethod
    def empty(cls, flag: DimensionalFlag = DimensionalFlag.D2D) -> 'PositionSequence':
        return cls(np.empty((0, flag.coordinate_dimension)), flag)

    @property
    def dimensional_flag(self) -> DimensionalFlag:
        return self._flag

    @property
    def coordinate_dimension(self) -> int:
        return self._flag.coordinate_dimension

    @property
    def is_empty(self) -> bool:
        return len(self._coords) == 0

    def to_array(self) -> np.ndarray:
        return self._coords

    def __len__(self) -> int:
        return len(self._coords)

    def __getitem__(self, index: int) -> Position:
        return Position.from_array(self._coords[index].tolist(), self._flag)

    def __iter__(self) -> Iterator[Position]:
        for row in self._coords.tolist():
            yield Position.from_array(row, self._flag)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PositionSequence):
            return NotImplemented
        return self._flag == other._flag and np.array_equal(self._coords, other._coords)

    def __hash__(self) -> int:
        return hash((self._flag, self._coords.tobytes()))

    def __repr__(self) -> str:
        return f'PositionSequence({self._coords.tolist()!r}, {self._flag.name})'


## Geometries

def _concatenate(sequences: Sequence[PositionSequence], flag: DimensionalFlag) -> PositionSequence:
    arrays = [s.to_array() for s in sequences if not s.is_empty]
    if not arrays:
        return PositionSequence.empty(flag)
    return PositionSequence(np.concatenate(arrays), flag)


def _common_flag(members: Sequence['Geometry']) -> DimensionalFlag:
    if not members:
        return DimensionalFlag.D2D
    flag = members[0].dimensional_flag
    for member in members[1:]:
        if member.dimensional_flag != flag:
            raise PreconditionError(f'Mixed dimensions in collection: {member.dimensional_flag.name} != {flag.name}')
    return flag


@dataclass(frozen=True)
class Geometry:
    geometry_type: ClassVar[GeometryType]

    @property
    def positions(self) -> PositionSequence:
        raise NotImplementedError()

    @property
    def dimensional_flag(self) -> DimensionalFlag:
        raise NotImplementedError()

    @property
    def coordinate_dimension(self) -> int:
        return self.dimensional_flag.coordinate_dimension

    @property
    def is_empty(self) -> bool:
        return self.positions.is_empty


@dataclass(frozen=True)
class _SimpleGeometry(Geometry):
    sequence: PositionSequence
    crs: CoordinateReferenceSystem = field(default=WGS_84, kw_only=True)

    def __post_init__(self):
        if not isinstance(self.sequence, PositionSequence):
            raise PreconditionError(f'{type(self).__name__} needs a PositionSequence, got {self.sequence!r}')

    @property
    def positions(self) -> PositionSequence:
        return self.sequence

    @property
    def dimensional_flag(self) -> DimensionalFlag:
        return self.sequence.dimensional_flag


@dataclass(frozen=True)
class Point(_SimpleGeometry):
    geometry_type: ClassVar[GeometryType] = GeometryType.POINT

    def __post_init__(self):
        super().__post_init__()
        if len(self.sequence) > 1:
            raise PreconditionError(f'A point holds at most one position, got {len(self.sequence)}')

    @classmethod
    def of(cls, x: float, y: float, z: float | None = None, m: float | None = None, *,
           crs: CoordinateReferenceSystem = WGS_84) -> 'Point':
        return cls(PositionSequence.of([Position(x, y, z, m)]), crs=crs)

    @classmethod
    def empty(cls, flag: DimensionalFlag = DimensionalFlag.D2D, *, crs: CoordinateReferenceSystem = WGS_84) -> 'Point':
        return cls(PositionSequence.empty(flag), crs=crs)


@dataclass(frozen=True)
class LineString(_SimpleGeometry):
    geometry_type: ClassVar[GeometryType] = GeometryType.LINESTRING

    @classmethod
    def of(cls, coordinates: Iterable[Sequence[float]], flag: DimensionalFlag | None = None, *,
           crs: CoordinateReferenceSystem = WGS_84) -> 'LineString':
        return cls(PositionSequence.from_coordinates(coordinates, flag), crs=crs)


@dataclass(frozen=True)
class LinearRing(LineString):
    geometry_type: ClassVar[GeometryType] = GeometryType.LINEARRING


@dataclass(frozen=True)
class _CompositeGeometry(Geometry):
    member_type: ClassVar[type[Geometry]] = Geometry

    crs: CoordinateReferenceSystem = field(default=WGS_84, kw_only=True)

    @property
    def members(self) -> tuple[Geometry, ...]:
        raise NotImplementedError()

    def _check_members(self, members: Sequence[Geometry]):
        for member in members:
            if not isinstance(member, self.member_type):
                raise PreconditionError(f'{type(self).__name__} cannot hold {member!r}')
        _common_flag(members)

    @property
    def positions(self) -> PositionSequence:
        return _concatenate([m.positions for m in self.members], self.dimensional_flag)

    @property
    def dimensional_flag(self) -> DimensionalFlag:
        return _common_flag(self.members)


@dataclass(frozen=True)
class Polygon(_CompositeGeometry):
    geometry_type: ClassVar[GeometryType] = GeometryType.POLYGON
    member_type: ClassVar[type[Geometry]] = LinearRing

    rings: tuple[LinearRing, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'rings', tuple(self.rings))
        self._check_members(self.rings)

    @property
    def members(self) -> tuple[Geometry, ...]:
        return self.rings

    @property
    def exterior(self) -> LinearRing | None:
        return self.rings[0] if self.rings else None

    @property
    def interiors(self) -> tuple[LinearRing, ...]:
        return self.rings[1:]

    @classmethod
    def of(cls, *rings: Iterable[Sequence[float]], flag: DimensionalFlag | None = None,
           crs: CoordinateReferenceSystem = WGS_84) -> 'Polygon':
        return cls(tuple(LinearRing.of(r, flag, crs=crs) for r in rings), crs=crs)


@dataclass(frozen=True)
class _MultiGeometry(_CompositeGeometry):
    geometries: tuple[Geometry, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'geometries', tuple(self.geometries))
        self._check_members(self.geometries)

    @property
    def members(self) -> tuple[Geometry, ...]:
        return self.geometries

    def __len__(self) -> int:
        return len(self.geometries)

    def __iter__(self) -> Iterator[Geometry]:
        return iter(self.geometries)


@dataclass(frozen=True)
class MultiPoint(_MultiGeometry):
    geometry_type: ClassVar[GeometryType] = GeometryType.MULTIPOINT
    member_type: ClassVar[type[Geometry]] = Point


@dataclass(frozen=True)
class MultiLineString(_MultiGeometry):
    geometry_type: ClassVar[GeometryType] = GeometryType.MULTILINESTRING
    member_type: ClassVar[type[Geometry]] = LineString


@dataclass(frozen=True)
class MultiPolygon(_MultiGeometry):
    geometry_type: ClassVar[GeometryType] = GeometryType.MULTIPOLYGON
    member_type: ClassVar[type[Geometry]] = Polygon


@dataclass(frozen=True)
class GeometryCollection(_MultiGeometry):
    geometry_type: ClassVar[GeometryType] = GeometryType.GEOMETRYCOLLECTION
