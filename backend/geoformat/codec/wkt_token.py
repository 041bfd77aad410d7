"""Lexical units of a WKT document.

Tokens only carry data. Turning them into text (spacing, precision, how a point
sequence is flattened, which "Z"/"M"/"ZM" suffix a dimension marker becomes) is left
to the renderer consuming the stream.
"""

from dataclasses import dataclass
from geoformat.core.models import PositionSequence
from geoformat.enums.dimensional_flag import DimensionalFlag
from geoformat.enums.geometry_type import GeometryType
from geoformat.errors import PreconditionError


@dataclass(frozen=True)
class WktToken:
    pass


@dataclass(frozen=True)
class GeometryTag(WktToken):
    type: GeometryType
    measured: bool

    def is_measured(self) -> bool:
        return self.measured


@dataclass(frozen=True)
class StartList(WktToken):
    pass


@dataclass(frozen=True)
class EndList(WktToken):
    pass


@dataclass(frozen=True)
class Empty(WktToken):
    pass


@dataclass(frozen=True)
class ElementSeparator(WktToken):
    pass


@dataclass(frozen=True)
class End(WktToken):
    pass


@dataclass(frozen=True)
class PointSequenceToken(WktToken):
    positions: PositionSequence


@dataclass(frozen=True)
class DimensionMarker(WktToken):
    flag: DimensionalFlag

    def is_measured(self) -> bool:
        return self.flag.is_measured

    def is_3d(self) -> bool:
        return self.flag.is_3d


@dataclass(frozen=True)
class TextToken(WktToken):
    text: str


@dataclass(frozen=True)
class NumberToken(WktToken):
    value: float


_START_LIST = StartList()
_END_LIST = EndList()
_EMPTY = Empty()
_ELEMENT_SEPARATOR = ElementSeparator()
_END = End()


def geometry_tag(type: GeometryType, measured: bool) -> GeometryTag:
    """Token naming the geometry type; Z presence travels in a separate dimension marker."""
    if not isinstance(type, GeometryType):
        raise PreconditionError(f'Expected a GeometryType, got {type!r}')
    return GeometryTag(type, bool(measured))


def start_list() -> StartList:
    return _START_LIST


def end_list() -> EndList:
    return _END_LIST


def empty() -> Empty:
    """Token marking a geometry body without positions."""
    return _EMPTY


def element_separator() -> ElementSeparator:
    return _ELEMENT_SEPARATOR


def end() -> End:
    """Token closing a complete WKT document."""
    return _END


def point_sequence(positions: PositionSequence) -> PointSequenceToken:
    if not isinstance(positions, PositionSequence):
        raise PreconditionError(f'Expected a PositionSequence, got {positions!r}')
    return PointSequenceToken(positions)


def dimension_marker(flag: DimensionalFlag) -> DimensionMarker:
    if not isinstance(flag, DimensionalFlag):
        raise PreconditionError(f'Expected a DimensionalFlag, got {flag!r}')
    return DimensionMarker(flag)


def text(value: str) -> TextToken:
    if not isinstance(value, str):
        raise PreconditionError(f'Expected a str, got {value!r}')
    return TextToken(value)


def number(value: float) -> NumberToken:
    if value is None or isinstance(value, (bool, str)):
        raise PreconditionError(f'Expected a number, got {value!r}')
    try:
        return NumberToken(float(value))
    except (TypeError, ValueError) as e:
        raise PreconditionError(f'Expected a number, got {value!r}') from e
