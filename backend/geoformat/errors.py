class GeoFormatError(Exception):
    pass


class PreconditionError(GeoFormatError, ValueError):
    """Raised when an entry point receives a missing or invalid argument."""


class UnsupportedGeometryTypeError(GeoFormatError, NotImplementedError):
    """Raised when a geometry variant has no encoding rule for the requested format."""

    def __init__(self, geometry_type, target: str):
        self.geometry_type = geometry_type
        self.target = target
        super().__init__(f'{geometry_type} cannot be encoded as {target}')


class SinkStateError(GeoFormatError, RuntimeError):
    """Raised when sink calls do not follow the JSON object/array nesting."""
