import enum


class SerializationFeature(enum.Enum):
    SUPPRESS_CRS_SERIALIZATION = enum.auto()
