from geoformat.enums.dimensional_flag import DimensionalFlag
from geoformat.enums.geometry_type import GeometryType
from geoformat.enums.serialization_feature import SerializationFeature
