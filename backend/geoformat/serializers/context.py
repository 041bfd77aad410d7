from dataclasses import dataclass
from geoformat.core.settings import Settings
from geoformat.enums.serialization_feature import SerializationFeature
from geoformat.errors import PreconditionError
from typing import Iterable


@dataclass(frozen=True)
class SerializationContext:
    """Read-only set of features consulted during one encode call."""

    features: frozenset[SerializationFeature] = frozenset()

    def __post_init__(self):
        features = frozenset(self.features)
        for feature in features:
            if not isinstance(feature, SerializationFeature):
                raise PreconditionError(f'Unknown serialization feature: {feature!r}')
        object.__setattr__(self, 'features', features)

    def is_feature_set(self, feature: SerializationFeature) -> bool:
        return feature in self.features

    def __contains__(self, feature: SerializationFeature) -> bool:
        return self.is_feature_set(feature)

    def with_features(self, *features: SerializationFeature) -> 'SerializationContext':
        return SerializationContext(self.features | frozenset(features))

    def without_features(self, *features: SerializationFeature) -> 'SerializationContext':
        return SerializationContext(self.features - frozenset(features))

    @classmethod
    def of(cls, features: Iterable[SerializationFeature] = ()) -> 'SerializationContext':
        return cls(frozenset(features))

    @classmethod
    def from_settings(cls) -> 'SerializationContext':
        features = []
        if Settings.SUPPRESS_CRS_SERIALIZATION:
            features.append(SerializationFeature.SUPPRESS_CRS_SERIALIZATION)
        return cls.of(features)
