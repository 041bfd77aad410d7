from geoformat.serializers.context import SerializationContext
from geoformat.serializers.geometry import GeometrySerializer, dumps, serialize, to_dict, to_model
from geoformat.serializers.sinks import JsonSink, TextJsonSink, TreeJsonSink
