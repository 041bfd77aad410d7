"""Push-style JSON outputs for the geometry encoder.

The encoder only talks to the ``JsonSink`` protocol, so any object offering these seven
calls can receive a geometry: a text writer, a tree builder or a recording fake in tests.
"""

from dataclasses import dataclass, field
from geoformat.errors import SinkStateError
from typing import Any, Iterable, Protocol, TextIO
import json


class JsonSink(Protocol):

    def write_object_start(self) -> None: ...

    def write_object_end(self) -> None: ...

    def write_field_name(self, name: str) -> None: ...

    def write_string_field(self, name: str, value: str) -> None: ...

    def write_array_start(self) -> None: ...

    def write_array_end(self) -> None: ...

    def write_number_array(self, values: Iterable[float]) -> None: ...


@dataclass
class _Frame:
    is_object: bool
    count: int = 0
    pending_field: str | None = None


class TextJsonSink:
    """Writes compact JSON text into ``stream`` as calls arrive."""

    def __init__(self, stream: TextIO):
        self.stream = stream
        self._stack: list[_Frame] = []
        self._root_written = False

    def _before_value(self):
        if not self._stack:
            if self._root_written:
                raise SinkStateError('A JSON document holds a single root value')
            self._root_written = True
            return
        frame = self._stack[-1]
        if frame.is_object:
            if frame.pending_field is None:
                raise SinkStateError('Object values need a field name first')
            frame.pending_field = None
            return
        if frame.count:
            self.stream.write(',')
        frame.count += 1

    def _close(self, is_object: bool):
        if not self._stack or self._stack[-1].is_object != is_object:
            raise SinkStateError(f'Unbalanced {"object" if is_object else "array"} end')
        if self._stack[-1].pending_field is not None:
            raise SinkStateError(f'Field {self._stack[-1].pending_field!r} has no value')
        self._stack.pop()
        self.stream.write('}' if is_object else ']')

    def write_object_start(self) -> None:
        self._before_value()
        self.stream.write('{')
        self._stack.append(_Frame(is_object=True))

    def write_object_end(self) -> None:
        self._close(is_object=True)

    def write_field_name(self, name: str) -> None:
        if not self._stack or not self._stack[-1].is_object:
            raise SinkStateError('Field names are only valid inside an object')
        frame = self._stack[-1]
        if frame.pending_field is not None:
            raise SinkStateError(f'Field {frame.pending_field!r} has no value')
        if frame.count:
            self.stream.write(',')
        frame.count += 1
        frame.pending_field = name
        self.stream.write(json.dumps(name))
        self.stream.write(':')

    def write_string_field(self, name: str, value: str) -> None:
        self.write_field_name(name)
        self._before_value()
        self.stream.write(json.dumps(value))

    def write_array_start(self) -> None:
        self._before_value()
        self.stream.write('[')
        self._stack.append(_Frame(is_object=False))

    def write_array_end(self) -> None:
        self._close(is_object=False)

    def write_number_array(self, values: Iterable[float]) -> None:
        self._before_value()
        self.stream.write('[' + ','.join(json.dumps(float(v)) for v in values) + ']')


@dataclass
class TreeJsonSink:
    """Builds the equivalent dict/list tree; ``result`` holds the closed root value."""

    result: Any = None
    _stack: list[Any] = field(default_factory=list)
    _fields: list[str | None] = field(default_factory=list)

    def _add(self, value: Any):
        if not self._stack:
            if self.result is not None:
                raise SinkStateError('A JSON document holds a single root value')
            self.result = value
            return
        container = self._stack[-1]
        if isinstance(container, dict):
            name = self._fields[-1]
            if name is None:
                raise SinkStateError('Object values need a field name first')
            container[name] = value
            self._fields[-1] = None
        else:
            container.append(value)

    def _open(self, container):
        self._add(container)
        self._stack.append(container)
        self._fields.append(None)

    def _close(self, kind: type):
        if not self._stack or not isinstance(self._stack[-1], kind):
            raise SinkStateError(f'Unbalanced {kind.__name__} end')
        if self._fields[-1] is not None:
            raise SinkStateError(f'Field {self._fields[-1]!r} has no value')
        self._stack.pop()
        self._fields.pop()

    def write_object_start(self) -> None:
        self._open({})

    def write_object_end(self) -> None:
        self._close(dict)

    def write_field_name(self, name: str) -> None:
        if not self._stack or not isinstance(self._stack[-1], dict):
            raise SinkStateError('Field names are only valid inside an object')
        if self._fields[-1] is not None:
            raise SinkStateError(f'Field {self._fields[-1]!r} has no value')
        self._fields[-1] = name

    def write_string_field(self, name: str, value: str) -> None:
        self.write_field_name(name)
        self._add(value)

    def write_array_start(self) -> None:
        self._open([])

    def write_array_end(self) -> None:
        self._close(list)

    def write_number_array(self, values: Iterable[float]) -> None:
        self._add([float(v) for v in values])
