"""Optional JSON encoding of packed collections and builder state.

Documents are self-describing (``format`` and ``version`` keys) so a file
can be told apart without knowing what wrote it. Builder documents allow a
finished build to be inspected again; they never resume a build.
"""
from pathlib import Path

import orjson

from substring_packing.builder import Builder
from substring_packing.collection import SubStr
from substring_packing.errors import ConversionError, DecodeError, EncodingError, IoError
from substring_packing.validator import MAX_OFFSET, MAX_STRING_LEN, is_char_boundary

SUBSTR_FORMAT = "substr"
BUILDER_FORMAT = "substr-builder"
VERSION = 1

def _span_pair(value, string):
    buffer_len = len(string)
    try:
        offset, length = (int(v) for v in value)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Malformed span: {value!r}") from e
    if not 0 <= offset <= MAX_OFFSET:
        raise ConversionError(f"Span offset {offset} does not fit 32 bits")
    if not 0 <= length <= MAX_STRING_LEN:
        raise ConversionError(f"Span length {length} does not fit 8 bits")
    if offset + length > buffer_len:
        raise ConversionError(f"Span ({offset}, {length}) lies outside the {buffer_len} byte storage string")
    if not (is_char_boundary(string, offset) and is_char_boundary(string, offset + length)):
        raise DecodeError(f"Span ({offset}, {length}) splits a UTF-8 character")
    return offset, length

def _optional_span(value, string):
    return None if value is None else _span_pair(value, string)

def _link(value, count):
    if value is None:
        return None
    try:
        container_id, start = (int(v) for v in value)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Malformed containment link: {value!r}") from e
    if not 0 <= container_id < count:
        raise ConversionError(f"Container id {container_id} is out of range")
    if not 0 <= start <= MAX_STRING_LEN:
        raise ConversionError(f"Containment offset {start} does not fit 8 bits")
    return container_id, start

def _ids(document, key, count):
    values = document.get(key, [])
    if not isinstance(values, list) or not all(type(i) is int and 0 <= i < count for i in values):
        raise EncodingError(f"Field '{key}' must list string ids")
    return values

def _text(data):
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Storage string is not valid UTF-8: {e}") from e

def _parse(data, expected_format):
    try:
        document = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise EncodingError(f"Invalid JSON document: {e}") from e
    if not isinstance(document, dict) or document.get("format") != expected_format:
        raise EncodingError(f"Not a {expected_format} document")
    if document.get("version") != VERSION:
        raise EncodingError(f"Unsupported {expected_format} version: {document.get('version')!r}")
    return document

def _field(document, key, kind):
    value = document.get(key)
    if not isinstance(value, kind):
        raise EncodingError(f"Field '{key}' is missing or has the wrong type")
    return value

def _storage(document):
    try:
        return _field(document, "string", str).encode("utf-8")
    except UnicodeEncodeError as e:
        raise DecodeError(f"Storage string is not valid UTF-8: {e}") from e

def dumps_substr(substr):
    return orjson.dumps({
        "format": SUBSTR_FORMAT,
        "version": VERSION,
        "spans": [[int(o), int(l)] for o, l in substr.spans.tolist()],
        "string": _text(substr.string),
    })

def loads_substr(data):
    document = _parse(data, SUBSTR_FORMAT)
    string = _storage(document)
    spans = [_span_pair(span, string) for span in _field(document, "spans", list)]
    return SubStr(string, spans)

def dumps_builder(builder):
    return orjson.dumps({
        "format": BUILDER_FORMAT,
        "version": VERSION,
        "vec": [s.decode("utf-8") for s in builder.vec],
        "contained_in": [None if link is None else list(link) for link in builder.contained_in],
        "index_string": _text(builder.index_string),
        "spans": [None if span is None else list(span) for span in builder.spans],
        "chained": builder.chained,
        "loose": builder.loose,
        "silent": builder.silent,
        "build": builder.built,
    })

def loads_builder(data, observer=None):
    document = _parse(data, BUILDER_FORMAT)
    vec = _field(document, "vec", list)
    if not all(isinstance(s, str) for s in vec):
        raise EncodingError("Field 'vec' must only hold strings")
    builder = Builder(vec, observer=observer)
    count = len(builder.vec)
    index_string = _field(document, "index_string", str).encode("utf-8")
    contained_in = _field(document, "contained_in", list)
    spans = _field(document, "spans", list)
    if len(contained_in) != count or len(spans) != count:
        raise EncodingError("Builder tables do not match the number of strings")
    builder.contained_in = [_link(link, count) for link in contained_in]
    builder.spans = [_optional_span(span, index_string) for span in spans]
    builder.built = bool(document.get("build", False))
    if builder.built and None in builder.spans:
        raise EncodingError("Built builder document has unresolved spans")
    if not builder.built and (index_string or any(span is not None for span in builder.spans)):
        raise EncodingError("Unbuilt builder document already holds storage")
    builder.index_string = bytearray(index_string)
    builder.chained = _ids(document, "chained", count)
    builder.loose = _ids(document, "loose", count)
    builder.silent = bool(document.get("silent", True))
    return builder

def save(path, obj):
    data = dumps_builder(obj) if isinstance(obj, Builder) else dumps_substr(obj)
    try:
        Path(path).write_bytes(data)
    except OSError as e:
        raise IoError(f"Cannot write '{path}': {e}") from e

def _read(path):
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise IoError(f"Cannot read '{path}': {e}") from e

def load_substr(path):
    return loads_substr(_read(path))

def load_builder(path, observer=None):
    return loads_builder(_read(path), observer=observer)
