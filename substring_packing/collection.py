import numpy as np

from substring_packing.validator import is_char_boundary, to_bytes

SPAN_DTYPE = np.dtype([("offset", np.uint32), ("length", np.uint8)])

class SubStr:
    """A compact, immutable collection of strings.

    All strings live in one storage buffer; ``spans`` holds the offset and
    length of every string by id. Instances come from ``Builder.build()``.
    """

    def __init__(self, string=b"", spans=()):
        self.string = bytes(string)
        self.spans = np.array([tuple(span) for span in spans], dtype=SPAN_DTYPE)
        self.spans.setflags(write=False)

    def __len__(self):
        return len(self.spans)

    def __iter__(self):
        return self.iter()

    def __getitem__(self, index):
        value = self.get(index)
        if value is None:
            raise IndexError(f"SubStr index {index} out of range")
        return value

    def __eq__(self, other):
        if not isinstance(other, SubStr):
            return NotImplemented
        return self.string == other.string and np.array_equal(self.spans, other.spans)

    def __repr__(self):
        return f"SubStr(len={len(self)}, storage_len={self.storage_len()})"

    def count(self):
        return len(self)

    def storage_len(self):
        return len(self.string)

    def is_empty(self):
        return len(self.spans) == 0

    def span(self, index):
        if not 0 <= index < len(self):
            return None
        offset, length = self.spans[index]
        return int(offset), int(length)

    def get_bytes(self, index):
        span = self.span(index)
        if span is None:
            return None
        offset, length = span
        return self.string[offset:offset + length]

    def get(self, index):
        data = self.get_bytes(index)
        return None if data is None else data.decode("utf-8")

    def iter(self):
        for index in range(len(self)):
            yield self.get(index)

    def before(self, index, max_len):
        span = self.span(index)
        if span is None:
            return None
        position = span[0]
        start = max(position - max_len, 0)
        while not is_char_boundary(self.string, start):
            start += 1
        return self.string[start:position].decode("utf-8")

    def after(self, index, max_len):
        span = self.span(index)
        if span is None:
            return None
        position = span[0] + span[1]
        end = min(position + max_len, len(self.string))
        while not is_char_boundary(self.string, end):
            end -= 1
        return self.string[position:end].decode("utf-8")

    def verify(self, strings):
        strings = list(strings)
        if len(strings) != len(self):
            return False
        return all(self.get_bytes(i) == to_bytes(s) for i, s in enumerate(strings))
