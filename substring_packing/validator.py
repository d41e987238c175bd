from substring_packing.errors import DecodeError, NoMaxStringLen, StringTooLong

MAX_STRING_LEN = 255
MAX_OFFSET = 2**32 - 1

def to_bytes(item):
    if isinstance(item, str):
        return item.encode("utf-8")
    if isinstance(item, (bytes, bytearray, memoryview)):
        data = bytes(item)
        try:
            data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Input is not valid UTF-8: {e}") from e
        return data
    raise TypeError(f"Expected str or bytes, got {type(item).__name__}")

def validate(strings):
    """Encode every item and check the collection against the length ceiling.

    Returns the UTF-8 encoded strings in input order.
    """
    encoded = [to_bytes(s) for s in strings]
    if not encoded:
        raise NoMaxStringLen()
    max_len = max(len(s) for s in encoded)
    if max_len > MAX_STRING_LEN:
        raise StringTooLong(max_len)
    return encoded

def is_char_boundary(data, index):
    if index <= 0 or index >= len(data):
        return True
    return (data[index] & 0xC0) != 0x80

def char_boundaries(data):
    return [i for i in range(1, len(data)) if is_char_boundary(data, i)]
