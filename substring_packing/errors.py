class SubStrError(Exception):
    pass

class StringTooLong(SubStrError):
    def __init__(self, observed_max):
        self.observed_max = observed_max
        super().__init__(f"String of {observed_max} bytes exceeds the 255 byte limit")

class NoMaxStringLen(SubStrError):
    def __init__(self):
        super().__init__("Cannot compute a maximum string length of an empty collection")

class UnresolvedContainment(SubStrError):
    def __init__(self, ids):
        self.ids = list(ids)
        preview = ", ".join(str(i) for i in self.ids[:10])
        if len(self.ids) > 10:
            preview += ", ..."
        super().__init__(f"Containment links never resolved for {len(self.ids)} string(s): {preview}")

class StorageOverflow(SubStrError):
    def __init__(self, length):
        self.length = length
        super().__init__(f"Storage string of {length} bytes does not fit 32 bit offsets")

class IoError(SubStrError):
    pass

class DecodeError(SubStrError):
    pass

class ConversionError(SubStrError):
    pass

class EncodingError(SubStrError):
    pass
