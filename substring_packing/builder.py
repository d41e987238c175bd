from substring_packing import progress
from substring_packing.chaining import OverlapChainer
from substring_packing.collection import SubStr
from substring_packing.containment import ExactContainmentFinder
from substring_packing.errors import StorageOverflow, UnresolvedContainment
from substring_packing.validator import MAX_OFFSET, is_char_boundary, validate

class LooseAppender:
    def run(self, strings, contained_in, buffer, spans):
        loose = []
        for index, string in enumerate(strings):
            if contained_in[index] is None and spans[index] is None:
                spans[index] = (len(buffer), len(string))
                buffer.extend(string)
                loose.append(index)
        return loose

class ContainmentResolver:
    def run(self, strings, contained_in, spans):
        pending = [i for i, link in enumerate(contained_in) if link is not None and spans[i] is None]
        while pending:
            remaining = []
            for index in pending:
                container_id, start = contained_in[index]
                if spans[container_id] is None:
                    remaining.append(index)
                    continue
                spans[index] = (spans[container_id][0] + start, len(strings[index]))
            if len(remaining) == len(pending):
                raise UnresolvedContainment(remaining)
            pending = remaining

class Builder:
    """Turns a list of strings into a packed :class:`SubStr`.

    Construction is a four phase process: exact containment, overlap
    chaining, appending the loose strings and finally resolving the
    contained strings against their containers. Building is slow for large
    collections; call ``debug_messages(True)`` to echo the phases, or
    pass an ``observer`` callable to receive them.
    """

    def __init__(self, strings, observer=None):
        self.vec = validate(strings)
        self.contained_in = [None] * len(self.vec)
        self.spans = [None] * len(self.vec)
        self.index_string = bytearray()
        self.observer = observer or progress.echo
        self.silent = observer is None
        self.built = False
        self.chained = []
        self.loose = []

    @classmethod
    def from_iter(cls, iterable, observer=None):
        return cls(list(iterable), observer=observer)

    def debug_messages(self, on):
        self.silent = not on

    def report(self, message):
        if not self.silent:
            self.observer(message)

    def build_only(self):
        if self.built:
            return
        self.report("1/4 -> Looking for substrings ...")
        self.contained_in = ExactContainmentFinder().run(self.vec)

        self.report("2/4 -> Looking for partial substrings ...")
        self.chained = OverlapChainer(self.report).run(
            self.vec, self.contained_in, self.index_string, self.spans
        )

        self.report("3/4 -> Adding uncontained strings ...")
        self.loose = LooseAppender().run(self.vec, self.contained_in, self.index_string, self.spans)

        self.report("4/4 -> Adding substrings ...")
        ContainmentResolver().run(self.vec, self.contained_in, self.spans)
        self.report("    -> Finished")
        self.built = True

    def build(self):
        self.build_only()
        if len(self.index_string) > MAX_OFFSET:
            raise StorageOverflow(len(self.index_string))
        return SubStr(bytes(self.index_string), self.spans)

    def verify(self):
        self.build_only()
        for i, w in enumerate(self.vec):
            offset, length = self.spans[i]
            if w != bytes(self.index_string[offset:offset + length]):
                self.report(self.debug(i))
                return False
        return True

    def debug(self, index):
        data = self.index_string
        text = self.vec[index].decode("utf-8")
        line = f"{text} [{index}]"
        if self.spans[index] is not None:
            s, l = self.spans[index]
            bss = max(s - 10, 0)
            ess = min(s + l + 10, len(data))
            while not is_char_boundary(data, bss):
                bss -= 1
            while not is_char_boundary(data, ess):
                ess += 1
            before = data[bss:s].decode("utf-8", errors="replace")
            item = data[s:s + l].decode("utf-8", errors="replace")
            after = data[s + l:ess].decode("utf-8", errors="replace")
            line += f" len: {l}  substr: {s} -> ...{before}({item}){after}..."
        if self.contained_in[index] is not None:
            line += "\n    - is contained"
        return line

    def stats(self):
        naive = sum(len(s) for s in self.vec)
        storage = len(self.index_string)
        contained = sum(1 for link in self.contained_in if link is not None)
        return {
            "strings": len(self.vec),
            "naive_len": naive,
            "storage_len": storage,
            "contained": contained,
            "chained": len(self.chained),
            "loose": len(self.loose),
            "heads": len(self.vec) - contained - len(self.chained) - len(self.loose),
            "savings": 1 - storage / naive if naive else 0.0,
        }
