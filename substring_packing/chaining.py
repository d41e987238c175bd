from collections import defaultdict

from substring_packing.validator import char_boundaries

class OverlapChainer:
    def __init__(self, report=None):
        self.report = report or (lambda message: None)

    def build_prefix_index(self, strings, contained_in):
        beginnings = defaultdict(list)
        for index, string in enumerate(strings):
            if contained_in[index] is not None:
                continue
            for split_point in char_boundaries(string):
                beginnings[string[:split_point]].append(index)
        return beginnings

    def find_next_string(self, string, position, beginnings, spans):
        for split_point in char_boundaries(string):
            end = string[split_point:]
            for next_index in beginnings.get(end, ()):
                if spans[next_index] is None:
                    return next_index, position - len(end), len(end)
        return None

    def run(self, strings, contained_in, buffer, spans):
        """Place every uncontained string, fusing suffix/prefix overlaps.

        Appends to ``buffer`` and fills ``spans`` in place; returns the ids
        that were placed as a chain successor.
        """
        self.report("    -> make hashmap ...")
        beginnings = self.build_prefix_index(strings, contained_in)
        self.report("    -> adding partial substrings ...")
        chained = []
        for index, string in enumerate(strings):
            if contained_in[index] is not None or spans[index] is not None:
                continue
            position = len(buffer)
            spans[index] = (position, len(string))
            buffer.extend(string)
            position += len(string)
            while True:
                found = self.find_next_string(strings[index], position, beginnings, spans)
                if found is None:
                    break
                index, start, overlap = found
                spans[index] = (start, len(strings[index]))
                buffer.extend(strings[index][overlap:])
                chained.append(index)
                position = start + len(strings[index])
        return chained
