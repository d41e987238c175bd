from collections import deque

class AhoCorasick:
    def __init__(self, patterns):
        self.patterns = list(patterns)
        self.trie = [{}]
        self.fail = [0]
        self.outputs = [[]]
        self.construct_trie()
        self.build_failure_links()

    def construct_trie(self):
        for index, pattern in enumerate(self.patterns):
            current_node = 0
            for symbol in pattern:
                if symbol in self.trie[current_node]:
                    current_node = self.trie[current_node][symbol]
                else:
                    self.trie.append({})
                    self.fail.append(0)
                    self.outputs.append([])
                    new_node = len(self.trie) - 1
                    self.trie[current_node][symbol] = new_node
                    current_node = new_node
            if pattern:
                self.outputs[current_node].append(index)

    def build_failure_links(self):
        queue = deque(self.trie[0].values())
        while queue:
            node = queue.popleft()
            for symbol, child in self.trie[node].items():
                queue.append(child)
                f = self.fail[node]
                while f and symbol not in self.trie[f]:
                    f = self.fail[f]
                self.fail[child] = self.trie[f].get(symbol, 0)
                # own patterns stay ahead of the shorter ones reached through the failure link
                self.outputs[child] = self.outputs[child] + self.outputs[self.fail[child]]

    def find_overlapping(self, text):
        """Yield ``(pattern_id, start)`` for every occurrence in ``text``.

        Occurrences are ordered by end position, longest pattern first.
        """
        v = 0
        for i, symbol in enumerate(text):
            while v and symbol not in self.trie[v]:
                v = self.fail[v]
            v = self.trie[v].get(symbol, 0)
            for index in self.outputs[v]:
                yield index, i + 1 - len(self.patterns[index])

class ExactContainmentFinder:
    def run(self, strings):
        automaton = AhoCorasick(strings)
        contained_in = [None] * len(strings)
        for text_id, text in enumerate(strings):
            for pattern_id, start in automaton.find_overlapping(text):
                if pattern_id == text_id or contained_in[pattern_id] is not None:
                    continue
                # identical strings only ever point at their lowest id
                if text_id > pattern_id and strings[pattern_id] == text:
                    continue
                contained_in[pattern_id] = (text_id, start)
        return contained_in
