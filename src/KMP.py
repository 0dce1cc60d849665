from typing import Hashable, Iterable, Iterator, List, Sequence


# pfx[n - 1] is the length of the longest proper prefix of pattern[:n] that
# is also a suffix of it. For "aaba": [0, 1, 0, 1]
def make_prefix_table(pattern: Sequence[Hashable]) -> List[int]:
    pfx = [0] * len(pattern)
    matched = 0
    for i in range(1, len(pattern)):
        char = pattern[i]
        while matched > 0 and pattern[matched] != char:
            matched = pfx[matched - 1]
        if pattern[matched] == char:
            matched += 1
        pfx[i] = matched
    return pfx


class KMP:
    """Single-pattern matcher. Immutable once constructed."""

    def __init__(self, pattern: Sequence[Hashable]):
        if not isinstance(pattern, (str, bytes)):
            # Own a copy so later changes to the caller's list can't desync pfx
            pattern = tuple(pattern)
        if len(pattern) == 0:
            raise ValueError("Pattern cannot be empty")
        self.pattern: Sequence[Hashable] = pattern
        self.pfx: List[int] = make_prefix_table(pattern)

    def match(self, text: Iterable[Hashable]) -> List[int]:
        res = []
        pat = self.pattern
        pfx = self.pfx
        pat_len = len(pat)
        matched = 0  # number of pattern symbols currently matched

        for idx, char in enumerate(text):
            while matched > 0 and pat[matched] != char:
                matched = pfx[matched - 1]
            if pat[matched] == char:
                matched += 1
            if matched == pat_len:
                res.append(idx - pat_len + 1)
                # Keep the longest border so overlapping matches are found
                matched = pfx[pat_len - 1]
        return res

    def match_iter(self, text: Iterable[Hashable]) -> "KMPCursor":
        return KMPCursor(self, text)


class KMPCursor:
    def __init__(self, kmp: KMP, text: Iterable[Hashable]):
        self.kmp = kmp
        self.matched = 0
        self.position = -1
        self._text: Iterator[Hashable] = iter(text)

    def __iter__(self) -> "KMPCursor":
        return self

    def __next__(self) -> int:
        pat = self.kmp.pattern
        pfx = self.kmp.pfx
        pat_len = len(pat)
        for char in self._text:
            self.position += 1
            while self.matched > 0 and pat[self.matched] != char:
                self.matched = pfx[self.matched - 1]
            if pat[self.matched] == char:
                self.matched += 1
            if self.matched == pat_len:
                self.matched = pfx[pat_len - 1]
                return self.position - pat_len + 1
        raise StopIteration
