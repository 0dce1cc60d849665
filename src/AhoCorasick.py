from typing import (
    Deque,
    Hashable,
    Iterable,
    Iterator,
    List,
    Dict,
    NamedTuple,
    Optional,
    Sequence,
    Set,
    Tuple,
)
from collections import deque
import logging


class Match(NamedTuple):
    start: int
    keyword: Sequence[Hashable]


class AhoCorasick:
    """
    Multi-keyword matcher: a trie with failure links and merged output sets.

    States are integers indexing parallel tables. State 0 is the root.
    Failure links and merged outputs are derived data: they are computed by
    build() (or lazily by the first match request) and dropped by every
    insertion.
    """

    def __init__(self, keywords: Iterable[Sequence[Hashable]] = ()):
        self.keywords: List[Sequence[Hashable]] = []
        self.goto: List[Dict[Hashable, int]] = [{}]  # state -> symbol -> state
        self.depth: List[int] = [0]
        # keyword indices ending exactly at each state
        self.terminals: List[List[int]] = [[]]
        # derived; None while stale. failure[0] is unused (root has no link)
        self.failure: Optional[List[int]] = None
        self.output: Optional[List[List[int]]] = None
        # bumped on every insertion so live cursors can notice
        self.generation = 0
        for kw in keywords:
            self.add_keyword(kw)

    @property
    def num_states(self) -> int:
        return len(self.goto)

    @property
    def is_built(self) -> bool:
        return self.failure is not None

    # Checks a keyword before anything is modified. Raises ValueError for an
    # empty keyword and TypeError for an unhashable symbol.
    @staticmethod
    def _freeze(pattern: Sequence[Hashable]) -> Sequence[Hashable]:
        if isinstance(pattern, (str, bytes)):
            kw = pattern
        else:
            kw = tuple(pattern)
            for char in kw:
                hash(char)
        if len(kw) == 0:
            raise ValueError("Keyword cannot be empty")
        return kw

    def add_keyword(self, pattern: Sequence[Hashable]) -> int:
        return self._insert(self._freeze(pattern))

    def add_keywords(self, patterns: Iterable[Sequence[Hashable]]) -> List[int]:
        """All keywords are checked first; a bad one leaves the automaton unchanged."""
        kws = [self._freeze(p) for p in patterns]
        return [self._insert(kw) for kw in kws]

    def _insert(self, kw: Sequence[Hashable]) -> int:
        # Mark stale before touching the trie tables
        self.invalidate()
        cur_node = 0
        for char in kw:
            next_node = self.goto[cur_node].get(char)
            if next_node is None:
                next_node = len(self.goto)
                self.goto[cur_node][char] = next_node
                self.goto.append({})
                self.depth.append(self.depth[cur_node] + 1)
                self.terminals.append([])
            cur_node = next_node

        kw_idx = len(self.keywords)
        self.keywords.append(kw)
        self.terminals[cur_node].append(kw_idx)
        return kw_idx

    def invalidate(self):
        if self.failure is not None:
            logging.debug("Dropping failure links: keyword set changed")
        self.failure = None
        self.output = None
        self.generation += 1

    def build(self):
        if self.failure is not None:
            return

        goto = self.goto
        failure = [0] * len(goto)
        output: List[List[int]] = [list(self.terminals[0])]
        output.extend([] for _ in range(len(goto) - 1))

        # Depth-1 states fail to the root
        queue: Deque[int] = deque()
        for child in goto[0].values():
            failure[child] = 0
            output[child] = list(self.terminals[child])
            queue.append(child)

        while queue:
            node = queue.popleft()
            for char, next_node in goto[node].items():
                fail = failure[node]
                while fail > 0 and char not in goto[fail]:
                    fail = failure[fail]
                fail = goto[fail].get(char, 0)
                assert fail != next_node, f"state {next_node} fails to itself"
                assert self.depth[fail] < self.depth[next_node]
                failure[next_node] = fail
                # fail is shallower, so its output is already final. The two
                # parts are disjoint: their keywords have different lengths.
                output[next_node] = self.terminals[next_node] + output[fail]
                queue.append(next_node)

        self.failure = failure
        self.output = output
        logging.debug(
            f"Built automaton: {len(goto)} states, {len(self.keywords)} keywords"
        )

    def _step(self, cur_node: int, char: Hashable) -> int:
        goto = self.goto
        failure = self.failure
        assert failure is not None
        while cur_node and char not in goto[cur_node]:
            cur_node = failure[cur_node]
        return goto[cur_node].get(char, 0)

    def match(self, text: Iterable[Hashable]) -> List[Match]:
        self.build()
        res: List[Match] = []
        # Cache attribute lookups in local variables
        goto = self.goto
        failure = self.failure
        output = self.output
        keywords = self.keywords
        assert failure is not None and output is not None
        cur_node = 0

        for idx, char in enumerate(text):
            while cur_node and char not in goto[cur_node]:
                cur_node = failure[cur_node]
            cur_node = goto[cur_node].get(char, 0)
            outs = output[cur_node]
            if outs:
                res.extend(
                    Match(idx - len(keywords[ki]) + 1, keywords[ki]) for ki in outs
                )
        return res

    def match_iter(self, text: Iterable[Hashable]) -> "MatchCursor":
        self.build()
        return MatchCursor(self, text)

    # Only the set of keywords that occur, no positions
    def search(self, text: Iterable[Hashable]) -> Set[int]:
        self.build()
        output = self.output
        assert output is not None
        results: Set[int] = set()
        cur_node = 0
        for char in text:
            cur_node = self._step(cur_node, char)
            results.update(output[cur_node])
        return results

    def search_with_positions(
        self, text: Iterable[Hashable]
    ) -> List[Tuple[int, int, int]]:
        """
        Returns (keyword index, start, end) triples, end exclusive, sorted by
        end and then by descending length.
        """
        self.build()
        output = self.output
        keywords = self.keywords
        assert output is not None
        res = []
        cur_node = 0
        for idx, char in enumerate(text):
            cur_node = self._step(cur_node, char)
            res.extend(
                (ki, idx - len(keywords[ki]) + 1, idx + 1) for ki in output[cur_node]
            )
        return res

    def goto_edges(self, state: int) -> Dict[Hashable, int]:
        return dict(self.goto[state])

    def terminals_of(self, state: int) -> List[int]:
        return list(self.terminals[state])

    def failure_of(self, state: int) -> Optional[int]:
        self.build()
        assert self.failure is not None
        if state == 0:
            return None
        return self.failure[state]

    def output_of(self, state: int) -> List[int]:
        self.build()
        assert self.output is not None
        return list(self.output[state])


class MatchCursor:
    """
    Pull-based scan over a text. Each next() either hands out one more
    pending output of the current state or consumes one symbol. Stops
    scanning as soon as the caller stops pulling.
    """

    def __init__(self, automaton: AhoCorasick, text: Iterable[Hashable]):
        automaton.build()
        self.automaton = automaton
        self.state = 0
        self.position = -1  # index of the last consumed symbol
        self._text: Iterator[Hashable] = iter(text)
        self._pending: Iterator[int] = iter(())
        self._generation = automaton.generation
        self._done = False

    def __iter__(self) -> "MatchCursor":
        return self

    def __next__(self) -> Match:
        ac = self.automaton
        if self._generation != ac.generation:
            raise RuntimeError("Keyword set changed during iteration")
        keywords = ac.keywords
        while True:
            kw_idx = next(self._pending, None)
            if kw_idx is not None:
                kw = keywords[kw_idx]
                return Match(self.position - len(kw) + 1, kw)
            if self._done:
                raise StopIteration
            char = next(self._text, _END)
            if char is _END:
                self._done = True
                raise StopIteration
            self.position += 1
            self.state = ac._step(self.state, char)
            assert ac.output is not None
            self._pending = iter(ac.output[self.state])


_END = object()
