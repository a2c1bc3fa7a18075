"""Candidate orderings that drive the discord search loops."""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from .logging_utils import log_event
from .sax import symbolize_series
from .squeezer import squeeze
from .trie import SymbolTrie

logger = logging.getLogger(__name__)


def _exclusion_mask(count: int, position: int, window_len: int) -> np.ndarray:
    """True for start positions whose window does not overlap ``position``'s."""

    return np.abs(np.arange(count) - position) >= window_len


class SequentialIndex:
    """Plain ascending order for both loops; used by the brute-force search."""

    def __init__(self, count: int, window_len: int) -> None:
        self.count = int(count)
        self.window_len = int(window_len)

    def outer_order(self) -> np.ndarray:
        return np.arange(self.count)

    def inner_order(self, position: int, rng: np.random.Generator | None = None) -> np.ndarray:
        return np.flatnonzero(_exclusion_mask(self.count, position, self.window_len))


class CandidateIndex:
    """Start positions grouped by (approximate) shape.

    ``groups`` partitions ``range(count)``: every start position belongs to
    exactly one group, and positions inside a group are ascending.
    """

    def __init__(self, groups: Sequence[Sequence[int]], window_len: int, labels: Sequence[str] | None = None) -> None:
        self.groups: List[np.ndarray] = [np.asarray(g, dtype=int) for g in groups]
        self.labels = list(labels) if labels is not None else [str(i) for i in range(len(self.groups))]
        self.window_len = int(window_len)
        self.count = int(sum(g.size for g in self.groups))
        self.group_of = np.full(self.count, -1, dtype=int)
        for gid, members in enumerate(self.groups):
            if members.size and (members.min() < 0 or members.max() >= self.count):
                raise ValueError("candidate groups must cover every start position")
            if np.any(self.group_of[members] != -1):
                raise ValueError("a start position appears in more than one group")
            self.group_of[members] = gid
        if np.any(self.group_of == -1):
            raise ValueError("candidate groups must cover every start position")

    def outer_order(self) -> np.ndarray:
        """Positions by ascending group size, ties in position order."""

        sizes = np.array([g.size for g in self.groups])[self.group_of]
        return np.lexsort((np.arange(self.count), sizes))

    def inner_order(self, position: int, rng: np.random.Generator | None = None) -> np.ndarray:
        """Same-group neighbours in position order, then everything else shuffled.

        Positions whose window overlaps ``position``'s are never returned.
        """

        rng = rng if rng is not None else np.random.default_rng()
        allowed = _exclusion_mask(self.count, position, self.window_len)
        same = self.groups[self.group_of[position]]
        near = same[allowed[same]]
        allowed[same] = False
        rest = np.flatnonzero(allowed)
        rng.shuffle(rest)
        return np.concatenate([near, rest])

    def __len__(self) -> int:
        return len(self.groups)


def _word_trie(series: np.ndarray, window_len: int, word_size: int, alphabet_size: int) -> SymbolTrie:
    words = symbolize_series(series, window_len, word_size, alphabet_size)
    trie = SymbolTrie.from_words(words)
    log_event(logger, "candidate_words_built", level=logging.DEBUG, windows=len(words), distinct_words=len(trie))
    return trie


def build_candidate_index(
    series: np.ndarray,
    window_len: int,
    word_size: int,
    alphabet_size: int,
) -> CandidateIndex:
    """Group every window start position by its SAX word."""

    trie = _word_trie(series, window_len, word_size, alphabet_size)
    labels, groups = zip(*trie.groups())
    return CandidateIndex(groups, window_len, labels=labels)


def build_squeezer_index(
    series: np.ndarray,
    window_len: int,
    word_size: int,
    alphabet_size: int,
    threshold: float = 0.7,
) -> CandidateIndex:
    """Like :func:`build_candidate_index`, but similar words are merged by Squeezer clustering."""

    trie = _word_trie(series, window_len, word_size, alphabet_size)
    clusters = squeeze(trie.groups(), threshold)
    return CandidateIndex(
        [c.positions for c in clusters],
        window_len,
        labels=["|".join(c.words) for c in clusters],
    )
