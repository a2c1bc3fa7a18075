"""Squeezer clustering of SAX word groups.

Each symbol slot of a word is treated as a categorical attribute. A cluster
keeps a per-slot histogram of the symbols of its members, and a word's
similarity to a cluster is the average, over slots, of the fraction of
members sharing the word's symbol in that slot.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, List, Sequence, Tuple

from .errors import InvalidParametersError

logger = logging.getLogger(__name__)


class Cluster:
    """Positions merged into one group, with per-slot symbol support."""

    def __init__(self, word_size: int) -> None:
        self.size = 0
        self.positions: list[int] = []
        self.words: list[str] = []
        self._support = [Counter() for _ in range(word_size)]

    def add(self, word: str, positions: Sequence[int]) -> None:
        weight = len(positions)
        for slot, symbol in enumerate(word):
            self._support[slot][symbol] += weight
        self.size += weight
        self.positions.extend(positions)
        self.words.append(word)

    def similarity(self, word: str) -> float:
        if not self.size:
            return 0.0
        shared = sum(support[symbol] for support, symbol in zip(self._support, word))
        return shared / (self.size * len(self._support))


def squeeze(groups: Iterable[Tuple[str, Sequence[int]]], threshold: float) -> List[Cluster]:
    """Cluster word groups with a single Squeezer pass.

    Groups are visited in the given order. Each joins the most similar
    existing cluster (the earliest one on ties) when that similarity reaches
    ``threshold``; otherwise it seeds a new cluster. A threshold of 1.0 keeps
    every distinct word in its own cluster.
    """

    if not 0.0 <= threshold <= 1.0:
        raise InvalidParametersError(f"squeezer threshold must be within [0, 1] (got {threshold})")

    clusters: list[Cluster] = []
    for word, positions in groups:
        best: Cluster | None = None
        best_sim = -1.0
        for cluster in clusters:
            sim = cluster.similarity(word)
            if sim > best_sim:
                best, best_sim = cluster, sim
        if best is None or best_sim < threshold:
            best = Cluster(len(word))
            clusters.append(best)
        best.add(word, positions)

    for cluster in clusters:
        cluster.positions.sort()
    logger.debug("Squeezer merged word groups into %d clusters (threshold=%s)", len(clusters), threshold)
    return clusters
