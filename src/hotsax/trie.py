"""Trie over fixed-length SAX words whose leaves hold window start positions."""

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple


class SymbolTrie:
    """Groups start positions by word, one symbol per level.

    All words stored in a trie must have the same length. Positions within a
    leaf keep insertion order and leaves are iterated in the order their word
    was first inserted.
    """

    def __init__(self, word_size: int) -> None:
        if word_size < 1:
            raise ValueError("word_size must be positive")
        self.word_size = int(word_size)
        self._root: Dict[str, dict] = {}
        self._leaves: list[tuple[str, List[int]]] = []

    @classmethod
    def from_words(cls, words: List[str]) -> "SymbolTrie":
        """Build a trie where ``words[i]`` is the word at position ``i``."""

        if not words:
            raise ValueError("cannot build a trie without words")
        trie = cls(len(words[0]))
        for position, word in enumerate(words):
            trie.insert(word, position)
        return trie

    def _check(self, word: str) -> None:
        if len(word) != self.word_size:
            raise ValueError(f"word '{word}' does not have length {self.word_size}")

    def insert(self, word: str, position: int) -> None:
        self._check(word)
        node = self._root
        for symbol in word[:-1]:
            node = node.setdefault(symbol, {})
        leaf = node.get(word[-1])
        if leaf is None:
            leaf = []
            node[word[-1]] = leaf
            self._leaves.append((word, leaf))
        leaf.append(position)

    def positions(self, word: str) -> List[int]:
        """Return the positions stored for ``word``; raises ``KeyError`` if absent."""

        self._check(word)
        node = self._root
        for symbol in word:
            node = node[symbol]
        return node  # type: ignore[return-value]

    def groups(self) -> Iterator[Tuple[str, List[int]]]:
        return iter(self._leaves)

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str) or len(word) != self.word_size:
            return False
        try:
            self.positions(word)
        except KeyError:
            return False
        return True

    def __len__(self) -> int:
        return len(self._leaves)
