"""HOT SAX discord search with early abandonment."""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Sequence

import numpy as np
from pydantic import ValidationError

from .config import SearchConfig
from .errors import InvalidParametersError
from .index import CandidateIndex, SequentialIndex, build_candidate_index, build_squeezer_index
from .logging_utils import log_event
from .transforms import euclidean, normalized_windows

logger = logging.getLogger(__name__)


class SearchMode(str, Enum):
    HEURISTIC = "heuristic"
    BRUTE_FORCE = "brute_force"
    SQUEEZER = "squeezer"


@dataclass
class DiscordResult:
    """Location and nearest-neighbour distance of the most anomalous window."""

    position: int
    distance: float
    discord_len: int
    mode: str
    candidates_evaluated: int = 0
    abandoned: int = 0
    distance_calls: int = 0
    complete: bool = True

    def window(self, series: Sequence[float] | np.ndarray) -> np.ndarray:
        arr = np.asarray(series, dtype=float)
        return arr[self.position : self.position + self.discord_len]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "distance": self.distance,
            "discord_len": self.discord_len,
            "mode": self.mode,
            "candidates_evaluated": self.candidates_evaluated,
            "abandoned": self.abandoned,
            "distance_calls": self.distance_calls,
            "complete": self.complete,
        }


def _resolve_subrange(subrange: tuple[int, int | None] | None, length: int) -> tuple[int, int]:
    if subrange is None:
        return 0, length
    start, stop = subrange
    start = 0 if start is None else int(start)
    stop = length if stop is None else int(stop)
    if not 0 <= start < stop <= length:
        raise InvalidParametersError(f"subrange {subrange} is out of bounds for a series of length {length}")
    return start, stop


class DiscordSearch:
    """Runs one discord search per call with a fixed :class:`SearchConfig`."""

    def __init__(self, config: SearchConfig) -> None:
        self.config = config

    @classmethod
    def from_file(cls, path: str | Path) -> "DiscordSearch":
        try:
            return cls(SearchConfig.from_file(path))
        except ValidationError as exc:
            raise InvalidParametersError(str(exc)) from exc

    def _build_index(self, series: np.ndarray) -> CandidateIndex | SequentialIndex:
        cfg = self.config
        count = series.size - cfg.discord_len + 1
        mode = SearchMode(cfg.mode)
        if mode is SearchMode.BRUTE_FORCE:
            return SequentialIndex(count, cfg.discord_len)
        if mode is SearchMode.SQUEEZER:
            return build_squeezer_index(
                series, cfg.discord_len, cfg.word_size, cfg.alphabet_size, threshold=cfg.squeezer_threshold
            )
        return build_candidate_index(series, cfg.discord_len, cfg.word_size, cfg.alphabet_size)

    def run(
        self,
        series: Sequence[float] | np.ndarray,
        *,
        cancel: threading.Event | None = None,
    ) -> DiscordResult | None:
        """Return the discord of ``series``, or ``None`` when no two windows fit without overlap."""

        cfg = self.config
        arr = np.asarray(series, dtype=float)
        if arr.ndim != 1:
            raise InvalidParametersError(f"series must be one-dimensional (got shape {arr.shape})")
        start, stop = _resolve_subrange(cfg.subrange, arr.size) if arr.size else (0, 0)
        data = arr[start:stop]
        if not np.all(np.isfinite(data)):
            raise InvalidParametersError("series contains NaN or infinite samples")
        n = cfg.discord_len

        if data.size < 2 * n:
            logger.info("Series of length %d is too short for two windows of length %d", data.size, n)
            return None

        started = time.perf_counter()
        windows = normalized_windows(data, n)
        index = self._build_index(data)
        rng = np.random.default_rng(cfg.seed)

        best_distance = -math.inf
        best_position: int | None = None
        evaluated = abandoned = calls = 0
        complete = True

        for p in index.outer_order():
            if cancel is not None and cancel.is_set():
                complete = False
                break
            evaluated += 1
            p = int(p)
            nearest = math.inf
            abandon = False
            inner = index.inner_order(p, rng)
            for offset in range(0, inner.size, cfg.batch_size):
                batch = inner[offset : offset + cfg.batch_size]
                dists = euclidean(windows[batch], windows[p])
                below = np.flatnonzero(dists < best_distance)
                if below.size:
                    # p's nearest neighbour is closer than the best discord so far
                    calls += int(below[0]) + 1
                    abandon = True
                    break
                calls += int(batch.size)
                nearest = min(nearest, float(dists.min()))
            if abandon:
                abandoned += 1
                continue
            if best_distance < nearest < math.inf:
                best_distance = nearest
                best_position = p

        elapsed = time.perf_counter() - started
        log_event(
            logger,
            "discord_search_completed",
            mode=str(SearchMode(cfg.mode).value),
            length=int(data.size),
            discord_len=n,
            position=None if best_position is None else best_position + start,
            distance=None if best_position is None else best_distance,
            candidates_evaluated=evaluated,
            abandoned=abandoned,
            distance_calls=calls,
            complete=complete,
            elapsed_s=round(elapsed, 6),
        )

        if best_position is None:
            return None
        return DiscordResult(
            position=best_position + start,
            distance=float(best_distance),
            discord_len=n,
            mode=SearchMode(cfg.mode).value,
            candidates_evaluated=evaluated,
            abandoned=abandoned,
            distance_calls=calls,
            complete=complete,
        )


def find_discord(
    series: Sequence[float] | np.ndarray,
    discord_len: int,
    word_size: int = 3,
    alphabet_size: int = 3,
    mode: SearchMode | str = SearchMode.HEURISTIC,
    subrange: tuple[int, int | None] | slice | None = None,
    *,
    seed: int | None = None,
    squeezer_threshold: float = 0.7,
    batch_size: int = 64,
    cancel: threading.Event | None = None,
) -> DiscordResult | None:
    """Find the window of length ``discord_len`` farthest from its nearest non-overlapping neighbour.

    ``mode`` selects the candidate ordering: ``"heuristic"`` (HOT SAX word
    frequencies), ``"squeezer"`` (Squeezer-clustered words) or
    ``"brute_force"`` (ascending order). All three return the same distance;
    only the amount of work differs. ``subrange`` restricts the search to
    ``series[start:stop]`` and reported positions stay relative to the full
    series. Returns ``None`` when the (sub)series holds fewer than
    ``2 * discord_len`` samples.
    """

    if isinstance(subrange, slice):
        if subrange.step not in (None, 1):
            raise InvalidParametersError("subrange slices cannot have a step")
        subrange = (subrange.start, subrange.stop)
    if isinstance(mode, SearchMode):
        mode = mode.value
    try:
        config = SearchConfig(
            discord_len=discord_len,
            word_size=word_size,
            alphabet_size=alphabet_size,
            mode=mode,
            subrange=subrange,
            seed=seed,
            squeezer_threshold=squeezer_threshold,
            batch_size=batch_size,
        )
    except ValidationError as exc:
        raise InvalidParametersError(str(exc)) from exc
    return DiscordSearch(config).run(series, cancel=cancel)
