"""HOT SAX discord discovery for univariate time series."""

from importlib import metadata

from .config import SearchConfig
from .errors import HotSaxError, InvalidParametersError
from .index import CandidateIndex, SequentialIndex, build_candidate_index, build_squeezer_index
from .logging_utils import configure_logging, log_event
from .sax import gaussian_breakpoints, sax_word, symbolize_series
from .search import DiscordResult, DiscordSearch, SearchMode, find_discord
from .squeezer import squeeze
from .transforms import euclidean, normalized_windows, paa, znorm
from .trie import SymbolTrie

try:
    __version__ = metadata.version("hotsax")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback for source checkouts
    __version__ = "0.1.0"

__all__ = [
    "find_discord",
    "DiscordSearch",
    "DiscordResult",
    "SearchMode",
    "SearchConfig",
    "sax_word",
    "symbolize_series",
    "gaussian_breakpoints",
    "paa",
    "znorm",
    "euclidean",
    "normalized_windows",
    "CandidateIndex",
    "SequentialIndex",
    "build_candidate_index",
    "build_squeezer_index",
    "squeeze",
    "SymbolTrie",
    "HotSaxError",
    "InvalidParametersError",
    "configure_logging",
    "log_event",
    "__version__",
]
