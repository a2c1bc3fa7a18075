"""Validated discord search parameters and config-file loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SEARCH_MODES = ("heuristic", "brute_force", "squeezer")


class SearchConfig(BaseModel):
    """Parameters for one discord search."""

    model_config = ConfigDict(frozen=True)

    discord_len: int
    word_size: int = 3
    alphabet_size: int = 3
    mode: str = "heuristic"
    subrange: Optional[Tuple[Optional[int], Optional[int]]] = None
    seed: Optional[int] = None
    squeezer_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    batch_size: int = 64

    @field_validator("discord_len")
    @classmethod
    def _window_fits_twice(cls, value: int) -> int:
        if value <= 1:
            raise ValueError("discord_len must be greater than 1")
        return int(value)

    @field_validator("word_size")
    @classmethod
    def _positive_word(cls, value: int) -> int:
        if value < 1:
            raise ValueError("word_size must be >= 1")
        return int(value)

    @field_validator("alphabet_size")
    @classmethod
    def _alphabet_range(cls, value: int) -> int:
        if not 2 <= value <= 26:
            raise ValueError("alphabet_size must be between 2 and 26")
        return int(value)

    @field_validator("mode", mode="before")
    @classmethod
    def _known_mode(cls, value: object) -> str:
        mode = str(getattr(value, "value", value)).lower().replace("-", "_")
        if mode not in SEARCH_MODES:
            raise ValueError(f"mode must be one of {', '.join(SEARCH_MODES)} (got {value!r})")
        return mode

    @field_validator("subrange")
    @classmethod
    def _ordered_subrange(
        cls, value: Optional[Tuple[Optional[int], Optional[int]]]
    ) -> Optional[Tuple[Optional[int], Optional[int]]]:
        if value is None:
            return None
        start, stop = value
        if start is not None and start < 0:
            raise ValueError("subrange start must be >= 0")
        if start is not None and stop is not None and stop <= start:
            raise ValueError("subrange stop must be greater than its start")
        return value

    @field_validator("batch_size")
    @classmethod
    def _positive_batch(cls, value: int) -> int:
        if value < 1:
            raise ValueError("batch_size must be >= 1")
        return int(value)

    @model_validator(mode="after")
    def _word_fits_window(self) -> "SearchConfig":
        if self.word_size > self.discord_len:
            raise ValueError(
                f"word_size ({self.word_size}) cannot exceed discord_len ({self.discord_len})"
            )
        return self

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, object]) -> "SearchConfig":
        kwargs = {k: v for k, v in cfg.items() if k in cls.model_fields}
        return cls(**kwargs)  # type: ignore[arg-type]

    @classmethod
    def from_file(cls, path: str | Path) -> "SearchConfig":
        raw = Path(path)
        if not raw.exists():
            raise FileNotFoundError(raw)
        text = raw.read_text(encoding="utf-8")
        cfg = yaml.safe_load(text) if raw.suffix.lower() in {".yml", ".yaml"} else json.loads(text)
        if not isinstance(cfg, Mapping):
            raise ValueError("Search config file must contain a mapping/object at the top level")
        return cls.from_mapping(cfg)
