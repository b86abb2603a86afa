# tokseg/config.py
from __future__ import annotations

import logging
import unicodedata
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from tokseg.text.classifier import APOSTROPHES, HYPHENS, TERMINALS, is_space
from tokseg.utils.encoding import is_known_encoding

_LOGGER = logging.getLogger("tokseg.config")


class TokenizerCfg(BaseModel):
    terminals: str = Field(TERMINALS, description="sentence terminal characters")
    hyphens: str = Field(HYPHENS, description="hyphen/dash characters (dropped between words)")
    apostrophes: str = Field(APOSTROPHES, description="apostrophe/quote characters")
    split_contractions: bool = True  # "don't" -> "do" + "n't"
    encoding: str = "utf-8"          # used to decode bytes input

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    @field_validator("terminals", "hyphens", "apostrophes")
    @classmethod
    def _char_set(cls, v: str) -> str:
        if not v:
            raise ValueError("character set must not be empty")
        # these classify earlier (lower, space, upper, number) and would never be reached
        bad = [ch for ch in v if is_space(ch) or unicodedata.category(ch) in ("Ll", "Lu", "Nd")]
        if bad:
            raise ValueError(f"character set may not hold whitespace, cased letters or digits: {bad!r}")
        return v

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, v: str) -> str:
        if not is_known_encoding(v):
            raise ValueError(f"unknown encoding: {v!r}")
        return v

    @model_validator(mode="after")
    def _disjoint_sets(self) -> TokenizerCfg:
        sets = {
            "terminals": set(self.terminals),
            "hyphens": set(self.hyphens),
            "apostrophes": set(self.apostrophes),
        }
        names = list(sets)
        for i, a in enumerate(names):
            for b in names[i + 1:]:
                common = sets[a] & sets[b]
                if common:
                    raise ValueError(f"{a} and {b} overlap: {sorted(common)!r}")
        return self


class SegmenterCfg(BaseModel):
    policy: str = Field("single", description="registered sentence boundary policy")

    model_config = ConfigDict(extra="ignore", validate_assignment=True)


class Config(BaseModel):
    tokenizer: TokenizerCfg = Field(default_factory=TokenizerCfg)
    segmenter: SegmenterCfg = Field(default_factory=SegmenterCfg)
    model_config = ConfigDict(extra="ignore")


DEFAULT_CONFIG = Config()

# --- Back-compat for flat YAML ---
_FLAT_KEYS = {"terminals", "hyphens", "apostrophes", "split_contractions", "encoding"}


def _normalize_data(data: dict[str, Any]) -> dict[str, Any]:
    if not data:
        return {}
    data = dict(data)
    flat = {k: data.pop(k) for k in list(data.keys()) if k in _FLAT_KEYS}
    if flat:
        data.setdefault("tokenizer", {}).update(flat)
    return data


def load_config(path: str | Path | None = "configs/default.yaml") -> Config:
    data: dict[str, Any] = {}
    if path:
        p = Path(path)
        if p.exists():
            try:
                with p.open("r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise RuntimeError(f"Failed to parse YAML at {path}: {e}") from e
        else:
            _LOGGER.debug("config file %s not found; using defaults", p)
    data = _normalize_data(data)
    return Config(**data)


def _cast_env_value(val: str, current):
    """
    Cast env string to the type of `current`.
    Only booleans need casting; every other knob is a string and passes through as-is.
    """
    if isinstance(current, bool):
        s = str(val).strip().lower()
        if s in ("1", "true", "yes", "y", "on"):
            return True
        if s in ("0", "false", "no", "n", "off"):
            return False
        raise ValueError(f"not a boolean: {val!r}")
    return val


def apply_env_overrides(cfg: Config) -> None:
    """
    Override knobs from environment variables.
    Supported:
      TOKSEG_TERMINALS, TOKSEG_HYPHENS, TOKSEG_APOSTROPHES   character sets
      TOKSEG_SPLIT_CONTRACTIONS                             1/0, true/false, yes/no
      TOKSEG_ENCODING                                       codec for bytes input
      TOKSEG_POLICY                                         sentence boundary policy name
    An override that does not validate is skipped with a warning.
    """
    import os
    mapping = {
        "TOKSEG_TERMINALS": ("tokenizer", "terminals"),
        "TOKSEG_HYPHENS": ("tokenizer", "hyphens"),
        "TOKSEG_APOSTROPHES": ("tokenizer", "apostrophes"),
        "TOKSEG_SPLIT_CONTRACTIONS": ("tokenizer", "split_contractions"),
        "TOKSEG_ENCODING": ("tokenizer", "encoding"),
        "TOKSEG_POLICY": ("segmenter", "policy"),
    }
    for env_key, (section, field) in mapping.items():
        raw = os.getenv(env_key)
        if raw is None:
            continue
        sect_obj = getattr(cfg, section)
        current = getattr(sect_obj, field)
        try:
            # validate a copy; the live section is only replaced once it passes
            candidate = type(sect_obj).model_validate(
                {**sect_obj.model_dump(), field: _cast_env_value(raw, current)}
            )
        except (ValueError, ValidationError) as e:
            _LOGGER.warning("ignoring %s=%r: %s", env_key, raw, e)
            continue
        setattr(cfg, section, candidate)


def validate_config(cfg: Config) -> None:
    """
    Cross-section checks that pydantic cannot see on its own:
      - segmenter.policy must name a registered policy
    Raises ValueError with a precise message if violated.
    """
    from tokseg.text.segmenter import registered_policies

    names = registered_policies()
    if cfg.segmenter.policy not in names:
        raise ValueError(
            f"Config invalid: unknown segmenter policy {cfg.segmenter.policy!r}; "
            f"registered: {sorted(names)}"
        )
