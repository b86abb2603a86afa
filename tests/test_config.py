from __future__ import annotations
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from tokseg.config import (
    Config,
    TokenizerCfg,
    apply_env_overrides,
    load_config,
    validate_config,
)
from tokseg.text.classifier import APOSTROPHES, HYPHENS, TERMINALS
from tokseg.text.subtokenizer import subsplit
from tokseg.text.tokenizer import split

REPO_DEFAULT = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"


def test_shipped_yaml_matches_defaults():
    cfg = load_config(REPO_DEFAULT)
    assert cfg == Config()
    assert cfg.tokenizer.hyphens == HYPHENS
    assert cfg.tokenizer.apostrophes == APOSTROPHES
    assert cfg.tokenizer.terminals == TERMINALS
    validate_config(cfg)


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "nope.yaml") == Config()
    assert load_config(None) == Config()


def test_flat_keys_are_migrated(tmp_path):
    p = tmp_path / "flat.yaml"
    p.write_text("split_contractions: false\nencoding: latin-1\nsegmenter:\n  policy: single\n", encoding="utf-8")
    cfg = load_config(p)
    assert cfg.tokenizer.split_contractions is False
    assert cfg.tokenizer.encoding == "latin-1"


def test_invalid_yaml_raises(tmp_path):
    p = tmp_path / "bad.yaml"
    p.write_text("tokenizer: [unclosed\n", encoding="utf-8")
    with pytest.raises(RuntimeError):
        load_config(p)


def test_field_validation():
    with pytest.raises(ValidationError):
        TokenizerCfg(terminals="")
    with pytest.raises(ValidationError):
        TokenizerCfg(hyphens="-a")       # lowercase letters classify first
    with pytest.raises(ValidationError):
        TokenizerCfg(apostrophes="' ")   # whitespace classifies first
    with pytest.raises(ValidationError):
        TokenizerCfg(encoding="no-such-codec")
    with pytest.raises(ValidationError):
        TokenizerCfg(hyphens="-'", apostrophes="'")


def test_validate_config_rejects_unknown_policy():
    cfg = Config(segmenter={"policy": "mystery"})
    with pytest.raises(ValueError):
        validate_config(cfg)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TOKSEG_SPLIT_CONTRACTIONS", "no")
    monkeypatch.setenv("TOKSEG_HYPHENS", "-")
    monkeypatch.setenv("TOKSEG_ENCODING", "latin-1")
    cfg = Config()
    apply_env_overrides(cfg)
    assert cfg.tokenizer.split_contractions is False
    assert cfg.tokenizer.hyphens == "-"
    assert cfg.tokenizer.encoding == "latin-1"
    assert Config().tokenizer.split_contractions is True  # defaults untouched


def test_bad_env_override_is_skipped(monkeypatch, caplog):
    monkeypatch.setenv("TOKSEG_ENCODING", "no-such-codec")
    monkeypatch.setenv("TOKSEG_SPLIT_CONTRACTIONS", "maybe")
    cfg = Config()
    with caplog.at_level(logging.WARNING, logger="tokseg.config"):
        apply_env_overrides(cfg)
    assert cfg.tokenizer.encoding == "utf-8"
    assert cfg.tokenizer.split_contractions is True
    assert "TOKSEG_ENCODING" in caplog.text
    assert "TOKSEG_SPLIT_CONTRACTIONS" in caplog.text


def test_env_override_overlapping_other_set_is_rolled_back(monkeypatch, caplog):
    # "." is valid on its own but overlaps the terminals
    monkeypatch.setenv("TOKSEG_HYPHENS", ".")
    cfg = Config()
    with caplog.at_level(logging.WARNING, logger="tokseg.config"):
        apply_env_overrides(cfg)
    assert cfg.tokenizer.hyphens == HYPHENS
    assert cfg.tokenizer == TokenizerCfg()
    assert "TOKSEG_HYPHENS" in caplog.text
    assert subsplit("a.b", cfg) == subsplit("a.b")


def test_information_separators_allowed_in_char_sets():
    cfg = TokenizerCfg(hyphens="-\x1f")
    assert "\x1f" in cfg.hyphens
    with pytest.raises(ValidationError):
        TokenizerCfg(hyphens="-\u2028")  # line separator is whitespace


def test_config_drives_tokenization():
    keep = Config(tokenizer={"split_contractions": False})
    assert subsplit("don't", keep) == [(0, 3), (3, 5)]
    no_underscore = Config(tokenizer={"hyphens": "-"})
    assert subsplit("under_score", no_underscore) == [(0, 5), (5, 6), (6, 11)]
    latin = Config(tokenizer={"encoding": "latin-1"})
    assert [t.value for t in split("café noir".encode("latin-1"), latin)] == ["café", "noir"]
