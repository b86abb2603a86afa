# tokseg/__init__.py
"""
Does: Split natural-language text into sub-tokens, tokens with their separator
prefixes, and sentences.

Inputs: str (or bytes, decoded with the configured encoding).
Outputs:
  subtokenize(text) -> iterator of (start, end) offsets
  tokenize(text)    -> iterator of Token(prefix, offset, value)
  segment(text)     -> iterator of Sentence (tuple of Tokens)
The eager list forms are subsplit(), split() and analyze().
"""

from tokseg.config import Config, load_config
from tokseg.text.classifier import CharClassifier, classify
from tokseg.text.segmenter import (
    Segmenter,
    SegmentationPolicy,
    SingleSentencePolicy,
    analyze,
    register_policy,
    segment,
)
from tokseg.text.subtokenizer import subsplit, subtokenize
from tokseg.text.tokenizer import split, tokenize
from tokseg.types import Sentence, Span, Token
from tokseg.utils.encoding import InvalidEncoding

__all__ = [
    "CharClassifier",
    "Config",
    "InvalidEncoding",
    "SegmentationPolicy",
    "Segmenter",
    "Sentence",
    "SingleSentencePolicy",
    "Span",
    "Token",
    "analyze",
    "classify",
    "load_config",
    "register_policy",
    "segment",
    "split",
    "subsplit",
    "subtokenize",
    "tokenize",
]
