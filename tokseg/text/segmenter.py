# tokseg/text/segmenter.py
"""
Does:
    Group a token stream into sentences.
    The segmenter runs a five-state machine
        begin -> first_token -> inner_token ... -> terminal_token -> ... -> end
    and asks an injectable policy, per token, which state that token puts it in:
      - "first_token":    the token opens a new sentence (flush what is buffered first)
      - "inner_token":    the token continues the current sentence
      - "terminal_token": the token closes the current sentence (flush after it)

    Once the stream is exhausted the segmenter enters "end" and calls the policy's
    optional `finish(state)` hook, so stateful policies can reset.

Notes:
    - The only built-in policy ("single") keeps the whole stream in one sentence.
      Boundary heuristics (terminals, quotes, capitalization) are left to custom policies.
    - Sentences are never empty; concatenating all sentences gives back the token stream.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Protocol, Sequence

from tokseg.config import DEFAULT_CONFIG, Config
from tokseg.text.tokenizer import tokenize
from tokseg.types import SegmentationState, Sentence, Token

_LOGGER = logging.getLogger("tokseg.text.segmenter")

_TOKEN_STATES = ("first_token", "inner_token", "terminal_token")


class SegmentationPolicy(Protocol):
    def transition(
        self, state: SegmentationState, sentence: Sequence[Token], token: Token
    ) -> SegmentationState:
        """
        Decide the state `token` moves the segmenter into.
        `state` is the state after the previous token ("begin" for the first one),
        `sentence` the tokens buffered so far (read-only, possibly empty).
        Must return one of "first_token", "inner_token", "terminal_token".
        """
        ...


class SingleSentencePolicy:
    """Never break: the entire token stream is one sentence."""

    def transition(
        self, state: SegmentationState, sentence: Sequence[Token], token: Token
    ) -> SegmentationState:
        return "inner_token" if sentence else "first_token"


# -----------------------
# Policy registry
# -----------------------
_POLICIES: Dict[str, Callable[[], SegmentationPolicy]] = {
    "single": SingleSentencePolicy,
}


def register_policy(name: str, factory: Callable[[], SegmentationPolicy]) -> None:
    if not name:
        raise ValueError("policy name must be non-empty")
    _POLICIES[name] = factory


def registered_policies() -> List[str]:
    return list(_POLICIES)


def get_policy(name: str) -> SegmentationPolicy:
    try:
        factory = _POLICIES[name]
    except KeyError:
        raise KeyError(f"unknown segmenter policy {name!r}; registered: {sorted(_POLICIES)}") from None
    return factory()


class Segmenter:
    """Drive a SegmentationPolicy over tokens. Holds no per-run state; safe to reuse."""

    def __init__(self, policy: Optional[SegmentationPolicy] = None) -> None:
        self.policy = policy if policy is not None else SingleSentencePolicy()

    def segment_tokens(self, tokens: Iterable[Token]) -> Iterator[Sentence]:
        state: SegmentationState = "begin"
        buffer: List[Token] = []
        n_tokens = 0
        n_sentences = 0
        for token in tokens:
            n_tokens += 1
            decision = self.policy.transition(state, buffer, token)
            if decision not in _TOKEN_STATES:
                raise ValueError(
                    f"policy {type(self.policy).__name__} returned {decision!r}; "
                    f"expected one of {_TOKEN_STATES}"
                )
            if decision == "first_token" and buffer:
                n_sentences += 1
                yield tuple(buffer)
                buffer = []
            buffer.append(token)
            if decision == "terminal_token":
                n_sentences += 1
                yield tuple(buffer)
                buffer = []
                state = "terminal_token"
            elif len(buffer) == 1:
                state = "first_token"
            else:
                state = "inner_token"
        if buffer:
            n_sentences += 1
            yield tuple(buffer)
        state = "end"
        finish = getattr(self.policy, "finish", None)
        if finish is not None:
            finish(state)
        _LOGGER.debug("segmented %d tokens into %d sentences (%s)", n_tokens, n_sentences, state)


def segment(
    text: str | bytes,
    policy: Optional[SegmentationPolicy] = None,
    cfg: Optional[Config] = None,
) -> Iterator[Sentence]:
    """
    Lazily yield Sentences for `text`.
    `policy` overrides the configured one (cfg.segmenter.policy).
    """
    cfg = cfg or DEFAULT_CONFIG
    if policy is None:
        policy = get_policy(cfg.segmenter.policy)
    return Segmenter(policy).segment_tokens(tokenize(text, cfg))


def analyze(
    text: str | bytes,
    policy: Optional[SegmentationPolicy] = None,
    cfg: Optional[Config] = None,
) -> List[Sentence]:
    """Eager form of segment()."""
    return list(segment(text, policy, cfg))
