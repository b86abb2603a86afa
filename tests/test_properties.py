from __future__ import annotations
import random

from tokseg.text.segmenter import analyze
from tokseg.text.subtokenizer import subsplit
from tokseg.text.tokenizer import split

ALPHABET = (
    "abcnt" "ABC" "0129" " \t\n\u00a0\u2028" ".?!" "()[]" "-_\u2010" "'\u2019" ",:;$%*/" "\u00e9\u00df"
)


def _random_texts(seed: int, n: int = 300, max_len: int = 40):
    rng = random.Random(seed)
    for _ in range(n):
        yield "".join(rng.choice(ALPHABET) for _ in range(rng.randint(0, max_len)))


def test_reconstruction():
    for text in _random_texts(7):
        toks = split(text)
        assert "".join(t.prefix + t.value for t in toks) == text
        # only the last token may have an empty value
        assert all(t.value for t in toks[:-1])


def test_spans_are_ordered_non_empty_and_in_range():
    for text in _random_texts(11):
        spans = subsplit(text)
        last_end = 0
        for start, end in spans:
            assert 0 <= start < end <= len(text)
            assert start >= last_end
            last_end = end


def test_spans_and_gaps_partition_the_text():
    for text in _random_texts(13):
        covered = []
        last = 0
        for start, end in subsplit(text):
            covered.extend(range(last, start))  # dropped gap
            covered.extend(range(start, end))
            last = end
        covered.extend(range(last, len(text)))
        assert covered == list(range(len(text)))


def test_tokens_match_spans():
    for text in _random_texts(17):
        spans = subsplit(text)
        toks = split(text)
        assert [(t.offset, t.end) for t in toks if t.value] == spans


def test_sentences_cover_token_stream():
    for text in _random_texts(19):
        sentences = analyze(text)
        assert all(len(s) > 0 for s in sentences)
        assert [t for s in sentences for t in s] == split(text)
        assert (len(sentences) == 0) == (text == "")


def test_determinism_100x():
    text = "Mr. O'Neil didn't pay $1,000.50 on 31.12.2000 (twice)! CamelCase_id alpha-1"
    first = split(text)
    for _ in range(100):
        assert split(text) == first
