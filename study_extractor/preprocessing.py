from __future__ import annotations
import re
import logging
from itertools import islice
from typing import Iterator, List, Optional
from .datatypes import Sentence

logger = logging.getLogger(__name__)

# Run of non-terminators followed by one or more terminators. Naive on purpose:
# "U.S." and "3.14" are split into several sentences.
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")
_WS_RE = re.compile(r"\s+")
_PUNCT_RE = re.compile(r'[.,;!?()"]')

NBSP_ENTITY = "&nbsp;"
MASK = "________"


def _ensure_text(text) -> str:
    if text is None:
        return ""
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    return text


def _scan(text: str) -> Iterator[str]:
    found = False
    for m in _SENTENCE_RE.finditer(text):
        found = True
        yield m.group(0)
    if not found and text.strip():
        # no terminator anywhere: the whole input is one sentence
        yield text


class SentenceStream:
    """Restartable, lazy view over the sentences of a corpus.

    Every call to ``iter()`` rescans the text from the start, so the same
    stream can be handed to several extractors.
    """

    def __init__(self, text: Optional[str]):
        self.text = _ensure_text(text)

    def __iter__(self) -> Iterator[str]:
        return _scan(self.text)

    def indexed(self, limit: Optional[int] = None) -> Iterator[Sentence]:
        for i, s in enumerate(islice(self, limit)):
            yield Sentence(idx=i, text=s)


def iter_sentences(text: Optional[str], limit: Optional[int] = None) -> Iterator[str]:
    return islice(SentenceStream(text), limit)


def split_sentences(text: Optional[str]) -> List[str]:
    # Split on . ! ? keeping the terminators; empty text -> []
    return list(SentenceStream(text))


def strip_nbsp(s: str) -> str:
    return s.replace(NBSP_ENTITY, " ").strip()


def clean_sentence(s: str) -> str:
    return _WS_RE.sub(" ", s.replace(NBSP_ENTITY, " ")).strip()


def split_tokens(clean: str) -> List[str]:
    """Split an already cleaned sentence into tokens on single spaces."""
    return clean.split(" ")


def strip_punctuation(token: str) -> str:
    return _PUNCT_RE.sub("", token)


def corpus_tokens(text: Optional[str]) -> List[str]:
    """Whitespace tokens of the whole corpus, punctuation stripped."""
    text = _ensure_text(text)
    return [strip_punctuation(t) for t in _WS_RE.split(text)]


def mask_token(clean: str, raw_token: str) -> str:
    # first literal occurrence only, which may sit inside an earlier word
    return clean.replace(raw_token, MASK, 1)
