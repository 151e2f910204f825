from __future__ import annotations
import re
from typing import List
from .datatypes import SentenceFeatures
from .preprocessing import strip_nbsp, strip_punctuation

_FOUR_DIGITS = re.compile(r"\d{4}", re.ASCII)
_CAPITALIZED_RUN = re.compile(r"[A-Z][a-z]+")
_DIGIT = re.compile(r"\d", re.ASCII)
_UPPER_START = re.compile(r"^[A-Z]")

# Sentence bonuses (key points)
DATE_BONUS = 3
PROPER_NOUN_BONUS = 1
LENGTH_BONUS = 2
MIN_READABLE_LEN = 50
MAX_READABLE_LEN = 200

# Token bonuses (flashcards)
TOKEN_DIGIT_BONUS = 3
TOKEN_CAPITAL_BONUS = 2
TOKEN_LONG_BONUS = 1
LONG_TOKEN_LEN = 7


def _date_signal(s: str) -> int:
    return DATE_BONUS if _FOUR_DIGITS.search(s) else 0

def _proper_noun(s: str) -> int:
    return PROPER_NOUN_BONUS if _CAPITALIZED_RUN.search(s) else 0

def _readable_length(s: str) -> int:
    n = len(strip_nbsp(s))
    return LENGTH_BONUS if MIN_READABLE_LEN < n < MAX_READABLE_LEN else 0


def sentence_features(s: str) -> SentenceFeatures:
    """Independent additive bonuses for one raw sentence."""
    return {
        "date_signal": _date_signal(s),
        "proper_noun": _proper_noun(s),
        "readable_length": _readable_length(s),
    }


def token_features(token: str, position: int) -> SentenceFeatures:
    """Bonuses for one whitespace token at ``position`` within its sentence."""
    return {
        "has_digit": TOKEN_DIGIT_BONUS if _DIGIT.search(token) else 0,
        "capitalized": TOKEN_CAPITAL_BONUS if position > 0 and _UPPER_START.match(token) else 0,
        "long_word": TOKEN_LONG_BONUS if len(strip_punctuation(token)) > LONG_TOKEN_LEN else 0,
    }


def extract_features(sentences: List[str]) -> List[SentenceFeatures]:
    return [sentence_features(s) for s in sentences]
