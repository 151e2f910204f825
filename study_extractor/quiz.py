"""
Multiple-choice cloze questions built from article prose.

Each qualifying sentence gets one token masked out; the correct answer is
offered next to three distractors drawn from corpus-wide pools of the same
kind (numbers for numeric answers, capitalized words otherwise).

Option order is random. Pass a seed or a ``numpy.random.Generator`` as
``rng`` to make it reproducible; the default draws from fresh OS entropy.
"""
from __future__ import annotations
import re
import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .datatypes import QuizQuestion, QuizResult
from .preprocessing import (SentenceStream, clean_sentence, split_tokens, strip_punctuation,
                            corpus_tokens, mask_token)

logger = logging.getLogger(__name__)

MAX_SENTENCES = 500
MIN_TOKENS = 10
OPTION_COUNT = 4
MAX_DRAWS = 20
MIN_NOUN_TARGET_LEN = 5
QUESTIONS_PER_ROUND = 5

_PROPER_NOUN = re.compile(r"^[A-Z][a-z]+$")
_NUMBER = re.compile(r"^[0-9]+$")
_DIGIT = re.compile(r"[0-9]")
_UPPER_START = re.compile(r"^[A-Z]")


@dataclass(frozen=True)
class DistractorPools:
    """Candidate distractors computed once per corpus. Read-only."""
    proper_nouns: Tuple[str, ...]
    numbers: Tuple[str, ...]
    words: Tuple[str, ...]  # every stripped whitespace token, duplicates kept

    @classmethod
    def from_text(cls, text: Optional[str]) -> "DistractorPools":
        words = corpus_tokens(text)
        # dict.fromkeys: dedupe, first-seen order
        nouns = dict.fromkeys(w for w in words if _PROPER_NOUN.match(w) and len(w) > 4)
        numbers = dict.fromkeys(w for w in words if _NUMBER.match(w))
        return cls(proper_nouns=tuple(nouns), numbers=tuple(numbers), words=tuple(words))


def find_target(tokens: List[str]) -> Tuple[int, str]:
    """Index and kind of the token to mask, ``(-1, kind)`` when nothing fits.

    A token containing a digit is preferred; otherwise the first capitalized
    non-initial token longer than five characters once stripped.
    """
    for i, w in enumerate(tokens):
        if _DIGIT.search(w):
            return i, "number"
    for i, w in enumerate(tokens):
        if i > 0 and _UPPER_START.match(w) and len(strip_punctuation(w)) > MIN_NOUN_TARGET_LEN:
            return i, "noun"
    return -1, "noun"


def _pick(rng: np.random.Generator, seq: Sequence[str]) -> str:
    return seq[int(rng.integers(len(seq)))]


def build_options(answer: str, pool: Sequence[str], words: Sequence[str],
                  rng: np.random.Generator) -> Optional[Tuple[str, ...]]:
    """Answer plus three distinct distractors in random order, or None."""
    options: Dict[str, None] = {answer: None}
    attempts = 0
    while pool and len(options) < OPTION_COUNT and attempts < MAX_DRAWS:
        candidate = _pick(rng, pool)
        if candidate and candidate != answer:
            options[candidate] = None
        attempts += 1

    if len(options) < OPTION_COUNT and words:
        # last resort: any word of the corpus
        candidate = _pick(rng, words)
        if candidate and candidate != answer:
            options[candidate] = None

    if len(options) != OPTION_COUNT:
        return None
    ordered = list(options)
    return tuple(ordered[i] for i in rng.permutation(OPTION_COUNT))


def make_question(idx: int, sentence: str, pools: DistractorPools,
                  rng: np.random.Generator) -> Optional[QuizQuestion]:
    clean = clean_sentence(sentence)
    tokens = split_tokens(clean)
    if len(tokens) < MIN_TOKENS:
        return None

    target, kind = find_target(tokens)
    if target == -1:
        return None

    raw = tokens[target]
    answer = strip_punctuation(raw)
    pool = pools.numbers if kind == "number" else pools.proper_nouns
    options = build_options(answer, pool, pools.words, rng)
    if options is None:
        logger.debug("quiz: sentence %d skipped, not enough distractors for %r", idx, answer)
        return None

    return QuizQuestion(
        id=f"q-{idx}",
        question=mask_token(clean, raw),
        options=options,
        correct_answer=answer,
        marks=1,
    )


def generate_quiz(text: Optional[str], rng=None) -> List[QuizQuestion]:
    """Multiple-choice questions for the first 500 sentences of ``text``.

    Args:
        text: plain-text corpus
        rng: seed, ``numpy.random.Generator`` or None (unseeded)

    Returns:
        Questions in sentence order, each with exactly four distinct options.
    """
    rng = np.random.default_rng(rng)
    stream = SentenceStream(text)
    pools = DistractorPools.from_text(stream.text)

    questions: List[QuizQuestion] = []
    for sentence in stream.indexed(MAX_SENTENCES):
        q = make_question(sentence.idx, sentence.text, pools, rng)
        if q is not None:
            questions.append(q)
    logger.debug("quiz: %d questions (%d nouns, %d numbers in pool)",
                 len(questions), len(pools.proper_nouns), len(pools.numbers))
    return questions


def quiz_rounds(questions: Sequence[QuizQuestion], per_round: int = QUESTIONS_PER_ROUND) -> List[List[QuizQuestion]]:
    if per_round < 1:
        raise ValueError("per_round must be positive")
    return [list(questions[i:i + per_round]) for i in range(0, len(questions), per_round)]


def grade_answers(questions: Sequence[QuizQuestion], answers: Mapping[str, Optional[str]]) -> QuizResult:
    """Score chosen options (question id -> option); unanswered scores zero."""
    correct = [q for q in questions if answers.get(q.id) == q.correct_answer]
    return QuizResult(
        score=sum(q.marks for q in correct),
        total=sum(q.marks for q in questions),
        correct_ids=tuple(q.id for q in correct),
    )
