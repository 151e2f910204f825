from __future__ import annotations
import re
import logging
from typing import List, Optional, Set
from .datatypes import Flashcard
from .preprocessing import (SentenceStream, clean_sentence, split_tokens,
                            strip_punctuation, mask_token)
from .scoring import best_token

logger = logging.getLogger(__name__)

MAX_SENTENCES = 500
MIN_TOKENS = 5
MAX_TOKENS = 40
MIN_ANSWER_LEN = 3

_DIGIT = re.compile(r"\d", re.ASCII)


def _tag_for(answer: str) -> str:
    return "Date" if _DIGIT.search(answer) else "Concept"


def make_flashcard(idx: int, sentence: str, seen_answers: Set[str]) -> Optional[Flashcard]:
    """Turn one raw sentence into a cloze card, or None when it does not qualify.

    ``seen_answers`` holds the lowercased backs accepted so far and is updated
    when a card is produced.
    """
    clean = clean_sentence(sentence)
    tokens = split_tokens(clean)
    if len(tokens) < MIN_TOKENS or len(tokens) > MAX_TOKENS:
        return None

    best = best_token(tokens)
    if best is None or best[2] <= 0:
        return None
    _, raw, _ = best

    answer = strip_punctuation(raw)
    key = answer.lower()
    # a duplicate drops the sentence; the next-best token is not tried
    if len(answer) < MIN_ANSWER_LEN or key in seen_answers:
        return None

    seen_answers.add(key)
    return Flashcard(id=f"fc-{idx}", front=mask_token(clean, raw), back=answer, tag=_tag_for(answer))


def generate_flashcards(text: Optional[str]) -> List[Flashcard]:
    seen: Set[str] = set()
    cards: List[Flashcard] = []
    for sentence in SentenceStream(text).indexed(MAX_SENTENCES):
        card = make_flashcard(sentence.idx, sentence.text, seen)
        if card is not None:
            cards.append(card)
    logger.debug("flashcards: %d generated", len(cards))
    return cards
