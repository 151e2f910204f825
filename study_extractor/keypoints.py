from __future__ import annotations
import logging
from typing import List, Optional
from .datatypes import KeyPoint
from .preprocessing import iter_sentences, strip_nbsp
from .scoring import score_sentences, rank_sentences

logger = logging.getLogger(__name__)

MAX_SENTENCES = 300
MAX_KEY_POINTS = 8


def generate_key_points(text: Optional[str]) -> List[KeyPoint]:
    """Top sentences of the corpus by significance score.

    Only the first 300 sentences are considered. Returns at most 8 entries,
    fewer when the corpus is short.
    """
    sentences = list(iter_sentences(text, MAX_SENTENCES))
    scored = score_sentences(sentences)
    top = rank_sentences(scored, MAX_KEY_POINTS)
    points = [strip_nbsp(s.text) for s in top]
    logger.debug("key points: %d of %d sentences", len(points), len(sentences))
    return points
