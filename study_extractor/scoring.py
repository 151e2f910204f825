from __future__ import annotations
from typing import List, Optional, Tuple
from .datatypes import ScoredSentence, SentenceFeatures
from .features import extract_features, token_features


def score_sentences(sentences: List[str], features: Optional[List[SentenceFeatures]] = None) -> List[ScoredSentence]:
    # Sum of the sentence bonuses, in source order
    if features is None:
        features = extract_features(sentences)
    return [ScoredSentence(text=s, score=sum(f.values()), features=f)
            for s, f in zip(sentences, features)]


def rank_sentences(scored: List[ScoredSentence], top_k: int) -> List[ScoredSentence]:
    # sorted() is stable: equal scores keep first-seen-first
    return sorted(scored, key=lambda x: x.score, reverse=True)[:top_k]


def best_token(tokens: List[str]) -> Optional[Tuple[int, str, int]]:
    """Highest-scoring token as ``(position, token, score)``.

    Ties go to the earliest token. Returns None for an empty token list.
    """
    best: Optional[Tuple[int, str, int]] = None
    for i, tok in enumerate(tokens):
        score = sum(token_features(tok, i).values())
        if best is None or score > best[2]:
            best = (i, tok, score)
    return best
