from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Tuple, Optional

KeyPoint = str

@dataclass(frozen=True)
class Sentence:
    idx: int
    text: str

@dataclass(frozen=True)
class ScoredSentence:
    text: str
    score: int
    features: Dict[str, int] = field(default_factory=dict, compare=False)

@dataclass(frozen=True)
class TimelineEvent:
    year: str  # 4 digits, 1000-2099
    description: str

@dataclass(frozen=True)
class Flashcard:
    id: str
    front: str  # cloze sentence
    back: str   # masked token
    tag: Optional[str] = None  # 'Date' | 'Concept'

@dataclass(frozen=True)
class QuizQuestion:
    id: str
    question: str
    options: Tuple[str, ...]
    correct_answer: str
    marks: int = 1
    type: str = "mcq"

@dataclass(frozen=True)
class QuizResult:
    score: int
    total: int
    correct_ids: Tuple[str, ...] = ()

@dataclass(frozen=True)
class SearchResult:
    title: str
    description: str = ""
    url: Optional[str] = None

@dataclass(frozen=True)
class WikiSection:
    id: str
    title: str
    level: int
    text: str

@dataclass(frozen=True)
class TopicData:
    title: str
    sections: Tuple[WikiSection, ...]
    url: str
    thumbnail: Optional[str] = None

    @property
    def full_text(self) -> str:
        return " ".join(s.text for s in self.sections)

@dataclass(frozen=True)
class StudyMaterial:
    key_points: Tuple[KeyPoint, ...]
    flashcards: Tuple[Flashcard, ...]
    quiz: Tuple[QuizQuestion, ...]
    timeline: Tuple[TimelineEvent, ...]
    topic: Optional[TopicData] = None
    related_topics: Tuple[str, ...] = ()

SentenceFeatures = Dict[str, int]  # per-sentence bonus name -> points
