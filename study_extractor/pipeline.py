from __future__ import annotations
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional
from .datatypes import StudyMaterial, TopicData
from .keypoints import generate_key_points
from .flashcards import generate_flashcards
from .quiz import generate_quiz
from .timeline import generate_timeline

logger = logging.getLogger(__name__)


def build_study_material(text: Optional[str], rng=None, topic: Optional[TopicData] = None,
                         related: Iterable[str] = ()) -> StudyMaterial:
    # Pipeline glue: the four extractors only read the text, run them side by side
    start = time.perf_counter()
    with ThreadPoolExecutor(max_workers=4) as pool:
        key_points = pool.submit(generate_key_points, text)
        flashcards = pool.submit(generate_flashcards, text)
        quiz = pool.submit(generate_quiz, text, rng)
        timeline = pool.submit(generate_timeline, text)
        material = StudyMaterial(
            key_points=tuple(key_points.result()),
            flashcards=tuple(flashcards.result()),
            quiz=tuple(quiz.result()),
            timeline=tuple(timeline.result()),
            topic=topic,
            related_topics=tuple(related),
        )
    logger.info(
        "study material built: %d key points, %d flashcards, %d questions, %d events in %.1f ms",
        len(material.key_points), len(material.flashcards), len(material.quiz),
        len(material.timeline), (time.perf_counter() - start) * 1000,
    )
    return material


def study_material_for_topic(topic: TopicData, related: Iterable[str] = (), rng=None) -> StudyMaterial:
    return build_study_material(topic.full_text, rng=rng, topic=topic, related=related)
