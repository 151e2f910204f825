from __future__ import annotations
import re
import logging
from typing import Dict, List, Optional
from .datatypes import TimelineEvent
from .preprocessing import SentenceStream, clean_sentence

logger = logging.getLogger(__name__)

# Bare years 1000-2099, ASCII digits and word boundaries only
YEAR_RE = re.compile(r"\b(1\d{3}|20\d{2})\b", re.ASCII)
MIN_DESCRIPTION_LEN = 20
MAX_DESCRIPTION_LEN = 200


def find_year(sentence: str) -> Optional[str]:
    m = YEAR_RE.search(sentence)
    return m.group(0) if m else None


def generate_timeline(text: Optional[str]) -> List[TimelineEvent]:
    # dict keeps insertion order: the first sentence for a year wins
    events: Dict[str, TimelineEvent] = {}
    for s in SentenceStream(text):
        year = find_year(s)
        if year is None or year in events:
            continue
        description = clean_sentence(s)
        if MIN_DESCRIPTION_LEN < len(description) < MAX_DESCRIPTION_LEN:
            events[year] = TimelineEvent(year=year, description=description)

    logger.debug("timeline: %d distinct years", len(events))
    return sorted(events.values(), key=lambda e: int(e.year))
