"""
MediaWiki client used to fetch the article a study guide is built from.

The client only does what the study pipeline needs: title search, the parsed
article split into plain-text sections, a lead image and a handful of
related page titles. Network and decoding failures are logged and reported
as empty results so a flaky connection never takes the app down.
"""
from __future__ import annotations
import os
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import httpx
from bs4 import BeautifulSoup

from .datatypes import SearchResult, TopicData, WikiSection
from .sources import NOISE_SELECTORS

logger = logging.getLogger(__name__)

MIN_SECTION_LEN = 50
EXCLUDED_RELATED_PREFIXES = ("List of", "Category:")


class WikiServiceError(Exception):
    pass


@dataclass
class WikiConfig:
    api_base: str = "https://en.wikipedia.org/w/api.php"
    timeout: float = 15.0
    user_agent: str = "study-extractor/0.1 (educational use)"
    search_limit: int = 5
    related_limit: int = 20
    thumbnail_size: int = 1000

    @classmethod
    def from_env(cls) -> "WikiConfig":
        cfg = cls()
        cfg.api_base = os.getenv("WIKI_API_BASE", cfg.api_base)
        cfg.timeout = float(os.getenv("WIKI_TIMEOUT", str(cfg.timeout)))
        cfg.user_agent = os.getenv("WIKI_USER_AGENT", cfg.user_agent)
        return cfg


def split_sections(html: str) -> List[WikiSection]:
    """Split parsed article HTML into plain-text sections at each ``<h2>``.

    The lead becomes an "Overview" section. Sections whose text is 50
    characters or shorter are dropped.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    for selector in NOISE_SELECTORS:
        for el in soup.select(selector):
            el.decompose()
    root = soup.select_one(".mw-parser-output") or soup

    overview: List[str] = []
    sections: List[Tuple[str, List[str]]] = []
    current = overview
    for node in root.find_all(recursive=False):
        heading = node if node.name == "h2" else None
        if heading is None and node.name == "div" and "mw-heading2" in (node.get("class") or []):
            heading = node.find("h2")
        if heading is not None:
            current = []
            sections.append((heading.get_text().strip(), current))
            continue
        text = node.get_text()
        if text.strip():
            current.append(text)

    result: List[WikiSection] = []
    if overview:
        result.append(WikiSection(id="overview", title="Overview", level=1, text="".join(overview)))
    for i, (title, parts) in enumerate(sections):
        if parts:
            result.append(WikiSection(id=f"sec-{i}", title=title, level=2, text="".join(parts)))
    return [s for s in result if len(s.text) > MIN_SECTION_LEN]


class WikiClient:
    def __init__(self, config: Optional[WikiConfig] = None, transport: Optional[httpx.BaseTransport] = None):
        self.config = config or WikiConfig.from_env()
        self._client = httpx.Client(
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
            transport=transport,
            follow_redirects=True,
        )

    def __enter__(self) -> "WikiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get(self, params: Dict[str, str]) -> Any:
        resp = self._client.get(self.config.api_base, params={**params, "format": "json"})
        resp.raise_for_status()
        return resp.json()

    def search_topics(self, query: str, limit: Optional[int] = None) -> List[SearchResult]:
        if not query or not query.strip():
            return []
        params = {
            "action": "opensearch",
            "search": query,
            "limit": str(limit or self.config.search_limit),
            "namespace": "0",
        }
        try:
            data = self._get(params)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("wiki search failed for %r: %s", query, e)
            return []
        if not isinstance(data, list):
            # API errors come back as 200 with an {"error": ...} object
            logger.warning("wiki search returned no results list for %r: %.200s", query, data)
            return []

        titles = data[1] if len(data) > 1 else []
        descriptions = data[2] if len(data) > 2 else []
        urls = data[3] if len(data) > 3 else []
        return [
            SearchResult(
                title=title,
                description=descriptions[i] if i < len(descriptions) else "",
                url=urls[i] if i < len(urls) else None,
            )
            for i, title in enumerate(titles)
        ]

    def get_topic_details(self, title: str) -> Optional[Tuple[TopicData, List[str]]]:
        """Parsed article and related titles, or None when the page cannot be loaded."""
        if not title or not title.strip():
            raise WikiServiceError("title must not be empty")

        parse_params = {
            "action": "parse",
            "page": title,
            "prop": "text|displaytitle",
            "disabletoc": "1",
            "redirects": "1",
        }
        info_params = {
            "action": "query",
            "titles": title,
            "prop": "pageimages|links|info",
            "piprop": "original|thumbnail",
            "pithumbsize": str(self.config.thumbnail_size),
            "pllimit": str(self.config.related_limit),
            "plnamespace": "0",
            "inprop": "url",
            "redirects": "1",
        }
        try:
            parse_data = self._get(parse_params)
            info_data = self._get(info_params)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("wiki details failed for %r: %s", title, e)
            return None

        if not isinstance(parse_data, dict) or "error" in parse_data or "parse" not in parse_data:
            logger.info("wiki page not found: %r", title)
            return None
        if not isinstance(info_data, dict):
            logger.warning("wiki page info unreadable for %r: %.200s", title, info_data)
            info_data = {}

        parsed = parse_data["parse"]
        raw_html = parsed.get("text", {}).get("*", "")
        display = BeautifulSoup(parsed.get("displaytitle") or title, "html.parser").get_text() or title

        pages = (info_data.get("query") or {}).get("pages") or {}
        page = next(iter(pages.values()), {})
        image = (page.get("original") or {}).get("source") or (page.get("thumbnail") or {}).get("source")

        topic = TopicData(
            title=display,
            sections=tuple(split_sections(raw_html)),
            url=page.get("fullurl") or f"https://en.wikipedia.org/wiki/{title.replace(' ', '_')}",
            thumbnail=image,
        )
        related = [
            link["title"] for link in page.get("links", [])
            if not link.get("title", "").startswith(EXCLUDED_RELATED_PREFIXES)
        ]
        logger.info("wiki page loaded: %s (%d sections, %d related)", topic.title, len(topic.sections), len(related))
        return topic, related
