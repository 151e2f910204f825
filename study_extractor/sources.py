from __future__ import annotations
import re
import logging
from typing import Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Article clutter that should not reach the extractors
NOISE_SELECTORS = [
    ".mw-editsection",   # [edit] links
    ".reference",        # [1][2] markers
    ".reflist",
    ".navbox",
    ".infobox",
    ".sidebar",
    ".hatnote",
    ".mw-empty-elt",
    "style",
    "script",
    "link",
]

SUPPORTED_EXTENSIONS = ("txt", "md", "rtf", "html", "htm")


def extract_rtf_text(rtf_content: str) -> str:
    """Extract plain text from RTF content."""
    # Remove control symbols/words, then braces
    text = re.sub(r'\\\*.*?;', '', rtf_content)
    text = re.sub(r'\\[a-z]+-?\d* ?', '', text)
    text = re.sub(r'\\[^a-z]', '', text)
    text = re.sub(r'[{}]', '', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def extract_markdown_text(md_content: str) -> str:
    """Extract plain text from Markdown content."""
    text = re.sub(r'```.*?```', '', md_content, flags=re.DOTALL)
    text = re.sub(r'`([^`]+)`', r'\1', text)
    text = re.sub(r'^#{1,6}\s+', '', text, flags=re.MULTILINE)
    text = re.sub(r'!\[([^\]]*)\]\([^)]+\)', r'\1', text)
    text = re.sub(r'\[([^\]]+)\]\([^)]+\)', r'\1', text)
    text = re.sub(r'\*{1,2}(.*?)\*{1,2}', r'\1', text)
    text = re.sub(r'(?<!\w)_{1,2}(.*?)_{1,2}(?!\w)', r'\1', text)
    text = re.sub(r'^-{3,}$', '', text, flags=re.MULTILINE)
    text = re.sub(r'\n\s*\n', '\n\n', text)
    return text.strip()


def extract_html_text(html: str) -> str:
    """Plain text of an HTML fragment with edit links, references and boxes removed."""
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for selector in NOISE_SELECTORS:
        for el in soup.select(selector):
            el.decompose()
    # like DOM textContent: no separators are inserted between nodes
    return soup.get_text()


def generate_default_title(filename: str) -> str:
    """Generate default title from filename."""
    name = filename.rsplit('.', 1)[0]
    name = name.replace('_', ' ').replace('-', ' ')
    return ' '.join(word.capitalize() for word in name.split())


def file_extension(filename: str) -> Optional[str]:
    if '.' not in filename:
        return None
    return filename.lower().rsplit('.', 1)[-1]


def load_text(filename: str, raw: bytes) -> str:
    """Decode an uploaded file and strip its markup based on the extension."""
    content = raw.decode("utf-8", errors="replace")
    ext = file_extension(filename)
    if ext == 'rtf':
        return extract_rtf_text(content)
    if ext == 'md':
        return extract_markdown_text(content)
    if ext in ('html', 'htm'):
        return extract_html_text(content)
    if ext not in (None, 'txt'):
        logger.warning("unknown extension %r for %s, reading as plain text", ext, filename)
    return content
