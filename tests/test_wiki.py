"""Tests for the MediaWiki client using httpx.MockTransport."""
import httpx
import pytest

from study_extractor.wiki import WikiClient, WikiConfig, WikiServiceError, split_sections

ARTICLE_HTML = (
    '<div class="mw-parser-output">'
    '<p>Napoleon Bonaparte was a French military commander and political leader of great fame.</p>'
    '<h2><span class="mw-headline">Early life</span><span class="mw-editsection">[edit]</span></h2>'
    '<p>Napoleon was born in 1769 on the island of Corsica to a family of minor nobility.</p>'
    '<h2>Notes</h2><p>Short.</p>'
    '</div>'
)

PARSE_RESPONSE = {
    "parse": {"title": "Napoleon", "displaytitle": "<i>Napoleon</i>", "text": {"*": ARTICLE_HTML}}
}

QUERY_RESPONSE = {
    "query": {
        "pages": {
            "69880": {
                "fullurl": "https://en.wikipedia.org/wiki/Napoleon",
                "original": {"source": "https://upload.wikimedia.org/napoleon.jpg"},
                "links": [
                    {"ns": 0, "title": "French Revolution"},
                    {"ns": 0, "title": "List of battles"},
                    {"ns": 0, "title": "Category:Emperors"},
                ],
            }
        }
    }
}


def _client(handler):
    return WikiClient(config=WikiConfig(), transport=httpx.MockTransport(handler))


def _api(request):
    action = request.url.params.get("action")
    if action == "opensearch":
        return httpx.Response(200, json=["napo", ["Napoleon", "Napoleon III"],
                                         ["French emperor", ""], ["u1", "u2"]])
    if action == "parse":
        return httpx.Response(200, json=PARSE_RESPONSE)
    if action == "query":
        return httpx.Response(200, json=QUERY_RESPONSE)
    return httpx.Response(400)


class TestSplitSections:

    def test_overview_and_h2_sections(self):
        sections = split_sections(ARTICLE_HTML)
        assert [(s.id, s.title, s.level) for s in sections] == [
            ("overview", "Overview", 1),
            ("sec-0", "Early life", 2),
        ]
        assert sections[1].text.startswith("Napoleon was born in 1769")

    def test_wrapped_headings(self):
        html = ('<div class="mw-heading mw-heading2"><h2 id="Reign">Reign</h2></div>'
                '<p>He crowned himself Emperor of the French in 1804 at Notre-Dame in Paris.</p>')
        sections = split_sections(html)
        assert [s.title for s in sections] == ["Reign"]

    def test_empty(self):
        assert split_sections("") == []


class TestSearch:

    def test_search_topics(self):
        with _client(_api) as client:
            results = client.search_topics("napo")
        assert [r.title for r in results] == ["Napoleon", "Napoleon III"]
        assert results[0].description == "French emperor"
        assert results[1].url == "u2"

    def test_blank_query(self):
        with _client(_api) as client:
            assert client.search_topics("   ") == []

    def test_http_error_degrades(self):
        with _client(lambda request: httpx.Response(503)) as client:
            assert client.search_topics("napo") == []

    def test_api_error_object_degrades(self):
        error = {"error": {"code": "badvalue", "info": "Unrecognized value"}, "servedby": "mw1"}
        with _client(lambda request: httpx.Response(200, json=error)) as client:
            assert client.search_topics("napo") == []


class TestTopicDetails:

    def test_get_topic_details(self):
        with _client(_api) as client:
            topic, related = client.get_topic_details("Napoleon")
        assert topic.title == "Napoleon"
        assert topic.url == "https://en.wikipedia.org/wiki/Napoleon"
        assert topic.thumbnail == "https://upload.wikimedia.org/napoleon.jpg"
        assert [s.title for s in topic.sections] == ["Overview", "Early life"]
        assert "1769" in topic.full_text
        assert related == ["French Revolution"]

    def test_missing_page(self):
        def handler(request):
            if request.url.params.get("action") == "parse":
                return httpx.Response(200, json={"error": {"code": "missingtitle"}})
            return httpx.Response(200, json={"query": {"pages": {}}})

        with _client(handler) as client:
            assert client.get_topic_details("Nope") is None

    def test_unexpected_info_payload(self):
        def handler(request):
            if request.url.params.get("action") == "parse":
                return httpx.Response(200, json=PARSE_RESPONSE)
            return httpx.Response(200, json=["not", "an", "object"])

        with _client(handler) as client:
            topic, related = client.get_topic_details("Napoleon Bonaparte")
        assert topic.url == "https://en.wikipedia.org/wiki/Napoleon_Bonaparte"
        assert topic.thumbnail is None
        assert related == []

    def test_parse_payload_not_an_object(self):
        with _client(lambda request: httpx.Response(200, json=["napo"])) as client:
            assert client.get_topic_details("Napoleon") is None

    def test_invalid_json_degrades(self):
        with _client(lambda request: httpx.Response(200, content=b"not json")) as client:
            assert client.get_topic_details("Napoleon") is None

    def test_empty_title(self):
        with _client(_api) as client:
            with pytest.raises(WikiServiceError):
                client.get_topic_details("")


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("WIKI_API_BASE", "https://example.org/w/api.php")
    monkeypatch.setenv("WIKI_TIMEOUT", "3")
    cfg = WikiConfig.from_env()
    assert cfg.api_base == "https://example.org/w/api.php"
    assert cfg.timeout == 3.0
