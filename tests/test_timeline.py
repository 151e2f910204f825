"""Unit tests for year extraction and timeline ordering."""
from study_extractor.datatypes import TimelineEvent
from study_extractor.timeline import generate_timeline, find_year


class TestFindYear:

    def test_range(self):
        assert find_year("in 1000 and later") == "1000"
        assert find_year("by 2099 maybe") == "2099"
        assert find_year("around 999 or 2150") is None

    def test_bare_token_only(self):
        assert find_year("the archive held 19999 records") is None
        assert find_year("code A1850B") is None

    def test_ascii_digits_only(self):
        assert find_year("founded in ١٩٩٠ by traders") is None

    def test_accented_letter_is_a_boundary(self):
        assert find_year("the café1990 sign") == "1990"
        assert find_year("the 1990é sign") == "1990"

    def test_first_year_wins(self):
        assert find_year("Between 1914 and 1918 the war raged.") == "1914"


class TestGenerateTimeline:

    def test_empty_input(self):
        assert generate_timeline("") == []

    def test_napoleon(self, napoleon_text):
        assert generate_timeline(napoleon_text) == [
            TimelineEvent(year="1769", description="Napoleon was born in 1769."),
            TimelineEvent(year="1804", description="He became Emperor of France in 1804."),
        ]

    def test_sorted_by_year(self):
        text = "The war ended in 1945 after many years. The city was founded in 1203 by merchants."
        assert [e.year for e in generate_timeline(text)] == ["1203", "1945"]

    def test_first_sentence_for_a_year_wins(self):
        text = ("The treaty was signed in 1648 at Munster. "
                "Another account of 1648 says it was signed elsewhere entirely.")
        events = generate_timeline(text)
        assert events == [TimelineEvent(year="1648", description="The treaty was signed in 1648 at Munster.")]

    def test_rejected_sentence_does_not_claim_year(self):
        text = "In 1500. The great cathedral was completed in 1500 after decades."
        events = generate_timeline(text)
        assert len(events) == 1
        assert events[0].description == "The great cathedral was completed in 1500 after decades."

    def test_length_band(self):
        long_sentence = "In 1600 " + "very " * 50 + "long."
        assert generate_timeline(long_sentence) == []

    def test_description_is_cleaned(self):
        events = generate_timeline("  The bridge   opened&nbsp;in\n1890 to traffic.")
        assert events[0].description == "The bridge opened in 1890 to traffic."

    def test_years_unique_and_ascending(self, article_text):
        events = generate_timeline(article_text)
        years = [e.year for e in events]
        assert len(years) == len(set(years))
        assert [int(y) for y in years] == sorted(int(y) for y in years)
        assert years == ["1453", "1776"]
