"""
Unit tests for cascading selector extraction.
"""

from bs4 import BeautifulSoup

from core.field_extractors import (
    FieldStrategy,
    body_text,
    clean_text,
    extract_fields,
    first_element,
)


def soup_of(html):
    return BeautifulSoup(html, "lxml")


class TestFieldStrategy:
    """Ordered selectors with a length gate."""

    def test_first_passing_selector_wins(self):
        soup = soup_of('<div class="a">short</div><div class="b">long enough text here</div>')
        strategy = FieldStrategy("description", [".a", ".b"], min_length=10)

        assert strategy.extract(soup) == "long enough text here"

    def test_earlier_selector_preferred(self):
        soup = soup_of('<h1>Backend Engineer</h1><div class="title">Other Title</div>')
        strategy = FieldStrategy("title", ["h1", ".title"], min_length=3)

        assert strategy.extract(soup) == "Backend Engineer"

    def test_upper_bound_rejects(self):
        soup = soup_of(f'<span class="company">{"x" * 120}</span><a href="/company/acme">Acme</a>')
        strategy = FieldStrategy("company", [".company", 'a[href*="company"]'], min_length=1, max_length=100)

        assert strategy.extract(soup) == "Acme"

    def test_bounds_are_exclusive(self):
        strategy = FieldStrategy("description", [], min_length=5, max_length=10)

        assert not strategy.accepts("12345")
        assert strategy.accepts("123456")
        assert not strategy.accepts("1234567890")

    def test_cap_truncates(self):
        soup = soup_of(f"<article>{'y' * 500}</article>")
        strategy = FieldStrategy("description", ["article"], min_length=100, cap=200)

        assert len(strategy.extract(soup)) == 200

    def test_nothing_matches(self):
        strategy = FieldStrategy("title", ["h1"], min_length=3)

        assert strategy.extract(soup_of("<p>no heading</p>")) is None
        assert strategy.extract(None) is None


class TestHelpers:
    def test_clean_text_collapses_whitespace(self):
        assert clean_text("  a   b \n\n\n  c  ") == "a b\nc"
        assert clean_text(None) == ""

    def test_extract_fields_defaults_to_empty(self):
        soup = soup_of("<h1>Backend Engineer</h1>")
        fields = extract_fields(soup, [
            FieldStrategy("title", ["h1"], min_length=3),
            FieldStrategy("company", [".company"], min_length=1),
        ])

        assert fields == {"title": "Backend Engineer", "company": ""}

    def test_body_text_cap(self):
        soup = soup_of(f"<body><p>{'z' * 400}</p></body>")

        assert len(body_text(soup)) == 400
        assert len(body_text(soup, cap=100)) == 100

    def test_first_element(self):
        soup = soup_of('<ul><li class="job">A</li><li class="job">B</li></ul>')

        assert first_element(soup, [".missing", "li.job"]).get_text() == "A"
        assert first_element(soup, [".missing"]) is None
