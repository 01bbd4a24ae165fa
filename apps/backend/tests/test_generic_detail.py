"""
Tests for single-page extraction of arbitrary job URLs.
"""

from tests.fakes import make_snapshot

ATS_PAGE = """
<html><body>
  <h1>Senior Data Engineer</h1>
  <div class="company-name">Initech</div>
  <div class="location">Hyderabad, India</div>
  <div class="job-description">
    <p>You will own the batch and streaming pipelines that feed our analytics platform.</p>
    <ul><li>Design Spark jobs</li><li>Operate Airflow</li><li>Mentor two junior engineers</li></ul>
  </div>
</body></html>
"""


class TestGenericDetailExtractor:
    """Field cascades and the body-text fallback."""

    def test_extracts_all_fields(self, detail_extractor):
        fields = detail_extractor.extract(make_snapshot(ATS_PAGE))

        assert fields["title"] == "Senior Data Engineer"
        assert fields["company"] == "Initech"
        assert fields["location"] == "Hyderabad, India"
        assert fields["description"].startswith("You will own the batch and streaming pipelines")
        assert "Operate Airflow" in fields["description"]
        assert detail_extractor.has_enough_content(fields)

    def test_description_keeps_line_structure(self, detail_extractor):
        fields = detail_extractor.extract(make_snapshot(ATS_PAGE))

        assert "\nDesign Spark jobs\n" in fields["description"]

    def test_body_fallback_when_selectors_fail(self, detail_extractor):
        text = ("Candidates should enjoy solving puzzles with customers daily " * 9)[:500]
        fields = detail_extractor.extract(make_snapshot(f"<body><span>{text}</span></body>"))

        assert fields["description"] == text.strip()
        assert detail_extractor.has_enough_content(fields)

    def test_short_body_is_not_used(self, detail_extractor):
        fields = detail_extractor.extract(make_snapshot("<body><span>Loading jobs...</span></body>"))

        assert fields["description"] == ""
        assert not detail_extractor.has_enough_content(fields)

    def test_description_capped(self, detail_extractor):
        html = f"<body><article>{'Long responsibilities text. ' * 600}</article></body>"
        fields = detail_extractor.extract(make_snapshot(html))

        assert len(fields["description"]) == detail_extractor.description_cap

    def test_overlong_title_rejected(self, detail_extractor):
        html = f'<body><h1>{"T" * 250}</h1><div class="job-title">Support Specialist</div></body>'
        fields = detail_extractor.extract(make_snapshot(html))

        assert fields["title"] == "Support Specialist"
