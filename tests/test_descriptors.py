# tests/test_descriptors.py
"""
Tests for descriptors.py - basiclti.xml and lti_advantage.xml rendering
"""
from lticart.descriptors import (
    BLTI_NS,
    LTICM_NS,
    render_basic_lti,
    render_lti_advantage,
    render_resource,
    secure_url,
    sibling_url,
)
from lticart.models import AssessmentMetadata, ResourceRecord

from conftest import parse_xml


DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def blti(tag):
    return f"{{{BLTI_NS}}}{tag}"


def property_names(xml):
    root = parse_xml(xml)
    extensions = root.find(blti("extensions"))
    return [p.get("name") for p in extensions.findall(f"{{{LTICM_NS}}}property")]


def property_value(xml, name):
    root = parse_xml(xml)
    for prop in root.iter(f"{{{LTICM_NS}}}property"):
        if prop.get("name") == name:
            return prop.text
    return None


class TestUrlHelpers:
    """Tests for launch URL rewriting"""

    def test_secure_url_upgrades_http(self):
        assert secure_url("http://x/a") == "https://x/a"

    def test_secure_url_leaves_https(self):
        assert secure_url("https://x/a") == "https://x/a"

    def test_secure_url_leaves_schemeless(self):
        assert secure_url("tool.example.com/a") == "tool.example.com/a"

    def test_sibling_url(self):
        assert sibling_url("https://t.example.com/quiz/launch", "jwks") == "https://t.example.com/quiz/jwks"

    def test_sibling_url_trailing_slash(self):
        assert sibling_url("https://t.example.com/quiz/", "init") == "https://t.example.com/quiz/init"


class TestBasicLti:
    """Tests for the LTI 1.1 descriptor"""

    def test_declaration_and_root(self):
        xml = render_basic_lti("https://x/a", "L")
        assert xml.startswith(DECLARATION + "\n<cartridge_basiclti_link")

    def test_launch_urls_unchanged_for_https(self):
        xml = render_basic_lti("https://x/a", "L")
        assert "<blti:launch_url>https://x/a</blti:launch_url>" in xml
        assert "<blti:secure_launch_url>https://x/a</blti:secure_launch_url>" in xml

    def test_secure_launch_url_for_http(self):
        xml = render_basic_lti("http://x/a", "L")
        assert "<blti:launch_url>http://x/a</blti:launch_url>" in xml
        assert "<blti:secure_launch_url>https://x/a</blti:secure_launch_url>" in xml

    def test_default_title(self):
        root = parse_xml(render_basic_lti("https://x/a"))
        assert root.findtext(blti("title")) == "External Tool"
        assert root.findtext(blti("description")) == "Basic LTI Launch"

    def test_boilerplate(self):
        xml = render_basic_lti("https://x/a", "L")
        assert "<lticp:code>external_tool</lticp:code>" in xml
        assert '<cartridge_bundle identifierref="BLTI001_Bundle"/>' in xml
        assert '<cartridge_icon identifierref="BLTI001_Icon"/>' in xml
        assert blti("extensions") not in [e.tag for e in parse_xml(xml)]

    def test_title_is_escaped(self):
        root = parse_xml(render_basic_lti("https://x/a?b=1&c=2", "Q&A <intro>"))
        assert root.findtext(blti("title")) == "Q&A <intro>"
        assert root.findtext(blti("launch_url")) == "https://x/a?b=1&c=2"

    def test_rendering_is_repeatable(self):
        assert render_basic_lti("https://x/a", "L") == render_basic_lti("https://x/a", "L")


class TestLtiAdvantage:
    """Tests for the LTI 1.3 assessment descriptor"""

    def test_minimal_properties(self):
        xml = render_lti_advantage("https://t.example.com/quiz/launch", "Quiz", AssessmentMetadata(points=15))
        assert property_names(xml) == [
            "tool_id",
            "privacy_level",
            "lti_1_3_enabled",
            "public_jwk_url",
            "assignment_enabled",
            "assignment_points_possible",
            "settings",
        ]
        assert property_value(xml, "assignment_points_possible") == "15"
        assert "allowed_attempts" not in xml

    def test_optional_properties_in_order(self):
        metadata = AssessmentMetadata(
            type="exam", points=100, time_limit=60, attempts=2, proctored=True, passing_score=70,
        )
        xml = render_lti_advantage("https://t.example.com/exam/launch", "Exam", metadata)
        assert property_names(xml) == [
            "tool_id",
            "privacy_level",
            "lti_1_3_enabled",
            "public_jwk_url",
            "assignment_enabled",
            "assignment_points_possible",
            "time_limit",
            "allowed_attempts",
            "proctoring_enabled",
            "passing_score",
            "settings",
        ]
        assert property_value(xml, "time_limit") == "60"
        assert property_value(xml, "allowed_attempts") == "2"
        assert property_value(xml, "proctoring_enabled") == "true"
        assert property_value(xml, "passing_score") == "70"

    def test_derived_urls(self):
        xml = render_lti_advantage("https://t.example.com/quiz/launch")
        assert property_value(xml, "public_jwk_url") == "https://t.example.com/quiz/jwks"
        assert property_value(xml, "oidc_initiation_url") == "https://t.example.com/quiz/init"

    def test_defaults(self):
        xml = render_lti_advantage("https://t.example.com/quiz/launch")
        root = parse_xml(xml)
        assert root.findtext(blti("title")) == "Assessment"
        assert root.findtext(blti("description")) == "Assessment Launch via LTI Advantage"
        assert property_value(xml, "assignment_points_possible") == "10"
        assert root.find(blti("extensions")).get("platform") == "canvas.instructure.com"

    def test_not_proctored_omits_flag(self):
        xml = render_lti_advantage("https://t/q/launch", "Q", AssessmentMetadata(proctored=False))
        assert "proctoring_enabled" not in xml

    def test_oidc_nested_under_settings(self):
        root = parse_xml(render_lti_advantage("https://t/q/launch"))
        settings = [p for p in root.iter(f"{{{LTICM_NS}}}property") if p.get("name") == "settings"][0]
        nested = settings.findall(f"{{{LTICM_NS}}}property")
        assert [p.get("name") for p in nested] == ["oidc_initiation_url"]


class TestRenderResource:
    """Tests for flavor selection"""

    def test_content_record_uses_basic(self):
        record = ResourceRecord(id="I_101_R", folder_name="i_101", launch_url="https://x/a", title="L")
        assert "Basic LTI Launch" in render_resource(record)

    def test_assessment_record_uses_advantage(self):
        record = ResourceRecord(
            id="I_102_R", folder_name="i_102", launch_url="https://x/q/launch", title="L Quiz",
            is_assessment=True, metadata=AssessmentMetadata(points=15),
        )
        xml = render_resource(record)
        assert "Assessment Launch via LTI Advantage" in xml
        assert property_value(xml, "assignment_points_possible") == "15"
