"""
Tests for extract_structured_content: regex-based page summary.
"""

import pytest

from analyzer.extractor import (
    BRIEF_TEXT_LIMIT,
    DESCRIPTION_LIMIT,
    FULL_TEXT_LIMIT,
    H1_LIMIT,
    HINTS_LIMIT,
    SUBHEADLINE_LIMIT,
    TITLE_LIMIT,
    clean_text,
    extract_structured_content,
)
from models import StructuredContent


class TestEmptyInput:
    def test_none_and_empty_are_the_empty_record(self):
        assert extract_structured_content(None) == extract_structured_content("")
        assert extract_structured_content(None) == StructuredContent()

    def test_empty_record_fields_are_empty_strings(self):
        content = extract_structured_content(None)
        assert content.model_dump() == {
            "meta_title": "",
            "meta_description": "",
            "h1": "",
            "subheadline": "",
            "colors": "",
            "fonts": "",
            "text": "",
        }

    def test_plain_text_without_tags(self):
        content = extract_structured_content("just   some\ntext")
        assert content.text == "just some text"
        assert content.h1 == ""


class TestMetadata:
    def test_title(self):
        content = extract_structured_content("<html><head><TITLE> Acme Inc </TITLE></head></html>")
        assert content.meta_title == "Acme Inc"

    def test_description_name_then_content(self):
        html = '<meta name="description" content="We build rockets">'
        assert extract_structured_content(html).meta_description == "We build rockets"

    def test_description_content_then_name(self):
        html = "<meta content='We build rockets' name='description'>"
        assert extract_structured_content(html).meta_description == "We build rockets"

    def test_first_description_wins(self):
        html = '<meta name="description" content="First"><meta name="description" content="Second">'
        assert extract_structured_content(html).meta_description == "First"


class TestHeadings:
    def test_h1_strips_inner_tags(self):
        html = '<h1 class="hero">Ship <em>faster</em> today</h1><h1>Second</h1>'
        assert extract_structured_content(html).h1 == "Ship faster today"

    def test_subheadline_prefers_h2(self):
        html = '<p class="lead">Lead text</p><h2>Real <b>sub</b></h2>'
        assert extract_structured_content(html).subheadline == "Real sub"

    @pytest.mark.parametrize("css_class", ["hero-copy", "subtitle", "lead big", "intro"])
    def test_subheadline_falls_back_to_keyword_paragraph(self, css_class):
        html = f'<p>Ignore me</p><p class="{css_class}">The <a href="#">pitch</a></p>'
        assert extract_structured_content(html).subheadline == "The pitch"

    def test_no_subheadline(self):
        html = '<p class="footer">Copyright</p>'
        assert extract_structured_content(html).subheadline == ""


class TestColors:
    def test_inline_and_embedded_colors_first_seen_order(self):
        html = '<div style="color:#fff">x</div><style>body { background: #000; }</style>'
        assert extract_structured_content(html).colors == "#fff, #000"

    def test_background_color_and_rgb(self):
        html = "<style>a { background-color: rgb(1, 2, 3); color: red; }</style>"
        assert extract_structured_content(html).colors == "rgb(1, 2, 3), red"

    def test_colors_are_distinct_and_capped_at_five(self):
        declarations = "".join(f"p{i} {{ color: #00000{i}; }} q {{ color: #000000; }}" for i in range(8))
        content = extract_structured_content(f"<style>{declarations}</style>")
        colors = content.colors.split(", ")
        assert colors == ["#000000", "#000001", "#000002", "#000003", "#000004"]


class TestFonts:
    def test_css_font_family_without_quotes(self):
        html = "<style>body { font-family: \"Helvetica Neue\", Arial; } h1 { font-family: Georgia; }</style>"
        assert extract_structured_content(html).fonts == "Helvetica Neue, Georgia"

    def test_google_fonts_weights_are_stripped(self):
        html = '<link href="https://fonts.googleapis.com/css?family=Inter:400|Roboto:700" rel="stylesheet">'
        fonts = extract_structured_content(html).fonts.split(", ")
        assert "Inter" in fonts
        assert "Roboto" in fonts
        assert not any(":" in f for f in fonts)

    def test_google_fonts_css2_and_encoded_names(self):
        html = (
            '<link rel="stylesheet" href="https://fonts.googleapis.com/css2?'
            'family=Open+Sans:wght@400;700&amp;family=Lora&amp;display=swap">'
        )
        assert extract_structured_content(html).fonts == "Open Sans, Lora"

    def test_css_fonts_come_before_google_fonts_and_cap_at_three(self):
        html = (
            "<style>body { font-family: Alpha; } h1 { font-family: Beta; }</style>"
            '<link href="https://fonts.googleapis.com/css?family=Gamma%7CDelta:300" rel="stylesheet">'
        )
        assert extract_structured_content(html).fonts == "Alpha, Beta, Gamma"

    def test_duplicate_font_is_merged(self):
        html = (
            "<style>body { font-family: 'Inter'; }</style>"
            '<link href="https://fonts.googleapis.com/css?family=Inter:400|Roboto" rel="stylesheet">'
        )
        assert extract_structured_content(html).fonts == "Inter, Roboto"


class TestBodyText:
    def test_scripts_and_styles_removed_with_content(self):
        html = (
            "<html><head><style>.a { color: red; }</style>"
            '<script type="text/javascript">var secret = "<b>x</b>";</script></head>'
            "<body><p>Hello</p>\n\n<div>World</div></body></html>"
        )
        assert extract_structured_content(html).text == "Hello World"

    def test_entities_decoded(self):
        html = "<p>Tom&nbsp;&amp;&nbsp;Jerry &lt;3 &quot;cheese&quot; &gt; all</p>"
        assert clean_text(html) == 'Tom & Jerry <3 "cheese" > all'

    def test_full_and_brief_caps(self):
        html = "<p>" + "word " * 1000 + "</p>"
        assert len(extract_structured_content(html).text) == FULL_TEXT_LIMIT
        assert len(extract_structured_content(html, text_limit=BRIEF_TEXT_LIMIT).text) == BRIEF_TEXT_LIMIT


class TestCaps:
    def test_every_field_within_its_cap(self):
        long = "x" * 5000
        html = (
            f"<title>{long}</title>"
            f'<meta name="description" content="{long}">'
            f"<h1>{long}</h1><h2>{long}</h2>"
            + "".join(f"<p style='color:#{i:06x}; font-family: F{i}'>t</p>" for i in range(200))
            + "<p>" + long + "</p>"
        )
        content = extract_structured_content(html)
        assert len(content.meta_title) == TITLE_LIMIT
        assert len(content.meta_description) == DESCRIPTION_LIMIT
        assert len(content.h1) == H1_LIMIT
        assert len(content.subheadline) == SUBHEADLINE_LIMIT
        assert len(content.colors) <= HINTS_LIMIT
        assert len(content.colors.split(", ")) == 5
        assert len(content.fonts.split(", ")) == 3
        assert len(content.text) <= FULL_TEXT_LIMIT

    @pytest.mark.parametrize(
        "html",
        [
            "<",
            "<h1>unclosed",
            "<title></title><meta name=description>",
            '<link href="https://fonts.googleapis.com/css?">',
            "<script>never closed",
            "\x00�<p class='hero'>",
        ],
    )
    def test_malformed_html_never_raises(self, html):
        content = extract_structured_content(html)
        assert isinstance(content, StructuredContent)
