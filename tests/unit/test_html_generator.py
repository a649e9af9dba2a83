"""
Unit Tests for HTML Generator
=============================

Unit tests for frame document generation, per-frame styling and text embedding.
"""

import re

import jinja2
import pytest
from markupsafe import Markup

from framegen.core.rendering.html_generator import (
    FRAME_STYLES,
    HTMLGenerationError,
    Jinja2HTMLGenerator,
    frame_style,
    generate_frame_html,
    highlighted_line,
    nl2br,
    px,
)
from framegen.models.schemas import InfoLine, TemplateContent

HIGHLIGHTED_RE = re.compile(r'<li class="info-item highlighted">')
INFO_ITEM_RE = re.compile(r'<li class="info-item( highlighted)?">')


def description_block(html: str) -> str:
    match = re.search(r'<div class="description">(.*?)</div>', html, re.S)
    assert match, "description block missing"
    return match.group(1)


class TestHTMLGenerationError:
    """Test HTML generation error handling."""

    def test_html_generation_error_creation(self):
        error = HTMLGenerationError("Test error message")
        assert str(error) == "Test error message"
        assert isinstance(error, Exception)


class TestFilters:
    """Test template filters."""

    def test_px_filter(self):
        assert px(10) == "10px"
        assert px(25.5) == "25.5px"

    def test_nl2br_converts_newlines(self):
        assert nl2br("a\nb\n\nc") == Markup("a<br>b<br><br>c")

    def test_nl2br_escapes_markup(self):
        result = nl2br("<b>1 & 2</b>\n\"quoted\"")
        assert "<b>" not in result
        assert "&lt;b&gt;1 &amp; 2&lt;/b&gt;<br>" in result
        assert isinstance(result, Markup)


class TestFrameSelection:
    """Test per-frame style and highlight selection."""

    @pytest.mark.parametrize("frame_index", [1, 2, 3, 4])
    def test_highlighted_line_matches_frame_index(self, frame_index):
        assert highlighted_line(frame_index) == frame_index

    def test_highlight_cycles_after_four_frames(self):
        assert highlighted_line(5) == 1
        assert frame_style(6) == FRAME_STYLES[1]

    def test_four_distinct_title_palettes(self):
        gradients = {frame_style(i).title_gradient for i in range(1, 5)}
        assert len(gradients) == 4

    def test_cta_glow_rises_then_cycles(self):
        glows = [frame_style(i).cta_glow_px for i in range(1, 5)]
        assert glows == [20, 22, 25, 22]

    @pytest.mark.parametrize("frame_index", [0, -1])
    def test_invalid_frame_index(self, frame_index):
        with pytest.raises(HTMLGenerationError):
            frame_style(frame_index)
        with pytest.raises(HTMLGenerationError):
            highlighted_line(frame_index)


class TestJinja2HTMLGenerator:
    """Test the Jinja2-based frame generator."""

    @pytest.fixture
    def generator(self):
        return Jinja2HTMLGenerator()

    def test_generator_initialization(self, generator):
        assert isinstance(generator.env, jinja2.Environment)
        assert isinstance(generator.env.loader, jinja2.FileSystemLoader)
        assert "px" in generator.env.filters
        assert "nl2br" in generator.env.filters

    def test_generates_complete_document(self, generator):
        html = generator.generate("hello", 1, 900)
        assert html.startswith("<!DOCTYPE html>")
        assert html.rstrip().endswith("</html>")
        assert "width: 720px;" in html
        assert "height: 900px;" in html

    def test_height_is_parametrized(self, generator):
        assert "height: 1234px;" in generator.generate("hello", 2, 1234)

    def test_deterministic_output(self, generator):
        first = generator.generate("same\ntext", 3, 975)
        second = generator.generate("same\ntext", 3, 975)
        assert first == second

    def test_module_function_matches_generator(self, generator):
        assert generate_frame_html("abc", 2, 900) == generator.generate("abc", 2, 900)

    @pytest.mark.parametrize("frame_index", [1, 2, 3, 4])
    def test_exactly_one_highlighted_line(self, generator, frame_index):
        html = generator.generate("text", frame_index, 900)
        items = INFO_ITEM_RE.findall(html)
        assert len(items) == 4
        assert len(HIGHLIGHTED_RE.findall(html)) == 1
        highlighted_position = [i for i, flag in enumerate(items, start=1) if flag]
        assert highlighted_position == [frame_index]

    @pytest.mark.parametrize("frame_index", [1, 2, 3, 4])
    def test_frame_specific_styles(self, generator, frame_index):
        html = generator.generate("text", frame_index, 900)
        style = FRAME_STYLES[frame_index - 1]
        assert f'class="render-target frame-{frame_index}"' in html
        assert f"background: {style.title_gradient};" in html
        assert f"background: {style.cta_gradient};" in html
        assert f"box-shadow: 0 0 {style.cta_glow_px}px {style.cta_glow_rgba};" in html
        assert f"transform: scale({style.icon_scale});" in html

    def test_frames_differ(self, generator):
        documents = {generator.generate("text", i, 900) for i in range(1, 5)}
        assert len(documents) == 4

    def test_embeds_text_with_line_breaks(self, generator):
        html = generator.generate("첫 줄\n둘째 줄\n\n넷째 줄", 1, 900)
        assert description_block(html) == "첫 줄<br>둘째 줄<br><br>넷째 줄"

    def test_escapes_markup_in_text(self, generator):
        html = generator.generate('<script>alert("x")</script>\nA & B', 1, 900)
        block = description_block(html)
        assert "<script>" not in html
        assert block == "&lt;script&gt;alert(&#34;x&#34;)&lt;/script&gt;<br>A &amp; B"

    def test_plain_text_preserved_in_order(self, generator):
        text = "item one: 100\nitem two: 200\nitem three: 300"
        block = description_block(generator.generate(text, 4, 900))
        assert block.replace("<br>", "\n") == text

    def test_default_content(self, generator):
        html = generator.generate("text", 1, 900)
        assert "THE BLACK SHOP" in html
        assert '<html lang="ko">' in html

    def test_custom_content(self, generator):
        content = TemplateContent(
            lang="en",
            document_title="Shop",
            title="MY SHOP",
            subtitle="Sub",
            info_lines=tuple(InfoLine(icon="*", text=f"Line {i}") for i in range(1, 5)),
            cta_text="Chat now",
            price_title="Prices",
            font_stylesheet=None,
        )
        html = generator.generate("text", 2, 900, content)
        assert "MY SHOP" in html
        assert '<html lang="en">' in html
        assert "fonts.googleapis.com" not in html
        assert '<li class="info-item highlighted"><span class="icon">*</span>Line 2</li>' in html

    def test_invalid_frame_index_raises(self, generator):
        with pytest.raises(HTMLGenerationError):
            generator.generate("text", 0, 900)
