"""
Tests for TextMetricsEngine.
"""

import pytest

from cvflow.engine.text_metrics import TextMetricsEngine, resolve_font_variant


@pytest.fixture
def metrics():
    return TextMetricsEngine()


@pytest.fixture
def body_style():
    return {"font_name": "Helvetica", "font_size": 10, "line_spacing": 1.2}


class TestResolveFontVariant:

    @pytest.mark.parametrize("name,bold,italic,expected", [
        ("Helvetica", False, False, "Helvetica"),
        ("Helvetica", True, False, "Helvetica-Bold"),
        ("Times-Roman", False, True, "Times-Italic"),
        ("Courier New", True, True, "Courier-BoldOblique"),
        ("Arial", False, False, "Helvetica"),
        ("Some Unknown Font", True, False, "Helvetica-Bold"),
        (None, False, False, "Helvetica"),
    ])
    def test_variants(self, name, bold, italic, expected):
        assert resolve_font_variant(name, bold, italic) == expected


class TestLayoutText:

    def test_empty_text_keeps_one_line_height(self, metrics, body_style):
        layout = metrics.layout_text("", body_style, 200)

        assert layout.line_count == 1
        assert layout.height == pytest.approx(12.0)

    def test_short_text_fits_on_one_line(self, metrics, body_style):
        layout = metrics.layout_text("Python", body_style, 200)

        assert layout.lines == ["Python"]
        assert layout.width == pytest.approx(metrics.string_width("Python", "Helvetica", 10))

    def test_long_text_wraps(self, metrics, body_style):
        text = "Designed and maintained reporting dashboards for programme staff " * 4

        layout = metrics.layout_text(text, body_style, 150)

        assert layout.line_count > 1
        assert layout.height == pytest.approx(layout.line_count * 12.0)
        assert all(metrics.string_width(line, "Helvetica", 10) <= 150 for line in layout.lines)
        assert " ".join(layout.lines) == " ".join(text.split())

    def test_overlong_word_gets_own_line(self, metrics, body_style):
        layout = metrics.layout_text("a " + "x" * 200 + " b", body_style, 50)

        assert layout.lines == ["a", "x" * 200, "b"]

    def test_no_max_width_means_single_line(self, metrics, body_style):
        text = "word " * 100

        assert metrics.layout_text(text, body_style).line_count == 1

    def test_bold_is_wider(self, metrics, body_style):
        regular = metrics.layout_text("Experience", body_style, 500)
        bold = metrics.layout_text("Experience", dict(body_style, bold=True), 500)

        assert bold.width > regular.width


def test_string_width_is_cached(metrics):
    first = metrics.string_width("cached", "Helvetica", 11)

    assert metrics.string_width("cached", "Helvetica", 11) == first
    assert ("cached", "Helvetica", 11) in metrics._width_cache
