"""Tests for content type detection."""
import pytest

from resourcefilter.content_types import TypeDetector


class TestTypeDetector:
    @pytest.mark.parametrize(
        "name,expected",
        [("site.css", "text/css"), ("index.html", "text/html"), ("logo.png", "image/png")],
    )
    def test_known_extensions(self, name, expected):
        assert TypeDetector().detect(name) == expected

    def test_javascript(self):
        assert "javascript" in TypeDetector().detect("foo.js")

    @pytest.mark.parametrize("name", ["moduleA", "", "file.unknownext"])
    def test_default_type(self, name):
        assert TypeDetector().detect(name) == "application/octet-stream"

    def test_custom_default(self):
        assert TypeDetector("text/plain").detect("templates") == "text/plain"
